"""
Evaluador de expresiones aritméticas de la calculadora básica.

Recorre la cadena de entrada una sola vez, de izquierda a derecha, sin
construir un árbol intermedio. Reconoce números decimales, los cuatro
operadores binarios (+ - * /) y tres familias de corchetes: (), [] y {}.

Contrato de interfaz:
    - evaluate(expression: str) -> float
    - Los fallos se informan con EvaluationError, cuyo atributo `kind`
      es un ErrorKind.
"""

from __future__ import annotations

import enum
import logging
import operator
from dataclasses import dataclass
from typing import Iterator

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════
#  Errores
# ═════════════════════════════════════════════════════════════════

class ErrorKind(enum.Enum):
    """Tipos de fallo que puede informar el evaluador."""

    MALFORMED_NUMBER = "malformed-number"
    UNRECOGNIZED_TOKEN = "unrecognized-token"
    MALFORMED_EXPRESSION = "malformed-expression"
    ARITHMETIC = "arithmetic"
    INTERNAL = "internal"


class EvaluationError(ValueError):
    """Fallo al evaluar una expresión.

    Attributes:
        kind: tipo de fallo (ErrorKind).
        position: posición (base 0) del símbolo que lo provocó, si se conoce.
    """

    def __init__(self, kind: ErrorKind, message: str, position: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.position = position


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    """División entre un operando derecho exactamente igual a cero."""

    def __init__(self, position: int | None = None):
        super().__init__(ErrorKind.ARITHMETIC, "División por cero", position)


# ═════════════════════════════════════════════════════════════════
#  Analizador léxico
# ═════════════════════════════════════════════════════════════════

DIGITS = frozenset("0123456789")
_OPERAND_CHARS = DIGITS | {"."}

PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}
BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSING_BRACKETS = frozenset(BRACKET_PAIRS.values())

_OPERATIONS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
}


class TokenKind(enum.Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int
    value: float | None = None


def scan(expression: str) -> Iterator[Token]:
    """Genera los símbolos de la expresión de izquierda a derecha.

    Solo el espacio ASCII se considera separador. Un número es la secuencia
    más larga de dígitos y puntos; se convierte con float() y, si la
    conversión falla, se informa como número mal formado.

    Raises:
        EvaluationError: MALFORMED_NUMBER o UNRECOGNIZED_TOKEN.
    """
    i = 0
    length = len(expression)

    while i < length:
        ch = expression[i]

        if ch == " ":
            i += 1
            continue

        if ch in _OPERAND_CHARS:
            start = i
            while i < length and expression[i] in _OPERAND_CHARS:
                i += 1
            text = expression[start:i]
            yield Token(TokenKind.NUMBER, text, start, _parse_number(text, start))
            continue

        if ch in PRECEDENCE:
            kind = TokenKind.OPERATOR
        elif ch in BRACKET_PAIRS:
            kind = TokenKind.OPEN
        elif ch in _CLOSING_BRACKETS:
            kind = TokenKind.CLOSE
        else:
            raise EvaluationError(
                ErrorKind.UNRECOGNIZED_TOKEN,
                f"Símbolo no reconocido {ch!r} en la posición {i}",
                i,
            )

        yield Token(kind, ch, i)
        i += 1


def _parse_number(text: str, position: int) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise EvaluationError(
            ErrorKind.MALFORMED_NUMBER,
            f"Número mal formado {text!r} en la posición {position}",
            position,
        ) from exc


# ═════════════════════════════════════════════════════════════════
#  Núcleo de reducción
# ═════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class _BinaryOp:
    symbol: str
    position: int

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self.symbol]


@dataclass(frozen=True)
class _OpenBracket:
    family: str
    position: int

    def closes_with(self, symbol: str) -> bool:
        return BRACKET_PAIRS[self.family] == symbol


class _Reduction:
    """Pilas de trabajo de una sola evaluación.

    `pending` mezcla operadores binarios y corchetes abiertos; la familia
    del corchete viaja en la propia entrada, así que no hace falta una pila
    paralela de corchetes.
    """

    def __init__(self):
        self.operands: list[float] = []
        self.pending: list[_BinaryOp | _OpenBracket] = []
        self.expect_operand = True

    # ── Manejadores por tipo de símbolo ──────────────────────────

    def feed(self, token: Token):
        if token.kind is TokenKind.NUMBER:
            self._require_state(token, expect_operand=True)
            self.operands.append(token.value)
            self.expect_operand = False
        elif token.kind is TokenKind.OPERATOR:
            self._require_state(token, expect_operand=False)
            incoming = PRECEDENCE[token.text]
            while (
                self.pending
                and isinstance(self.pending[-1], _BinaryOp)
                and incoming <= self.pending[-1].precedence
            ):
                self._reduce()
            self.pending.append(_BinaryOp(token.text, token.position))
            self.expect_operand = True
        elif token.kind is TokenKind.OPEN:
            self._require_state(token, expect_operand=True)
            self.pending.append(_OpenBracket(token.text, token.position))
        else:
            self._require_state(token, expect_operand=False)
            self._close(token)

    def finish(self) -> float:
        if self.expect_operand:
            raise EvaluationError(
                ErrorKind.MALFORMED_EXPRESSION,
                "La expresión termina antes de tiempo",
            )

        while self.pending:
            top = self.pending[-1]
            if isinstance(top, _OpenBracket):
                raise EvaluationError(
                    ErrorKind.MALFORMED_EXPRESSION,
                    f"Falta cerrar '{top.family}' de la posición {top.position}",
                    top.position,
                )
            self._reduce()

        if len(self.operands) != 1:
            raise EvaluationError(
                ErrorKind.MALFORMED_EXPRESSION,
                f"Quedaron {len(self.operands)} operandos al final de la expresión",
            )
        return self.operands[0]

    # ── Auxiliares ───────────────────────────────────────────────

    def _require_state(self, token: Token, expect_operand: bool):
        if self.expect_operand == expect_operand:
            return
        what = "un operando" if self.expect_operand else "un operador"
        raise EvaluationError(
            ErrorKind.MALFORMED_EXPRESSION,
            f"Se esperaba {what} en la posición {token.position}, "
            f"se encontró {token.text!r}",
            token.position,
        )

    def _close(self, token: Token):
        while self.pending and isinstance(self.pending[-1], _BinaryOp):
            self._reduce()

        if not self.pending:
            raise EvaluationError(
                ErrorKind.MALFORMED_EXPRESSION,
                f"'{token.text}' en la posición {token.position} no tiene apertura",
                token.position,
            )

        opening = self.pending.pop()
        if not opening.closes_with(token.text):
            raise EvaluationError(
                ErrorKind.MALFORMED_EXPRESSION,
                f"'{token.text}' en la posición {token.position} no cierra "
                f"'{opening.family}' de la posición {opening.position}",
                token.position,
            )

    def _reduce(self):
        op = self.pending.pop()
        if len(self.operands) < 2:
            raise EvaluationError(
                ErrorKind.MALFORMED_EXPRESSION,
                f"Faltan operandos para '{op.symbol}' en la posición {op.position}",
                op.position,
            )

        # El primero que sale es el operando derecho.
        b = self.operands.pop()
        a = self.operands.pop()
        if op.symbol == "/" and b == 0.0:
            raise DivisionByZeroError(op.position)
        self.operands.append(_OPERATIONS[op.symbol](a, b))


class ExpressionEvaluator:
    """Evalúa expresiones infijas con precedencia y corchetes anidados.

    No guarda estado entre llamadas; una misma instancia puede usarse desde
    varios hilos a la vez.
    """

    def evaluate(self, expression: str) -> float:
        """Reduce la expresión a un único número.

        Raises:
            EvaluationError: entrada inválida. DivisionByZeroError (subclase)
                para la división entre cero exacto.
        """
        try:
            reduction = _Reduction()
            for token in scan(expression):
                reduction.feed(token)
            return reduction.finish()
        except EvaluationError:
            raise
        except Exception as exc:
            logger.exception("Fallo interno al evaluar %r", expression)
            raise EvaluationError(
                ErrorKind.INTERNAL, "Error interno del evaluador"
            ) from exc


_DEFAULT_EVALUATOR = ExpressionEvaluator()


def evaluate(expression: str) -> float:
    """Atajo de ExpressionEvaluator().evaluate(expression)."""
    return _DEFAULT_EVALUATOR.evaluate(expression)
