"""Motor de cálculo que muestra el valor exacto del resultado con dígitos progresivos."""

from __future__ import annotations

import logging
import math

from expression_evaluator import ErrorKind, EvaluationError, ExpressionEvaluator

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc

logger = logging.getLogger(__name__)


class PreciseDisplayCalculatorEngine:
    """Evalúa en doble precisión y muestra la expansión decimal exacta del resultado.

    El cálculo es el mismo que el de CalculatorEngine; solo cambia la
    presentación. Un double tiene una expansión decimal finita, así que al
    pedir más dígitos el texto termina por dejar de cambiar.
    """

    SCI_NOTATION_EXP_LIMIT = 12
    # Un double nunca necesita más de 767 dígitos significativos.
    MAX_DIGITS = 800

    def __init__(self, initial_digits: int = 18, precision_step: int = 24):
        self._evaluator = ExpressionEvaluator()

        self._initial_digits = min(max(8, initial_digits), self.MAX_DIGITS)
        self._precision_step = max(8, precision_step)

        self._working_digits = self._initial_digits
        self._last_value: float | None = None
        self._last_error_kind: ErrorKind | None = None

    @property
    def last_error_kind(self) -> ErrorKind | None:
        return self._last_error_kind

    @property
    def working_digits(self) -> int:
        return self._working_digits

    def evaluate(self, expression: str) -> str:
        self._working_digits = self._initial_digits
        try:
            value = self._evaluator.evaluate(expression)
        except EvaluationError as exc:
            self._last_value = None
            self._last_error_kind = exc.kind
            logger.info("Expresión inválida (%s): %s", exc.kind.value, exc)
            raise

        self._last_error_kind = None
        self._last_value = value
        return self._format_result(value, self._working_digits)

    def can_expand_precision(self) -> bool:
        return self._last_value is not None

    def request_more_precision(self) -> str:
        if self._last_value is None:
            raise ValueError("No hay cálculo previo")

        self._working_digits = min(
            self._working_digits + self._precision_step,
            self.MAX_DIGITS,
        )
        logger.debug("Mostrando %d dígitos", self._working_digits)
        return self._format_result(self._last_value, self._working_digits)

    @staticmethod
    def _format_result(value: float, digits: int) -> str:
        if math.isnan(value):
            return "NaN"
        if value == float("inf"):
            return "∞"
        if value == float("-inf"):
            return "-∞"
        if value == 0:
            return "0"

        # mpf(float) es exacto con la precisión por defecto de 53 bits.
        exact = mp.mpf(value)

        if mp.floor(exact) == exact and abs(exact) < mp.mpf("1e18"):
            return str(int(exact))

        exponent = int(mp.floor(mp.log10(abs(exact))))
        if abs(exponent) >= PreciseDisplayCalculatorEngine.SCI_NOTATION_EXP_LIMIT:
            return mp.nstr(exact, n=digits, min_fixed=0, max_fixed=0)

        return mp.nstr(exact, n=digits)
