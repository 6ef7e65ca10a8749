"""
Motor de cálculo para la calculadora básica.

Este módulo provee la clase CalculatorEngine que evalúa expresiones
aritméticas y da formato al resultado. Está diseñado como módulo
independiente que puede ser reemplazado por implementaciones alternativas
(e.g., PreciseDisplayCalculatorEngine, que muestra más dígitos).

Contrato de interfaz:
    - evaluate(expression: str) -> str
    - last_error_kind: ErrorKind | None
"""

import logging
import math

from expression_evaluator import ErrorKind, EvaluationError, ExpressionEvaluator

logger = logging.getLogger(__name__)


class CalculatorEngine:
    """Evalúa expresiones con los cuatro operadores y tres tipos de corchete."""

    def __init__(self):
        self._evaluator = ExpressionEvaluator()
        self._last_error_kind: ErrorKind | None = None

    @property
    def last_error_kind(self) -> ErrorKind | None:
        return self._last_error_kind

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Raises:
            EvaluationError: expresión inválida; `kind` indica el motivo.
            DivisionByZeroError: división por cero (también ZeroDivisionError).
        """
        logger.debug("Evaluando %r", expression)
        try:
            result = self._evaluator.evaluate(expression)
        except EvaluationError as exc:
            self._last_error_kind = exc.kind
            logger.info("Expresión inválida (%s): %s", exc.kind.value, exc)
            raise

        self._last_error_kind = None
        return self._format_result(result)

    # ── Formato del resultado ────────────────────────────────────

    @staticmethod
    def _format_result(value: float) -> str:
        if math.isnan(value):
            return "NaN"
        if value == float("inf"):
            return "∞"
        if value == float("-inf"):
            return "-∞"
        if value == int(value) and abs(value) < 1e15:
            return str(int(value))
        return f"{value:.15g}"
