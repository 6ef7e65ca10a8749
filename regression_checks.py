from calculator_engine import CalculatorEngine
from expression_evaluator import ErrorKind, EvaluationError, evaluate, scan
from precise_display_engine import PreciseDisplayCalculatorEngine
import sys


def _kind_of(expr: str):
	try:
		evaluate(expr)
	except EvaluationError as exc:
		return exc.kind
	return None


def _display(expr: str, *, initial_digits: int = 18, requests: int = 0) -> str:
	engine = PreciseDisplayCalculatorEngine(initial_digits=initial_digits, precision_step=24)
	text = engine.evaluate(expr)
	for _ in range(requests):
		text = engine.request_more_precision()
	return text


def inspect_expression(expr: str) -> None:
	"""Imprime los símbolos reconocidos y el resultado (o el fallo)."""
	print("Expression inspection")
	print(f"expr:   {expr!r}")
	try:
		tokens = list(scan(expr))
	except EvaluationError as exc:
		print(f"scan failed: {exc.kind.value} at {exc.position}: {exc}")
		return

	print("tokens:")
	for tok in tokens:
		value = "" if tok.value is None else f" = {tok.value!r}"
		print(f"  {tok.position:>3}  {tok.kind.value:<8} {tok.text}{value}")

	try:
		print(f"result: {evaluate(expr)!r}")
	except EvaluationError as exc:
		position = "" if exc.position is None else f" at {exc.position}"
		print(f"failed: {exc.kind.value}{position}: {exc}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	engine = CalculatorEngine()
	for expr, expected in (
		("3 + 4 * 2", "11"),
		("(1 + 2) * 3", "9"),
		("10 - 2 - 3", "5"),
		("{[(1+2)*3] - 4} / 5", "1"),
		("8 / 4 / 2", "1"),
		("0.1 + 0.2", "0.3"),
	):
		expected_actual.append((expr, expected, engine.evaluate(expr)))

	for expr, kind in (
		("1 / 0", ErrorKind.ARITHMETIC),
		("2 ++ 3", ErrorKind.MALFORMED_EXPRESSION),
		("2 + a", ErrorKind.UNRECOGNIZED_TOKEN),
		("1.2.3 + 1", ErrorKind.MALFORMED_NUMBER),
		("(1 + 2]", ErrorKind.MALFORMED_EXPRESSION),
		("-1", ErrorKind.MALFORMED_EXPRESSION),
		("1 +", ErrorKind.MALFORMED_EXPRESSION),
		("", ErrorKind.MALFORMED_EXPRESSION),
	):
		checks.append((f"{expr!r} fails with {kind.value}", _kind_of(expr) is kind))

	checks.append((
		"division by zero is also a ZeroDivisionError",
		isinstance(_raised("1/0"), ZeroDivisionError),
	))
	checks.append((
		"equal precedence reduces left to right",
		evaluate("2 - 3 - 4") == (2 - 3) - 4 and evaluate("9/3/3") == (9 / 3) / 3,
	))
	checks.append((
		"bracket families are interchangeable",
		evaluate("(1+2)*3") == evaluate("[1+2]*3") == evaluate("{1+2}*3"),
	))

	expected_actual.append((
		"0.1 shown with 18 digits",
		"0.100000000000000006",
		_display("0.1"),
	))
	checks.append((
		"0.1 exact expansion stops growing",
		_display("0.1", requests=5) == _display("0.1", requests=6),
	))
	checks.append((
		"precise display keeps integers plain",
		_display("6 * 7") == "42",
	))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		if expected != actual:
			failed.append(label)
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


def _raised(expr: str):
	try:
		evaluate(expr)
	except EvaluationError as exc:
		return exc
	return None


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "{[(1+2)*3] - 4} / 5"
	if "--inspect" in sys.argv:
		try:
			expr = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing expression after --inspect")
		inspect_expression(expr)
	else:
		run_regressions()
