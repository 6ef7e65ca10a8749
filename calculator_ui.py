"""
Interfaz gráfica de la calculadora básica.

Una línea de entrada, un teclado con operadores y corchetes, y una fila
de resultado. La evaluación corre en un hilo aparte y el resultado vuelve
al hilo de tkinter con root.after(0, ...).
"""

import logging
import threading
import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine
from expression_evaluator import EvaluationError

logger = logging.getLogger(__name__)

ERROR_TEXT = "Error: Expresión inválida"

# Cada fila del teclado es una cadena de teclas separadas por espacios.
KEY_ROWS = (
    "( ) [ ] { }",
    "7 8 9 /",
    "4 5 6 *",
    "1 2 3 -",
    "0 . ⌫ +",
)

OPERATOR_KEYS = frozenset("+-*/")
BRACKET_KEYS = frozenset("()[]{}")


def key_style(key: str) -> str:
    """Nombre del estilo de color de una tecla."""
    if key in OPERATOR_KEYS:
        return "operator"
    if key in BRACKET_KEYS:
        return "bracket"
    if key == "⌫":
        return "control"
    return "digit"


def compute_spans(cols_in_row: int, max_cols: int) -> list[int]:
    """Reparte max_cols columnas de la rejilla entre cols_in_row teclas."""
    base, extra = divmod(max_cols, cols_in_row)
    spans = [base] * cols_in_row
    spans[-1] += extra
    return spans


class CalculatorApp:
    """Ventana de la calculadora: entrada, teclado y resultado."""

    STYLES = {
        "window":   {"bg": "#F2F2F2"},
        "digit":    {"bg": "#FFFFFF", "fg": "#202020"},
        "operator": {"bg": "#FFB74D", "fg": "#202020"},
        "bracket":  {"bg": "#E0E0E0", "fg": "#202020"},
        "control":  {"bg": "#BDBDBD", "fg": "#202020"},
        "calculate": {"bg": "#4CAF50", "fg": "#FFFFFF"},
        "result":   {"fg": "#1B5E20"},
        "error":    {"fg": "#B71C1C"},
    }

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title("Calculadora Básica")
        self.root.configure(bg=self.STYLES["window"]["bg"])

        self.engine = engine if engine is not None else CalculatorEngine()
        self._font = tkfont.Font(family="Courier", size=14)

        self._build_input()
        self._build_keys()
        self._build_result()

        self.input_entry.focus_set()

    # ── Construcción ─────────────────────────────────────────────

    def _build_input(self):
        self.input_var = tk.StringVar()
        self.input_entry = tk.Entry(self.root, textvariable=self.input_var,
                                    font=self._font)
        self.input_entry.pack(fill="x", padx=8, pady=(8, 4))
        self.input_entry.bind("<Return>", lambda _e: self.calculate())
        self.input_entry.bind("<KP_Enter>", lambda _e: self.calculate())
        self.root.bind("<Escape>", lambda _e: self.clear())

    def _build_keys(self):
        grid = tk.Frame(self.root, bg=self.STYLES["window"]["bg"])
        grid.pack(fill="both", expand=True, padx=8)

        rows = [row.split() for row in KEY_ROWS]
        width = max(len(keys) for keys in rows)
        for col in range(width):
            grid.columnconfigure(col, weight=1, uniform="key")

        for r, keys in enumerate(rows):
            col = 0
            for key, span in zip(keys, compute_spans(len(keys), width)):
                tk.Button(
                    grid, text=key, font=self._font, relief="groove",
                    command=lambda k=key: self._press(k),
                    **self.STYLES[key_style(key)],
                ).grid(row=r, column=col, columnspan=span,
                       sticky="nsew", padx=1, pady=1)
                col += span
            grid.rowconfigure(r, weight=1)

        actions = tk.Frame(self.root, bg=self.STYLES["window"]["bg"])
        actions.pack(fill="x", padx=8, pady=4)
        tk.Button(actions, text="AC", font=self._font, command=self.clear,
                  **self.STYLES["control"]).pack(side="left")
        tk.Button(actions, text="Calcular", font=self._font,
                  command=self.calculate,
                  **self.STYLES["calculate"]).pack(side="left", fill="x",
                                                   expand=True, padx=(4, 0))

    def _build_result(self):
        row = tk.Frame(self.root, bg=self.STYLES["window"]["bg"])
        row.pack(fill="x", padx=8, pady=(0, 8))

        tk.Label(row, text="Resultado:", bg=self.STYLES["window"]["bg"]).pack(side="left")

        self.result_var = tk.StringVar()
        self.result_entry = tk.Entry(row, textvariable=self.result_var,
                                     state="readonly", font=self._font)
        self.result_entry.pack(side="left", fill="x", expand=True, padx=4)

        self.more_button = tk.Button(row, text="Más dígitos", state="disabled",
                                     command=self.request_more_digits)
        self.more_button.pack(side="left")
        tk.Button(row, text="Copiar", command=self.copy_result).pack(side="left", padx=(4, 0))

    # ── Acciones ─────────────────────────────────────────────────

    def _press(self, key: str):
        if key == "⌫":
            pos = self.input_entry.index(tk.INSERT)
            if pos > 0:
                self.input_entry.delete(pos - 1)
        else:
            self.input_entry.insert(tk.INSERT, key)
        self.input_entry.focus_set()

    def clear(self):
        self.input_var.set("")
        self._show("", "result")
        self.more_button.config(state="disabled")

    def calculate(self):
        expression = self.input_var.get()
        if not expression.strip():
            return

        def _run():
            try:
                text = self.engine.evaluate(expression)
            except EvaluationError as exc:
                logger.info("No se pudo evaluar %r: %s", expression, exc.kind.value)
                self.root.after(0, self._show, ERROR_TEXT, "error")
                return
            self.root.after(0, self._show, text, "result")

        threading.Thread(target=_run, daemon=True).start()

    def request_more_digits(self):
        if not self._can_expand():
            return

        def _run():
            text = self.engine.request_more_precision()
            self.root.after(0, self._show, text, "result")

        threading.Thread(target=_run, daemon=True).start()

    def copy_result(self):
        self.root.clipboard_clear()
        self.root.clipboard_append(self.result_var.get())

    # ── Auxiliares ───────────────────────────────────────────────

    def _can_expand(self) -> bool:
        can_expand = getattr(self.engine, "can_expand_precision", None)
        return can_expand is not None and can_expand()

    def _show(self, text: str, style: str):
        self.result_entry.config(**self.STYLES[style])
        self.result_var.set(text)
        self.result_entry.xview_moveto(0.0)
        self.more_button.config(state="normal" if self._can_expand() else "disabled")
