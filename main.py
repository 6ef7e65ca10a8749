"""Punto de entrada de la calculadora básica y del conversor de archivos.

Uso:
    python main.py               # calculadora
    python main.py --precise     # calculadora con dígitos exactos progresivos
    python main.py --converter   # conversor de archivos por lotes
"""

import logging
import sys
import tkinter as tk

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp


USE_PRECISE_DISPLAY = False
PD_INITIAL_DIGITS = 18
PD_PRECISION_STEP = 24

CONVERTER_MAX_WORKERS = 5
CONVERTER_STEP_DELAY = 0.1

LOG_LEVEL = logging.INFO


def run_calculator(precise: bool = USE_PRECISE_DISPLAY):
    root = tk.Tk()
    root.geometry("420x520")
    root.minsize(380, 480)
    if precise:
        from precise_display_engine import PreciseDisplayCalculatorEngine

        engine = PreciseDisplayCalculatorEngine(
            initial_digits=PD_INITIAL_DIGITS,
            precision_step=PD_PRECISION_STEP,
        )
    else:
        engine = CalculatorEngine()
    CalculatorApp(root, engine=engine)
    root.mainloop()


def run_converter():
    from converter_ui import FileConverterApp

    root = tk.Tk()
    FileConverterApp(
        root,
        max_workers=CONVERTER_MAX_WORKERS,
        step_delay=CONVERTER_STEP_DELAY,
    )
    root.mainloop()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if "--converter" in argv:
        run_converter()
    else:
        run_calculator(precise=USE_PRECISE_DISPLAY or "--precise" in argv)


if __name__ == "__main__":
    main()
