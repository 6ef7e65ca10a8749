"""
Interfaz gráfica del conversor de archivos por lotes.

Los avisos de los hilos de trabajo se reenvían al hilo de tkinter
con root.after(0, ...).
"""

import logging
import tkinter as tk
from tkinter import filedialog, ttk

from file_conversion import CONVERSION_TYPES, ConversionBatch

logger = logging.getLogger(__name__)


class FileConverterApp:
    """Ventana del conversor: lista de archivos, progreso global y estado."""

    INITIAL_STATUS = "Selecciona archivos y elige el tipo de conversión."

    def __init__(self, root: tk.Tk, max_workers: int = 5, step_delay: float = 0.1):
        self.root = root
        self.root.title("Conversor de archivos")

        self._max_workers = max_workers
        self._step_delay = step_delay
        self._batch: ConversionBatch | None = None

        self._create_toolbar()
        self._create_file_list()
        self._create_footer()

    # ── Barra superior ───────────────────────────────────────────

    def _create_toolbar(self):
        frame = ttk.Frame(self.root, padding=6)
        frame.pack(fill="x")

        ttk.Label(frame, text="Tipo de conversión:").pack(side="left")

        self.conversion_var = tk.StringVar(value=CONVERSION_TYPES[0])
        self.conversion_combo = ttk.Combobox(
            frame, textvariable=self.conversion_var,
            values=CONVERSION_TYPES, state="readonly", width=22,
        )
        self.conversion_combo.pack(side="left", padx=6)

        ttk.Button(frame, text="Iniciar conversión",
                   command=self._start).pack(side="left", padx=(0, 6))
        ttk.Button(frame, text="Cancelar",
                   command=self._cancel).pack(side="left")

    # ── Lista de archivos ────────────────────────────────────────

    def _create_file_list(self):
        frame = ttk.Frame(self.root, padding=(6, 0))
        frame.pack(fill="both", expand=True)

        scrollbar = ttk.Scrollbar(frame, orient="vertical")
        self.file_list = tk.Listbox(frame, height=12, width=70,
                                    yscrollcommand=scrollbar.set)
        scrollbar.config(command=self.file_list.yview)
        scrollbar.pack(side="right", fill="y")
        self.file_list.pack(side="left", fill="both", expand=True)

    # ── Progreso y estado ────────────────────────────────────────

    def _create_footer(self):
        frame = ttk.Frame(self.root, padding=6)
        frame.pack(fill="x")

        self.progress_bar = ttk.Progressbar(frame, maximum=100, mode="determinate")
        self.progress_bar.pack(fill="x")

        self.status_var = tk.StringVar(value=self.INITIAL_STATUS)
        ttk.Label(frame, textvariable=self.status_var).pack(fill="x", pady=(4, 0))

    # ── Acciones ─────────────────────────────────────────────────

    def _start(self):
        if self._batch is not None and self._batch.running:
            self.status_var.set("Ya hay una conversión en curso.")
            return

        paths = filedialog.askopenfilenames(parent=self.root)
        if not paths:
            return

        for path in paths:
            self.file_list.insert("end", path)

        self.progress_bar["value"] = 0
        self.status_var.set("Iniciando conversión...")

        self._batch = ConversionBatch(
            paths,
            self.conversion_var.get(),
            max_workers=self._max_workers,
            step_delay=self._step_delay,
            on_status=lambda msg: self.root.after(0, self.status_var.set, msg),
            on_progress=lambda pct: self.root.after(0, self._set_progress, pct),
        )
        self._batch.start()

    def _cancel(self):
        if self._batch is None:
            return
        self._batch.cancel()
        self.status_var.set("Conversión cancelada.")

    def _set_progress(self, percent: int):
        self.progress_bar["value"] = percent
