"""
Conversión de archivos por lotes con progreso y cancelación.

La conversión en sí es simulada: cada archivo avanza en pasos de
STEP_PERCENT con una pausa entre pasos. Los lotes se reparten en un
ThreadPoolExecutor; los callbacks se invocan desde los hilos de trabajo,
así que la interfaz debe reenviarlos a su propio hilo.
"""

import enum
import logging
import threading
from concurrent import futures
from pathlib import Path

logger = logging.getLogger(__name__)

CONVERSION_TYPES = ("PDF a DOCX", "Redimensionar imagen")
STEP_PERCENT = 10


class TaskOutcome(enum.Enum):
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ConversionTask:
    """Convierte un archivo informando estado y porcentaje de avance."""

    def __init__(self, path, conversion_type: str, cancel_event=None,
                 step_delay: float = 0.1, on_status=None, on_progress=None):
        self.path = Path(path)
        self.conversion_type = conversion_type
        self.progress = 0
        self._cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self._step_delay = step_delay
        self._on_status = on_status
        self._on_progress = on_progress

    @property
    def name(self) -> str:
        return self.path.name

    def run(self) -> TaskOutcome:
        try:
            for progress in range(STEP_PERCENT, 101, STEP_PERCENT):
                # wait() devuelve True en cuanto se pide cancelar.
                if self._cancel_event.wait(self._step_delay):
                    self._report(f"Conversión cancelada: {self.name}")
                    return TaskOutcome.CANCELLED
                self._convert_step(progress)
                self.progress = progress
                if self._on_progress is not None:
                    self._on_progress(progress)
                self._report(f"Convirtiendo {self.name} ({progress}%)")
        except Exception:
            logger.exception("Error durante la conversión de %s", self.path)
            self._report(f"Error durante la conversión de: {self.name}")
            return TaskOutcome.FAILED

        self._report(f"Conversión completa: {self.name}")
        return TaskOutcome.COMPLETED

    def _convert_step(self, progress: int):
        logger.debug("%s: %s al %d%%", self.conversion_type, self.path, progress)

    def _report(self, message: str):
        if self._on_status is not None:
            self._on_status(message)


class ConversionBatch:
    """Lote de conversiones repartido en un pool de hilos."""

    task_class = ConversionTask

    def __init__(self, paths, conversion_type: str, max_workers: int = 5,
                 step_delay: float = 0.1, on_status=None, on_progress=None):
        if conversion_type not in CONVERSION_TYPES:
            raise ValueError(f"Tipo de conversión desconocido: {conversion_type}")

        self.conversion_type = conversion_type
        self._max_workers = max_workers
        self._on_progress = on_progress
        self._cancel_event = threading.Event()
        self._executor = None
        self._futures: list[futures.Future] = []
        self._remaining = 0
        self._lock = threading.Lock()
        self.tasks = [
            self.task_class(
                path,
                conversion_type,
                cancel_event=self._cancel_event,
                step_delay=step_delay,
                on_status=on_status,
                on_progress=self._task_progressed,
            )
            for path in paths
        ]

    @property
    def overall_progress(self) -> int:
        if not self.tasks:
            return 100
        return sum(task.progress for task in self.tasks) // len(self.tasks)

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def running(self) -> bool:
        """True mientras quede alguna tarea del lote sin terminar."""
        return self._executor is not None and not all(f.done() for f in self._futures)

    def start(self):
        if self._executor is not None:
            raise RuntimeError("El lote ya se inició")

        logger.info("Iniciando %d conversiones (%s)", len(self.tasks), self.conversion_type)
        self._remaining = len(self.tasks)
        self._executor = futures.ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix="conversion",
        )
        self._futures = [self._executor.submit(task.run) for task in self.tasks]
        if not self._futures:
            self._executor.shutdown(wait=False)
        for future in self._futures:
            future.add_done_callback(self._task_finished)

    def cancel(self):
        logger.info("Cancelando lote de %d conversiones", len(self.tasks))
        self._cancel_event.set()
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)

    def wait(self, timeout: float | None = None) -> list[TaskOutcome]:
        """Espera a que terminen todas las tareas y devuelve sus resultados.

        Raises:
            RuntimeError: el lote no se ha iniciado.
            TimeoutError: quedan tareas pendientes al vencer `timeout`.
        """
        if self._executor is None:
            raise RuntimeError("El lote no se ha iniciado")

        _done, not_done = futures.wait(self._futures, timeout=timeout)
        if not_done:
            raise TimeoutError(f"{len(not_done)} conversiones siguen en curso")

        self._executor.shutdown(wait=False)
        return [
            TaskOutcome.CANCELLED if future.cancelled() else future.result()
            for future in self._futures
        ]

    def _task_progressed(self, _progress: int):
        if self._on_progress is not None:
            self._on_progress(self.overall_progress)

    def _task_finished(self, _future: futures.Future):
        with self._lock:
            self._remaining -= 1
            last = self._remaining == 0
        if last:
            # Libera los hilos del pool aunque nadie llame a wait().
            logger.info("Lote terminado (%s)", self.conversion_type)
            self._executor.shutdown(wait=False)
