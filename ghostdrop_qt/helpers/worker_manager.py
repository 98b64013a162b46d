from collections.abc import Callable
import logging

from PySide6.QtCore import QThreadPool

from ghostdrop_qt.workers import Worker

logger = logging.getLogger(__name__)


class WorkerManager:
    def __init__(
        self,
        thread_pool: QThreadPool,
        on_default_error: Callable[[Exception], None] | None = None,
    ) -> None:
        self.thread_pool = thread_pool
        self.on_default_error = on_default_error

    def submit(
        self,
        fn: Callable[[], object],
        on_result: Callable[[object], None],
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        active_error_handler = on_error or self._on_worker_error

        def _handle_result(payload: object) -> None:
            try:
                on_result(payload)
            except Exception as exc:
                logger.exception("Result handler failed")
                active_error_handler(exc)

        worker = Worker(fn)
        worker.signals.result.connect(_handle_result)
        worker.signals.error.connect(active_error_handler)
        self.thread_pool.start(worker)

    def _on_worker_error(self, exc: Exception) -> None:
        logger.error("Background operation failed: %s", exc)
        if self.on_default_error is not None:
            self.on_default_error(exc)


__all__ = ["WorkerManager"]
