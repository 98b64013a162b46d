import logging
import traceback

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

logger = logging.getLogger(__name__)


class WorkerSignals(QObject):
    result = Signal(object)
    error = Signal(object)


class Worker(QRunnable):
    """Runs ``fn`` on the thread pool and reports back through Qt signals.

    ``error`` carries the exception itself so the GUI can word the message.
    """

    def __init__(self, fn, *args, **kwargs):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = WorkerSignals()

    @Slot()
    def run(self):
        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception as exc:
            logger.debug("Worker task failed:\n%s", traceback.format_exc())
            self.signals.error.emit(exc)
            return
        self.signals.result.emit(result)
