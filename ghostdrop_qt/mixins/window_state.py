from PySide6.QtWidgets import QMessageBox

from ghostdrop.constants import QT_WINDOW_DEFAULT_GEOMETRY, QT_WINDOW_MIN_HEIGHT, QT_WINDOW_MIN_WIDTH


def parse_geometry(geometry):
    try:
        width_text, height_text = str(geometry).lower().split("x")
        width, height = int(width_text), int(height_text)
    except (TypeError, ValueError):
        width_text, height_text = QT_WINDOW_DEFAULT_GEOMETRY.split("x")
        width, height = int(width_text), int(height_text)
    return max(QT_WINDOW_MIN_WIDTH, width), max(QT_WINDOW_MIN_HEIGHT, height)


class WindowStateMixin:
    def _restore_window_geometry(self):
        self.resize(*parse_geometry(self.config.get("qt_window_geometry", QT_WINDOW_DEFAULT_GEOMETRY)))

    def closeEvent(self, event):
        self._poll_timer.stop()
        self._highlight_timer.stop()
        if hasattr(self, "thread_pool"):
            self.thread_pool.waitForDone(2000)
        self.context.close()
        self.assistant.close()
        self.config.set("qt_window_geometry", f"{self.width()}x{self.height()}")
        super().closeEvent(event)

    def _set_status(self, text):
        self.status_lbl.setText(text)

    def _show_error(self, text):
        self._set_status(text)
        QMessageBox.warning(self, "GhostDrop", text)


__all__ = ["WindowStateMixin", "parse_geometry"]
