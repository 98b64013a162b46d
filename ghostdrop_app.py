import faulthandler
import logging
import sys

faulthandler.enable()  # Dump traceback on segfault/crash to stderr

from PySide6.QtWidgets import QApplication

from ghostdrop.constants import APP_NAME
from ghostdrop.infra.config_store import Config
from ghostdrop_qt.window import GhostDropWindow


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    config = Config()
    if config.load_error:
        logging.getLogger(__name__).warning("Ignoring unreadable config file: %s", config.load_error)
    window = GhostDropWindow(config=config)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
