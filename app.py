import sys
from dotenv import load_dotenv

load_dotenv()   # before Settings reads the environment

from PySide6.QtWidgets import QApplication

from core.config import Settings
from ui.main_window import MainWindow
from utils.logger import setup_logger


def main():
    settings = Settings.from_env()
    setup_logger(log_file=settings.log_file, level=settings.log_level, library_level=settings.library_log_level)

    app = QApplication(sys.argv)
    w = MainWindow(settings)
    w.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
