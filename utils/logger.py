"""Logging for iTunes Store Lookup.

Module loggers are plain ``logging.getLogger(__name__)`` (``core.store``,
``ui.main_window``, ...), so the handlers live on the root logger. HTTP
libraries get their own, usually quieter, level, and Qt's internal warnings
are forwarded to a ``qt`` logger instead of going straight to stderr.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import coloredlogs
from PySide6.QtCore import QtMsgType, qInstallMessageHandler

LIBRARY_LOGGERS = ("urllib3", "requests", "charset_normalizer")

QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}

qt_logger = logging.getLogger("qt")


def qt_message_handler(mode, context, message):
    qt_logger.log(QT_LEVELS.get(mode, logging.WARNING), "%s", message)


def setup_logger(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    library_level: str = "WARNING",
    name: Optional[str] = None,
    console: bool = True,
    capture_qt: bool = True,
) -> logging.Logger:
    """Configure handlers for the app.

    Args:
        log_file: Rotating log file (1 MB x 3); None logs to the console only
        level: Level for the app's own loggers
        library_level: Level for urllib3/requests, which are chatty at DEBUG
        name: Logger that receives the handlers (None = root)
        console: Whether to log to stderr with colors
        capture_qt: Route Qt warnings (e.g. QThread misuse) through logging

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(coloredlogs.ColoredFormatter(
            fmt='%(asctime)s %(levelname)-7s [%(name)s] %(message)s',
            datefmt='%H:%M:%S'
        ))
        logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=1024 * 1024, backupCount=3, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s %(levelname)s [%(name)s] %(threadName)s: %(message)s'
        ))
        logger.addHandler(file_handler)

    for lib in LIBRARY_LOGGERS:
        logging.getLogger(lib).setLevel(getattr(logging, library_level.upper()))

    if capture_qt:
        qInstallMessageHandler(qt_message_handler)

    return logger
