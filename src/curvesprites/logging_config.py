"""Logging setup for the ``curvesprites`` namespace. / ``curvesprites`` 命名空间的日志配置。

Library modules only create loggers with ``logging.getLogger(__name__)``; attaching handlers is left to the
application, usually by calling :func:`setup_logging` once at start-up. / 库模块仅通过 ``logging.getLogger(__name__)``
创建日志记录器；处理器由应用程序负责挂载，通常在启动时调用一次 :func:`setup_logging`。
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "curvesprites"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int, formatter: logging.Formatter) -> None:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Send package log records to stdout and optionally a file. / 将包日志输出到标准输出，并可选写入文件。

    Parameters
    ----------
    level:
        Threshold for the package logger and its handlers, e.g. ``logging.DEBUG``.
        / 包日志记录器及其处理器的级别阈值，例如 ``logging.DEBUG``。
    log_file:
        Path of a log file, overwritten on each call. ``None`` logs to stdout only.
        / 日志文件路径，每次调用都会覆盖。为 ``None`` 时仅输出到标准输出。

    Calling it again replaces the previous handlers instead of adding to them.
    / 重复调用会替换原有处理器，而不是继续叠加。
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    _attach(logger, logging.StreamHandler(sys.stdout), level, formatter)
    if log_file:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level, formatter)

    logger.debug(f"Logging configured at {logging.getLevelName(level)}")
    return logger


__all__ = ["setup_logging"]
