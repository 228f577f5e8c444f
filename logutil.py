import os
import threading
import logging
import multiprocessing
import config

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def format_line(scope, msg, level="INFO"):
    pid = os.getpid()
    proc = multiprocessing.current_process().name
    thread = threading.current_thread().name
    text = f"[{level} pid{pid} proc{proc} thr{thread} {scope}] {msg}"
    use_color = getattr(config, "LOG_COLOR", True) and os.getenv("NO_COLOR") is None
    if use_color:
        if level in ("WARN", "WARNING"):
            text = f"\x1b[33m{text}\x1b[0m"
        elif level == "ERROR":
            text = f"\x1b[31m{text}\x1b[0m"
        elif thread != "MainThread":
            # Generation worker thread.
            text = f"\x1b[32m{text}\x1b[0m"
    return text


def log(scope, msg, level="INFO"):
    if scope == "WORLDGEN" and level == "DEBUG" and not getattr(config, "LOG_GENERATION", True):
        return
    logger = logging.getLogger(scope)
    lvl = LEVELS.get(level, logging.INFO)
    if not logger.isEnabledFor(lvl):
        return
    logger.log(lvl, format_line(scope, msg, level))
