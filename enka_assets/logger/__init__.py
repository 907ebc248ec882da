import inspect
import logging.handlers
import os
from pathlib import Path

PACKAGE_DIR = "enka_assets"
LOG_FILE_NAME = "enka_assets.log"
CONSOLE_HANDLER_NAME = "enka_assets.console"


class ClassNameFilter(logging.Filter):
    def filter(self, record):
        cwd = os.getcwd()
        abs_path = os.path.abspath(record.pathname)
        rel_path = os.path.relpath(abs_path, cwd)
        pkg_index = rel_path.find(PACKAGE_DIR + os.sep)
        if pkg_index != -1:
            relpath = rel_path[pkg_index:]
        else:
            relpath = rel_path
        if relpath.endswith(".py"):
            relpath = relpath[:-3]
        record.relpath = relpath.replace(os.sep, ".").replace("\\", ".")
        record.classname = ""
        frame = inspect.currentframe()
        while frame:
            code = frame.f_code
            if code.co_name == record.funcName:
                self_obj = frame.f_locals.get("self")
                if self_obj is not None:
                    record.classname = self_obj.__class__.__name__
                    break
            frame = frame.f_back
        return True


class SmartClassFormatter(logging.Formatter):
    def format(self, record):
        if not getattr(record, "relpath", None):
            record.relpath = record.module
        if not hasattr(record, "classname"):
            record.classname = ""
        return super().format(record)


fmt = "%(asctime)s - [%(levelname)s] - %(relpath)s.%(classname)s.%(funcName)s(): %(message)s {%(lineno)d}"
formatter = SmartClassFormatter(fmt)

logger = logging.getLogger("EnkaAssets")
logger.setLevel(os.getenv("ENKA_LOG_LEVEL", "WARNING").upper())
logger.addFilter(ClassNameFilter())
logger.addHandler(logging.NullHandler())

# file handler only when ENKA_LOG_DIR is set
LOG_DIR = os.getenv("ENKA_LOG_DIR")
if LOG_DIR:
    log_path = Path(LOG_DIR)
    log_path.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        log_path / LOG_FILE_NAME, when="midnight", interval=1, backupCount=5, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def setup_console_logging(level=None):
    """
    Print package records on stderr with the location-aware format.

    Meant for scripts such as `launcher.py`. Applications embedding the
    library keep their own handlers and receive records through propagation.
    """
    if level:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    if not any(getattr(h, "name", None) == CONSOLE_HANDLER_NAME for h in logger.handlers):
        console = logging.StreamHandler()
        console.set_name(CONSOLE_HANDLER_NAME)
        console.setFormatter(formatter)
        logger.addHandler(console)
    logger.propagate = False
    return logger
