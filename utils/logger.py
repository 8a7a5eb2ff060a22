from logging.handlers import TimedRotatingFileHandler
import logging
import os
import sys
import tempfile

def get_logger(name='logger', log_level=None):
    logger = logging.getLogger(name)

    if logger.hasHandlers():
        logger.handlers.clear()

    log_level = log_level or os.environ.get("MIGRATION_LOG_LEVEL", "INFO")
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(
        '%(asctime)s %(levelname)s [%(name)s] '
        '%(filename)s:%(lineno)d %(funcName)s() - %(message)s'
    )

    # ---- INFO + DEBUG to STDOUT ----
    stdout_handler = logging.StreamHandler(stream=sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(lambda r: r.levelno < logging.ERROR)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    # ---- ERROR to STDERR ----
    stderr_handler = logging.StreamHandler(stream=sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(formatter)
    logger.addHandler(stderr_handler)

    log_dir = os.environ.get(
        "MIGRATION_LOG_DIR",
        os.path.join(tempfile.gettempdir(), "employee_migration_logs")
    )
    os.makedirs(log_dir, exist_ok=True)

    log_path = os.path.join(log_dir, "employee_migration.log")

    # Rotate every hour and keep 48 hours of history
    file_handler = TimedRotatingFileHandler(
        log_path,
        when='H',
        interval=1,
        backupCount=48,
        encoding='utf-8',
        delay=True
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def set_log_level(log_level: str):
    """
    Changes the level of every logger created through get_logger.
    Used by the CLI once the --log-level argument is parsed.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and not logger.propagate and logger.handlers:
            logger.setLevel(level)
