# coding=utf-8

import logging
import logging.handlers
import os

from protoprofile.util import logging_config
from protoprofile.util.logging_config import MAX_SIZE, MAX_BACKUP_COUNT, LOG_LEVEL, LOG_FILE_ROOT, PRINT_LOG_TO_CONSOLE

__DEFAULT_LOGGERS = dict()

formatter = logging.Formatter(
    logging_config.LOGGER_CONTENT_FORMAT,
    logging_config.LOGGER_TIME_FORMAT)


def get_default_logger(module="default", log_path=None) -> logging.Logger:
    global __DEFAULT_LOGGERS
    if not __DEFAULT_LOGGERS.get(module):
        __DEFAULT_LOGGERS[module] = get_logger(module=module,
                                               log_path=log_path or os.path.join(LOG_FILE_ROOT, "protoprofile.log"),
                                               max_file_size=MAX_SIZE,
                                               max_backup_count=MAX_BACKUP_COUNT)

    return __DEFAULT_LOGGERS.get(module)


def get_logger(module, log_path, max_file_size, max_backup_count):
    logger = logging.getLogger(module)
    if len(logger.handlers) == 0:
        logger.propagate = False
        logger.setLevel(LOG_LEVEL)
        if PRINT_LOG_TO_CONSOLE:
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
        else:
            handler = get_log_handler(log_path, max_file_size, max_backup_count)
        logger.addHandler(handler)
    return logger


def get_dummy_logger():
    logger = logging.getLogger()
    if len(logger.handlers) == 0:
        logger.setLevel(LOG_LEVEL)
        """
        When the log directory can not be created,
        records go to the console instead of being lost silently.
        """
        logger.addHandler(logging.StreamHandler())
    return logger


def get_log_handler(log_path, max_file_size, max_backup_count):
    try:
        log_dir = os.path.dirname(log_path)
        if log_dir:
            os.makedirs(log_dir, 0o750, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(log_path,
                                                            maxBytes=max_file_size,
                                                            backupCount=max_backup_count)
        file_handler.setFormatter(formatter)
    except OSError:
        get_dummy_logger().exception('Get LOGGER failed, used stderr instead')
        file_handler = logging.StreamHandler()
        file_handler.setFormatter(formatter)
    return file_handler
