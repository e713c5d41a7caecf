"""日志工具"""
import logging
from typing import Optional

from ..config import Config

LOGGER_NAME = 'md2nsx'

_logger_initialized = False


def setup_logger(name: str = LOGGER_NAME,
                 level: Optional[str] = None,
                 log_file: Optional[str] = None) -> logging.Logger:
    """配置日志记录器"""
    global _logger_initialized

    logger = logging.getLogger(name)

    if _logger_initialized:
        # 已初始化时仅允许调整级别
        if level:
            logger.setLevel(getattr(logging, level.upper()))
        if log_file:
            _add_file_handler(logger, log_file)
        return logger

    level = level or Config.LOG_LEVEL
    log_file = log_file or Config.LOG_FILE

    logger.setLevel(getattr(logging, level.upper()))

    # 控制台处理器
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(Config.LOG_FORMAT))
    logger.addHandler(console_handler)

    # 文件处理器
    if log_file:
        _add_file_handler(logger, log_file)

    _logger_initialized = True
    return logger


def _add_file_handler(logger: logging.Logger, log_file: str) -> None:
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(Config.LOG_FORMAT))
    logger.addHandler(file_handler)


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """获取日志记录器"""
    return logging.getLogger(name)
