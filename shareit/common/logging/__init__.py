from shareit.common.logging.config import logger
from shareit.common.logging.decorators import log_action
from shareit.common.logging.system_logger import (
    log_system_api_request,
    log_system_crud,
)


__all__ = [
    'logger',
    'log_action',
    'log_system_crud',
    'log_system_api_request',
]
