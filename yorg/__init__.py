"""
yorg - 组织与人员管理核心库

提供组织树、人员、操作日志的内存管理，以及统计、搜索、批量导入等派生功能。

快速开始:
    from yorg import AppSettings, OrgConsole

    console = OrgConsole.from_settings(AppSettings())
    console.get_statistics()
"""

from .version import __version__, __author__, __description__

from .config import AppSettings, load_yaml_config
from .exceptions import (
    Err,
    ErrorCode,
    BusinessException,
    ResourceNotFoundException,
    ValidationException,
)
from .log import get_logger, setup_logger, setup_root_logger
from .console import OrgConsole

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    "AppSettings",
    "load_yaml_config",
    "Err",
    "ErrorCode",
    "BusinessException",
    "ResourceNotFoundException",
    "ValidationException",
    "get_logger",
    "setup_logger",
    "setup_root_logger",
    "OrgConsole",
]
