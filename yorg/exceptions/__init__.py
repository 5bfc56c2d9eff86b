"""异常处理模块

提供业务异常类与快捷创建入口。

使用示例:
    from yorg.exceptions import Err, ErrorCode

    raise Err.not_found("组织不存在", code=ErrorCode.ORGANIZATION_NOT_FOUND)
"""

from .exceptions import (
    # ===== 推荐使用 =====
    Err,                            # 异常快捷创建类
    ErrorCode,                      # 错误代码枚举
    ErrorCodeType,

    # ===== 高级用法 =====
    BusinessException,              # 业务异常基类
    ResourceNotFoundException,
    ValidationException,
)

__all__ = [
    "Err",
    "ErrorCode",
    "ErrorCodeType",
    "BusinessException",
    "ResourceNotFoundException",
    "ValidationException",
]
