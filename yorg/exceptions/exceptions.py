"""业务异常类定义

定义组织管理核心使用的业务异常类体系。

导入处理器的行级错误以数据形式返回（BatchImportResult.errors），
不会以异常抛出；这里的异常用于 CRUD 与树校验等同步操作。
"""

import copy
from enum import Enum
from typing import Optional, List, Any, Dict, Union


class ErrorCode(str, Enum):
    """错误代码枚举

    继承自 str，可以直接作为字符串使用。

    使用示例:
        from yorg.exceptions import Err, ErrorCode

        raise Err.not_found("组织不存在", code=ErrorCode.ORGANIZATION_NOT_FOUND)
    """

    # ==================== 通用错误 ====================
    BUSINESS_ERROR = "BUSINESS_ERROR"

    # ==================== 资源相关 ====================
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    ORGANIZATION_NOT_FOUND = "ORGANIZATION_NOT_FOUND"
    PERSONNEL_NOT_FOUND = "PERSONNEL_NOT_FOUND"

    # ==================== 验证相关 ====================
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CIRCULAR_REFERENCE = "CIRCULAR_REFERENCE"


# 类型别名，支持枚举和字符串
ErrorCodeType = Union[str, ErrorCode]


class BusinessException(Exception):
    """业务异常基类

    所有业务异常都应该继承此类。

    属性:
        message: 错误消息（面向用户）
        code: 错误代码（用于程序判断，支持 ErrorCode 枚举或字符串）
        details: 详细错误信息列表
        extra: 额外的上下文信息

    使用示例:
        raise BusinessException(
            message="组织移动失败",
            code=ErrorCode.CIRCULAR_REFERENCE,
            extra={"org_id": "3", "parent_id": "5"}
        )
    """

    def __init__(
        self,
        message: str,
        code: ErrorCodeType = ErrorCode.BUSINESS_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        self.message = message
        self.code = code
        self.details = details or []
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式

        Returns:
            包含异常信息的字典
        """
        return {
            "message": self.message,
            "code": self.code,
            # 返回深拷贝，避免调用方修改返回值反向污染异常对象内部状态
            "details": copy.deepcopy(self.details),
            "extra": copy.deepcopy(self.extra)
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code!r})"
        )


class ResourceNotFoundException(BusinessException):
    """资源不存在异常

    严格模式下，按未知 ID 更新或删除组织/人员时抛出。

    使用示例:
        raise ResourceNotFoundException(
            "组织不存在",
            code=ErrorCode.ORGANIZATION_NOT_FOUND,
            resource_type="organization",
            resource_id="42"
        )
    """

    def __init__(
        self,
        message: str = "资源不存在",
        code: ErrorCodeType = ErrorCode.RESOURCE_NOT_FOUND,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class ValidationException(BusinessException):
    """数据验证异常

    使用示例:
        raise ValidationException(
            "上级组织不能是自身或下级组织",
            code=ErrorCode.CIRCULAR_REFERENCE,
            field="parentId"
        )
    """

    def __init__(
        self,
        message: str = "数据验证失败",
        code: ErrorCodeType = ErrorCode.VALIDATION_ERROR,
        details: Optional[List[str]] = None,
        **extra: Any
    ):
        super().__init__(message=message, code=code, details=details, **extra)


class Err:
    """异常快捷创建类

    只需导入一个类，即可创建所有类型的业务异常。

    使用示例:
        from yorg.exceptions import Err

        raise Err.not_found("人员不存在", resource_id="7")
        raise Err.invalid("上级组织无效", code=ErrorCode.CIRCULAR_REFERENCE)
    """

    @staticmethod
    def not_found(message: str = "资源不存在", **kwargs) -> ResourceNotFoundException:
        """资源不存在

        Args:
            message: 错误消息
            **kwargs: 额外参数（code, details, resource_type, resource_id 等）
        """
        return ResourceNotFoundException(message, **kwargs)

    @staticmethod
    def invalid(message: str = "数据验证失败", **kwargs) -> ValidationException:
        """数据验证失败"""
        return ValidationException(message, **kwargs)
