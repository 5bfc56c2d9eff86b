"""异常模块测试"""

import pytest

from yorg.exceptions import (
    BusinessException,
    Err,
    ErrorCode,
    ResourceNotFoundException,
    ValidationException,
)


class TestBusinessException:
    """业务异常基类测试"""

    def test_to_dict(self):
        """测试转换为字典"""
        exc = BusinessException("操作失败", details=["第1步失败"], org_id="3")
        data = exc.to_dict()

        assert data == {
            "message": "操作失败",
            "code": ErrorCode.BUSINESS_ERROR,
            "details": ["第1步失败"],
            "extra": {"org_id": "3"},
        }

    def test_to_dict_returns_copy(self):
        """测试修改返回值不影响异常对象"""
        exc = BusinessException("操作失败", details=["a"])
        exc.to_dict()["details"].append("b")
        assert exc.details == ["a"]

    def test_code_is_str(self):
        """测试错误码可直接作为字符串比较"""
        assert ErrorCode.CIRCULAR_REFERENCE == "CIRCULAR_REFERENCE"

    def test_repr(self):
        """测试 repr"""
        assert repr(ValidationException("x")).startswith("ValidationException(message='x', code=")


class TestErr:
    """快捷创建类测试"""

    @pytest.mark.parametrize("factory, exc_class, code", [
        (Err.not_found, ResourceNotFoundException, ErrorCode.RESOURCE_NOT_FOUND),
        (Err.invalid, ValidationException, ErrorCode.VALIDATION_ERROR),
    ])
    def test_default_codes(self, factory, exc_class, code):
        """测试各快捷方法的默认错误码"""
        exc = factory()
        assert type(exc) is exc_class
        assert exc.code == code
        assert isinstance(exc, BusinessException)

    def test_custom_code_and_extra(self):
        """测试自定义错误码与上下文"""
        exc = Err.not_found("组织不存在", code=ErrorCode.ORGANIZATION_NOT_FOUND, resource_id="42")
        assert exc.code == ErrorCode.ORGANIZATION_NOT_FOUND
        assert exc.extra == {"resource_id": "42"}
        assert str(exc) == "组织不存在"
