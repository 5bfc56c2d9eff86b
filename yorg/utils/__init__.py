"""工具模块

提供通用工具函数：
- ID 生成
- 宽松类型转换（导入行使用）

使用示例:
    from yorg.utils import generate_id, parse_int_or_zero
"""

from .generate_id import generate_id
from .coerce import parse_int_or_zero, is_blank

__all__ = [
    "generate_id",
    "parse_int_or_zero",
    "is_blank",
]
