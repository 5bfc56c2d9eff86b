"""宽松类型转换

导入行来自外部表格，字段值可能是字符串、数字或缺失。
这里的函数只做"尽量转换"，不做业务校验。
"""

import re
from typing import Any

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int_or_zero(value: Any) -> int:
    """解析整数，失败返回 0

    与表格导入的习惯一致：取字符串开头的整数部分，
    "15000元" -> 15000，"abc" -> 0，None -> 0，12.7 -> 12。
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def is_blank(value: Any) -> bool:
    """值为空或只包含空白"""
    if value is None:
        return True
    return str(value).strip() == ""
