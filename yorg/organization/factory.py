"""
组织管理模块 - 记录工厂

所有"缺省值"策略集中在这里，每种实体一个创建入口：

- build_organization / build_personnel: 从调用方数据（字典或模型，camelCase 或 snake_case）
  构造规范记录，补齐缺省值、ID 和创建审计字段
- organization_data_from_row / personnel_data_from_row: 把外部原始行转换为创建数据，
  只做宽松类型转换，不做必填校验（必填校验属于导入处理器）

原始行和规范记录之间只有这一个转换边界，校验失败会抛出 pydantic.ValidationError，
不会产生"半合法"的记录。
"""

from datetime import date, datetime
from typing import Any, Callable, Dict, Mapping, Optional, Type, Union

from pydantic import BaseModel

from yorg.utils import parse_int_or_zero, is_blank

from .enums import Gender, OrgStatus, OrgType, PersonnelStatus
from .schemas import Organization, Personnel, RawRow


# 导入模板中的列名（与 camelCase 别名一致）
ORGANIZATION_COLUMNS = (
    "name", "type", "parentId", "description", "establishedDate",
    "status", "location", "manager", "employeeCount",
)

PERSONNEL_COLUMNS = (
    "name", "position", "organizationId", "email", "phone", "joinDate",
    "status", "department", "manager", "salary", "age", "gender", "education",
)


def organization_defaults(today: date) -> Dict[str, Any]:
    """组织缺省值"""
    return {
        "type": OrgType.DEPARTMENT,
        "status": OrgStatus.ACTIVE,
        "established_date": today,
        "employee_count": 0,
        "parent_id": None,
        "description": "",
        "location": "",
        "manager": "",
    }


def personnel_defaults(today: date, fallback_organization_id: Optional[str] = None) -> Dict[str, Any]:
    """人员缺省值

    未提供 fallback_organization_id 时，organization_id 没有缺省值，由调用方负责提供。
    """
    defaults = {
        "position": "",
        "email": "",
        "phone": "",
        "join_date": today,
        "status": PersonnelStatus.ACTIVE,
        "department": "",
        "manager": "",
        "salary": 0,
        "age": 0,
        "gender": Gender.MALE,
        "education": "",
    }
    if fallback_organization_id:
        defaults["organization_id"] = fallback_organization_id
    return defaults


def to_field_data(model_cls: Type[BaseModel], data: Union[Mapping[str, Any], BaseModel]) -> Dict[str, Any]:
    """把 camelCase / snake_case 混合的输入统一为模型字段名，丢弃未知键"""
    if isinstance(data, BaseModel):
        data = data.model_dump()
    alias_to_name = {}
    for name, info in model_cls.model_fields.items():
        alias_to_name[name] = name
        if info.alias:
            alias_to_name[info.alias] = name
    result = {}
    for key, value in data.items():
        name = alias_to_name.get(key)
        if name is not None:
            result[name] = value
    return result


def _merge_defaults(data: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """缺失、None 或空白字符串的字段使用缺省值"""
    merged = dict(defaults)
    for key, value in data.items():
        if key in defaults and is_blank(value):
            continue
        merged[key] = value
    return merged


def build_organization(
    data: Union[Mapping[str, Any], BaseModel],
    *,
    record_id: str,
    operator_name: str,
    now: datetime,
    today: Optional[date] = None,
) -> Organization:
    """构造新的组织记录

    Args:
        data: 组织数据，id 与审计字段会被覆盖
        record_id: 新分配的组织ID
        operator_name: 创建人
        now: 创建时间
        today: 成立日期缺省值，默认取 now 的日期

    Raises:
        pydantic.ValidationError: 数据无法转换为合法记录
    """
    fields = to_field_data(Organization, data)
    fields = _merge_defaults(fields, organization_defaults(today or now.date()))
    fields.update(
        id=record_id,
        created_by=operator_name,
        created_at=now,
        updated_by=None,
        updated_at=None,
    )
    return Organization.model_validate(fields)


def build_personnel(
    data: Union[Mapping[str, Any], BaseModel],
    *,
    record_id: str,
    operator_name: str,
    now: datetime,
    fallback_organization_id: Optional[str] = None,
    today: Optional[date] = None,
) -> Personnel:
    """构造新的人员记录

    Raises:
        pydantic.ValidationError: 数据无法转换为合法记录
    """
    fields = to_field_data(Personnel, data)
    defaults = personnel_defaults(today or now.date(), fallback_organization_id)
    fields = _merge_defaults(fields, defaults)
    fields.update(
        id=record_id,
        created_by=operator_name,
        created_at=now,
        updated_by=None,
        updated_at=None,
    )
    return Personnel.model_validate(fields)


def _pick_columns(row: RawRow, columns, converters: Dict[str, Callable[[Any], Any]]) -> Dict[str, Any]:
    data = {}
    for column in columns:
        if column not in row:
            continue
        value = row[column]
        converter = converters.get(column)
        data[column] = converter(value) if converter else value
    return data


def _text(value: Any) -> Any:
    # 表格单元格可能是数字（如电话、组织ID），统一转为字符串
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return value


def organization_data_from_row(row: RawRow) -> Dict[str, Any]:
    """原始组织行 -> 组织创建数据"""
    return _pick_columns(row, ORGANIZATION_COLUMNS, {
        "parentId": _text,
        "employeeCount": parse_int_or_zero,
    })


def personnel_data_from_row(row: RawRow) -> Dict[str, Any]:
    """原始人员行 -> 人员创建数据"""
    return _pick_columns(row, PERSONNEL_COLUMNS, {
        "organizationId": _text,
        "phone": _text,
        "salary": parse_int_or_zero,
        "age": parse_int_or_zero,
    })


__all__ = [
    "ORGANIZATION_COLUMNS",
    "PERSONNEL_COLUMNS",
    "organization_defaults",
    "personnel_defaults",
    "to_field_data",
    "build_organization",
    "build_personnel",
    "organization_data_from_row",
    "personnel_data_from_row",
]
