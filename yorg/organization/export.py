"""
组织管理模块 - 导入模板与导出数据

- import_template: 导入模板的示例行，列名与导入处理器读取的列名一致
- export_rows: 把快照转换为展示格式的行（中文表头、中文枚举标签、名称解析），
  交给外部导出方生成表格文件
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from .enums import EntityType
from .schemas import Organization, Personnel, StoreSnapshot

ExportKind = Union[EntityType, str]

NO_PARENT = "无"
UNKNOWN_OWNER = "未知"

_ORGANIZATION_TEMPLATE = (
    {
        "name": "示例公司",
        "type": "company",
        "parentId": "",
        "description": "这是一个示例公司",
        "establishedDate": "2025-06-01",
        "status": "active",
        "location": "北京市",
        "manager": "张总",
        "employeeCount": 100,
    },
    {
        "name": "技术部",
        "type": "department",
        "parentId": "1",
        "description": "技术研发部门",
        "establishedDate": "2025-06-15",
        "status": "active",
        "location": "北京市朝阳区",
        "manager": "李部长",
        "employeeCount": 50,
    },
)

_PERSONNEL_TEMPLATE = (
    {
        "name": "张三",
        "position": "软件工程师",
        "organizationId": "1",
        "email": "zhang.san@company.com",
        "phone": "13800138001",
        "joinDate": "2025-06-01",
        "status": "active",
        "department": "技术部",
        "manager": "李部长",
        "salary": 15000,
        "age": 28,
        "gender": "male",
        "education": "本科",
    },
    {
        "name": "李四",
        "position": "产品经理",
        "organizationId": "1",
        "email": "li.si@company.com",
        "phone": "13800138002",
        "joinDate": "2025-06-15",
        "status": "active",
        "department": "产品部",
        "manager": "王部长",
        "salary": 18000,
        "age": 30,
        "gender": "female",
        "education": "硕士",
    },
)


def import_template(kind: ExportKind) -> List[Dict[str, Any]]:
    """导入模板示例行（每次返回新的副本）"""
    rows = _ORGANIZATION_TEMPLATE if EntityType(kind) is EntityType.ORGANIZATION else _PERSONNEL_TEMPLATE
    return [dict(row) for row in rows]


def export_filename(kind: ExportKind, today: date) -> str:
    """导出文件名，如 "组织数据_2025-06-01.xlsx" """
    return f"{EntityType(kind).label}数据_{today.isoformat()}.xlsx"


def format_datetime(value: Optional[datetime]) -> str:
    """格式化为 "2025/6/1 09:30:00" 形式"""
    if value is None:
        return ""
    return f"{value.year}/{value.month}/{value.day} {value:%H:%M:%S}"


def organization_row(org: Organization, names: Dict[str, str]) -> Dict[str, Any]:
    return {
        "组织名称": org.name,
        "组织类型": org.type.label,
        "上级组织": names.get(org.parent_id, NO_PARENT) if org.parent_id else NO_PARENT,
        "描述": org.description or "",
        "成立日期": org.established_date.isoformat(),
        "状态": org.status.label,
        "地点": org.location or "",
        "负责人": org.manager or "",
        "人员数量": org.employee_count,
        "创建时间": format_datetime(org.created_at),
    }


def personnel_row(person: Personnel, names: Dict[str, str]) -> Dict[str, Any]:
    return {
        "姓名": person.name,
        "职位": person.position,
        "所属组织": names.get(person.organization_id, UNKNOWN_OWNER),
        "邮箱": person.email,
        "电话": person.phone,
        "入职日期": person.join_date.isoformat(),
        "状态": person.status.label,
        "部门": person.department,
        "直属领导": person.manager or "",
        "薪资": person.salary or 0,
        "年龄": person.age or 0,
        "性别": person.gender.label if person.gender else "",
        "学历": person.education or "",
        "创建时间": format_datetime(person.created_at),
    }


def export_rows(snapshot: StoreSnapshot, kind: ExportKind) -> List[Dict[str, Any]]:
    """把快照转换为展示格式的导出行

    Args:
        snapshot: 存储快照
        kind: "organization" 或 "personnel"

    Returns:
        导出行列表，顺序与集合顺序一致
    """
    names = {org.id: org.name for org in snapshot.organizations}
    if EntityType(kind) is EntityType.ORGANIZATION:
        return [organization_row(org, names) for org in snapshot.organizations]
    return [personnel_row(person, names) for person in snapshot.personnel]


__all__ = [
    "NO_PARENT",
    "UNKNOWN_OWNER",
    "import_template",
    "export_filename",
    "format_datetime",
    "export_rows",
]
