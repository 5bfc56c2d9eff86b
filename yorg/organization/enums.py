"""
组织管理模块 - 枚举定义

提供组织、人员、操作日志相关的枚举类型。
枚举值与界面/导入文件中使用的字符串保持一致，label 为中文展示名。
"""

from enum import Enum


class OrgType(str, Enum):
    """组织类型"""

    COMPANY = "company"
    DEPARTMENT = "department"
    TEAM = "team"
    BRANCH = "branch"

    @property
    def label(self) -> str:
        return _ORG_TYPE_LABELS[self]


class OrgStatus(str, Enum):
    """组织状态"""

    ACTIVE = "active"
    INACTIVE = "inactive"
    # 待审核
    PENDING = "pending"

    @property
    def label(self) -> str:
        return _ORG_STATUS_LABELS[self]


class PersonnelStatus(str, Enum):
    """人员状态"""

    # 在职
    ACTIVE = "active"
    # 离职
    INACTIVE = "inactive"
    # 请假
    ON_LEAVE = "on-leave"

    @property
    def label(self) -> str:
        return _PERSONNEL_STATUS_LABELS[self]


class Gender(str, Enum):
    """性别"""

    MALE = "male"
    FEMALE = "female"

    @property
    def label(self) -> str:
        return "男" if self is Gender.MALE else "女"


class OperationType(str, Enum):
    """操作类型"""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    BATCH_IMPORT = "batch-import"

    @property
    def label(self) -> str:
        return _OPERATION_TYPE_LABELS[self]


class EntityType(str, Enum):
    """操作对象类型，也是批量导入的数据种类"""

    ORGANIZATION = "organization"
    PERSONNEL = "personnel"

    @property
    def label(self) -> str:
        return "组织" if self is EntityType.ORGANIZATION else "人员"


_ORG_TYPE_LABELS = {
    OrgType.COMPANY: "公司",
    OrgType.DEPARTMENT: "部门",
    OrgType.TEAM: "团队",
    OrgType.BRANCH: "分支机构",
}

_ORG_STATUS_LABELS = {
    OrgStatus.ACTIVE: "活跃",
    OrgStatus.INACTIVE: "非活跃",
    OrgStatus.PENDING: "待审核",
}

_PERSONNEL_STATUS_LABELS = {
    PersonnelStatus.ACTIVE: "在职",
    PersonnelStatus.INACTIVE: "离职",
    PersonnelStatus.ON_LEAVE: "请假",
}

_OPERATION_TYPE_LABELS = {
    OperationType.CREATE: "创建",
    OperationType.UPDATE: "更新",
    OperationType.DELETE: "删除",
    OperationType.BATCH_IMPORT: "批量导入",
}


__all__ = [
    "OrgType",
    "OrgStatus",
    "PersonnelStatus",
    "Gender",
    "OperationType",
    "EntityType",
]
