"""
组织管理模块 - 种子数据

启动时载入的固定数据集：一家公司、其下的部门与团队、若干人员、历史操作日志和初始通知。
组织 "1" 是根公司，也是人员导入时的默认组织。
"""

from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from .enums import EntityType, Gender, OperationType, OrgType, PersonnelStatus
from .notifications import Notification, NotificationCenter
from .schemas import OperationLogEntry, Organization, Personnel
from .store import EntityStore

SEED_OPERATOR_NAME = "系统管理员"
SEED_OPERATOR_ID = "admin"


def _ts(year: int, month: int, day: int, hour: int = 9) -> datetime:
    return datetime(year, month, day, hour, 0, tzinfo=timezone.utc)


# (id, 名称, 类型, 上级ID, 描述, 地点, 负责人, 成立日期)
_ORGANIZATIONS = (
    ("1", "星辰科技有限公司", OrgType.COMPANY, None, "公司总部", "北京市海淀区", "王总", date(2018, 3, 1)),
    ("2", "技术部", OrgType.DEPARTMENT, "1", "负责产品研发与技术支持", "北京市海淀区", "李部长", date(2018, 4, 1)),
    ("3", "产品部", OrgType.DEPARTMENT, "1", "负责产品规划与设计", "北京市海淀区", "王部长", date(2018, 4, 1)),
    ("4", "人力资源部", OrgType.DEPARTMENT, "1", "负责招聘、培训与薪酬", "北京市海淀区", "赵部长", date(2018, 5, 1)),
    ("5", "前端开发组", OrgType.TEAM, "2", "Web 与移动端开发", "北京市海淀区", "陈组长", date(2019, 6, 1)),
    ("6", "后端开发组", OrgType.TEAM, "2", "服务端与数据平台开发", "北京市海淀区", "刘组长", date(2019, 6, 1)),
    ("7", "上海分公司", OrgType.BRANCH, "1", "华东区域业务", "上海市浦东新区", "孙经理", date(2021, 9, 1)),
)

# (id, 姓名, 职位, 组织ID, 邮箱, 电话, 入职日期, 状态, 直属领导, 薪资, 年龄, 性别, 学历)
_PERSONNEL = (
    ("1", "张三", "软件工程师", "5", "zhangsan@company.com", "13800138001",
     date(2022, 3, 15), PersonnelStatus.ACTIVE, "陈组长", 15000, 28, Gender.MALE, "本科"),
    ("2", "李四", "产品经理", "3", "lisi@company.com", "13800138002",
     date(2021, 7, 1), PersonnelStatus.ACTIVE, "王部长", 18000, 30, Gender.FEMALE, "硕士"),
    ("3", "王五", "高级后端工程师", "6", "wangwu@company.com", "13800138003",
     date(2020, 11, 9), PersonnelStatus.ACTIVE, "刘组长", 25000, 33, Gender.MALE, "硕士"),
    ("4", "赵六", "招聘专员", "4", "zhaoliu@company.com", "13800138004",
     date(2023, 2, 20), PersonnelStatus.ON_LEAVE, "赵部长", 9000, 26, Gender.FEMALE, "本科"),
    ("5", "钱七", "技术总监", "2", "qianqi@company.com", "13800138005",
     date(2019, 5, 6), PersonnelStatus.ACTIVE, "王总", 35000, 38, Gender.MALE, "博士"),
    ("6", "孙八", "销售经理", "7", "sunba@company.com", "13800138006",
     date(2022, 3, 1), PersonnelStatus.INACTIVE, "孙经理", 12000, 31, Gender.MALE, "大专"),
)


def seed_organizations() -> List[Organization]:
    organizations = []
    for org_id, name, org_type, parent_id, description, location, manager, established in _ORGANIZATIONS:
        organizations.append(Organization(
            id=org_id,
            name=name,
            type=org_type,
            parent_id=parent_id,
            description=description,
            location=location,
            manager=manager,
            established_date=established,
            created_by=SEED_OPERATOR_NAME,
            created_at=_ts(established.year, established.month, established.day),
        ))
    return organizations


def seed_personnel() -> List[Personnel]:
    names = {row[0]: row[1] for row in _ORGANIZATIONS}
    personnel = []
    for row in _PERSONNEL:
        (person_id, name, position, org_id, email, phone, joined,
         status, manager, salary, age, gender, education) = row
        personnel.append(Personnel(
            id=person_id,
            name=name,
            position=position,
            organization_id=org_id,
            email=email,
            phone=phone,
            join_date=joined,
            status=status,
            department=names[org_id],
            manager=manager,
            salary=salary,
            age=age,
            gender=gender,
            education=education,
            created_by=SEED_OPERATOR_NAME,
            created_at=_ts(joined.year, joined.month, joined.day),
        ))
    return personnel


def seed_operation_log() -> List[OperationLogEntry]:
    """历史操作日志（旧 -> 新）"""
    entries = (
        ("log-1", OperationType.CREATE, EntityType.ORGANIZATION, "7",
         "创建新组织: 上海分公司", _ts(2021, 9, 1), None),
        ("log-2", OperationType.BATCH_IMPORT, EntityType.PERSONNEL, "batch_seed",
         "批量导入人员，成功2条，失败0条", _ts(2022, 3, 15), 2),
        ("log-3", OperationType.UPDATE, EntityType.PERSONNEL, "4",
         "更新人员信息: 赵六", _ts(2024, 1, 10), None),
    )
    return [
        OperationLogEntry(
            id=log_id,
            type=op_type,
            entity_type=entity_type,
            entity_id=entity_id,
            operator_name=SEED_OPERATOR_NAME,
            operator_id=SEED_OPERATOR_ID,
            timestamp=timestamp,
            description=description,
            batch_size=batch_size,
        )
        for log_id, op_type, entity_type, entity_id, description, timestamp, batch_size in entries
    ]


def seed_notifications() -> List[Notification]:
    """初始通知（新 -> 旧）"""
    entries = (
        ("1", "系统更新", "系统将于今晚进行维护更新", datetime(2025, 6, 15, 10, 30, tzinfo=timezone.utc), False),
        ("2", "数据备份完成", "今日数据备份已完成", datetime(2025, 6, 15, 9, 0, tzinfo=timezone.utc), True),
        ("3", "新员工入职", "技术部新增3名员工", datetime(2025, 6, 14, 16, 20, tzinfo=timezone.utc), False),
    )
    return [
        Notification(id=notice_id, title=title, message=message, time=time, read=read)
        for notice_id, title, message, time, read in entries
    ]


def seed_dataset() -> Tuple[List[Organization], List[Personnel], List[OperationLogEntry]]:
    return seed_organizations(), seed_personnel(), seed_operation_log()


def load_seed(store: EntityStore, notifications: Optional[NotificationCenter] = None) -> None:
    """把种子数据载入存储，替换现有内容，不产生新的操作日志

    传入 notifications 时同时载入初始通知。
    """
    organizations, personnel, operation_log = seed_dataset()
    store.load(organizations, personnel, operation_log)
    if notifications is not None:
        notifications.load(seed_notifications())


__all__ = [
    "seed_organizations",
    "seed_personnel",
    "seed_operation_log",
    "seed_notifications",
    "seed_dataset",
    "load_seed",
]
