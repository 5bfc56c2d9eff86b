"""
组织管理模块 - 统计

compute_statistics 是快照的纯函数：不缓存、不修改输入，同一快照多次计算结果相同。
"""

from collections import Counter
from typing import Dict, Iterable, List, Tuple

from .enums import Gender, OrgStatus, PersonnelStatus
from .schemas import Personnel, Statistics, StoreSnapshot

# 薪资区间：(上限(不含), 标签)，最后一档无上限
SALARY_RANGES: Tuple[Tuple[float, str], ...] = (
    (10000, "10k以下"),
    (20000, "10k-20k"),
    (30000, "20k-30k"),
    (float("inf"), "30k以上"),
)

UNKNOWN_EDUCATION = "未知"


def salary_range_label(salary) -> str:
    """薪资所属区间标签，缺失按 0 计"""
    value = salary or 0
    for upper, label in SALARY_RANGES:
        if value < upper:
            return label
    return SALARY_RANGES[-1][1]


def join_month(person: Personnel) -> str:
    """入职月份，格式 YYYY-MM"""
    return person.join_date.strftime("%Y-%m")


def _count(values: Iterable[str]) -> Dict[str, int]:
    # Counter 保留首次出现顺序
    return dict(Counter(values))


def average_age(personnel: Iterable[Personnel]) -> float:
    """平均年龄，缺失年龄按 0 计；人员为空时返回 0.0"""
    ages = [person.age or 0 for person in personnel]
    if not ages:
        return 0.0
    return sum(ages) / len(ages)


def compute_statistics(snapshot: StoreSnapshot) -> Statistics:
    """根据快照计算统计数据

    Args:
        snapshot: 存储快照

    Returns:
        统计快照
    """
    organizations = snapshot.organizations
    personnel = snapshot.personnel

    return Statistics(
        total_organizations=len(organizations),
        total_personnel=len(personnel),
        active_organizations=sum(1 for org in organizations if org.status == OrgStatus.ACTIVE),
        active_personnel=sum(1 for p in personnel if p.status == PersonnelStatus.ACTIVE),
        recent_operations=len(snapshot.operation_log),
        organizations_by_type=_count(org.type.value for org in organizations),
        personnel_by_status=_count(p.status.value for p in personnel),
        personnel_by_department=_count(p.department for p in personnel),
        average_age=average_age(personnel),
        # 未填写性别的人员按男性统计
        gender_distribution=_count((p.gender or Gender.MALE).value for p in personnel),
        education_distribution=_count(p.education or UNKNOWN_EDUCATION for p in personnel),
        salary_ranges=_count(salary_range_label(p.salary) for p in personnel),
        monthly_join_trend=_count(join_month(p) for p in personnel),
    )


def percentage(count: int, total: int) -> float:
    """占比（0-100），总数为 0 时返回 0.0"""
    if total <= 0:
        return 0.0
    return count * 100.0 / total


def distribution_percentages(distribution: Dict[str, int], total: int) -> List[Tuple[str, int, float]]:
    """把分布转换为 (标签, 数量, 占比) 列表，用于条形图宽度"""
    return [(key, count, percentage(count, total)) for key, count in distribution.items()]


__all__ = [
    "SALARY_RANGES",
    "UNKNOWN_EDUCATION",
    "salary_range_label",
    "join_month",
    "average_age",
    "compute_statistics",
    "percentage",
    "distribution_percentages",
]
