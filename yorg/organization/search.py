"""
组织管理模块 - 全文搜索

search_records 是纯函数：对快照做一次完整扫描，按固定字段做不区分大小写的子串匹配。
SearchIndex 在其上维护"当前关键词 + 结果面板是否可见"的状态，
关键词变化或存储数据变化时重新计算。

结果顺序：先组织后人员，各自保持集合中的原始顺序；不分页，不排序。
"""

import threading
from typing import Callable, Iterable, List, Optional, Tuple, Union

from yorg.log import get_logger

from .enums import EntityType, PersonnelStatus
from .schemas import Organization, Personnel, SearchResult, StoreSnapshot

logger = get_logger()

# (字段名, 展示标签)
ORGANIZATION_SEARCH_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "名称"),
    ("description", "描述"),
    ("manager", "负责人"),
    ("location", "地点"),
)

PERSONNEL_SEARCH_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("name", "姓名"),
    ("position", "职位"),
    ("email", "邮箱"),
    ("phone", "电话"),
    ("department", "部门"),
)

# 电话字段值不做小写转换（关键词仍按小写比较）
RAW_VALUE_FIELDS = frozenset({"phone"})


def _matched_fields(record, fields, lowered_term: str) -> List[str]:
    matched = []
    for field_name, label in fields:
        value = getattr(record, field_name, None)
        if not value:
            continue
        if field_name in RAW_VALUE_FIELDS:
            hit = lowered_term in value
        else:
            hit = lowered_term in value.lower()
        if hit:
            matched.append(label)
    return matched


def match_organization(org: Organization, term: str) -> List[str]:
    """返回组织命中的字段标签列表"""
    return _matched_fields(org, ORGANIZATION_SEARCH_FIELDS, term.lower())


def match_personnel(person: Personnel, term: str) -> List[str]:
    """返回人员命中的字段标签列表"""
    return _matched_fields(person, PERSONNEL_SEARCH_FIELDS, term.lower())


def search_records(snapshot: StoreSnapshot, term: str) -> List[SearchResult]:
    """在组织和人员中搜索关键词

    Args:
        snapshot: 存储快照
        term: 关键词，去除首尾空白后为空则返回空列表

    Returns:
        搜索结果列表，每条附带命中的字段标签
    """
    if not term or not term.strip():
        return []

    results: List[SearchResult] = []
    for org in snapshot.organizations:
        matched = match_organization(org, term)
        if matched:
            results.append(SearchResult(
                type=EntityType.ORGANIZATION,
                id=org.id,
                name=org.name,
                details=org,
                matched_fields=matched,
            ))

    for person in snapshot.personnel:
        matched = match_personnel(person, term)
        if matched:
            results.append(SearchResult(
                type=EntityType.PERSONNEL,
                id=person.id,
                name=person.name,
                details=person,
                matched_fields=matched,
            ))

    return results


# 人员列表筛选的关键词字段
PERSONNEL_FILTER_FIELDS = ("name", "position", "email", "department")

# 组织 / 状态筛选中表示"不限"的值
FILTER_ALL = "all"


def filter_personnel(
    personnel: Iterable[Personnel],
    term: str = "",
    organization_id: Optional[str] = FILTER_ALL,
    status: Union[PersonnelStatus, str, None] = FILTER_ALL,
) -> List[Personnel]:
    """人员列表筛选

    关键词对姓名、职位、邮箱、部门做不区分大小写的子串匹配，空关键词匹配全部；
    organization_id / status 为 None 或 "all" 时不限。三个条件同时满足才保留，顺序不变。
    """
    lowered = (term or "").lower()
    any_org = organization_id in (None, FILTER_ALL)
    any_status = status in (None, FILTER_ALL)
    if not any_status:
        status = PersonnelStatus(status)

    matched = []
    for person in personnel:
        if lowered and not any(lowered in getattr(person, f).lower() for f in PERSONNEL_FILTER_FIELDS):
            continue
        if not any_org and person.organization_id != organization_id:
            continue
        if not any_status and person.status != status:
            continue
        matched.append(person)
    return matched


class SearchIndex:
    """实时搜索状态

    区分两种"没有结果"：
    - 关键词为空：visible 为 False，结果面板隐藏
    - 搜索已执行但无命中：visible 为 True，results 为空列表

    使用示例:
        index = SearchIndex(store.snapshot)
        store.add_listener(index.refresh)

        index.set_term("张三")
        index.results   # [SearchResult(...)]
        index.visible   # True

        index.set_term("")
        index.visible   # False
    """

    def __init__(self, snapshot_provider: Callable[[], StoreSnapshot]):
        self._snapshot_provider = snapshot_provider
        self._lock = threading.Lock()
        self._term = ""
        self._results: List[SearchResult] = []
        self._visible = False

    @property
    def term(self) -> str:
        return self._term

    @property
    def results(self) -> List[SearchResult]:
        return list(self._results)

    @property
    def visible(self) -> bool:
        return self._visible

    def set_term(self, term: Optional[str]) -> List[SearchResult]:
        """设置关键词并重新搜索"""
        with self._lock:
            self._term = term or ""
            self._recompute()
            return list(self._results)

    def refresh(self) -> None:
        """数据变化后按当前关键词重新搜索"""
        with self._lock:
            self._recompute()

    def close(self) -> None:
        """关闭结果面板，保留关键词"""
        with self._lock:
            self._visible = False

    def clear(self) -> None:
        """清空关键词并隐藏结果"""
        self.set_term("")

    def _recompute(self) -> None:
        if self._term.strip():
            self._results = search_records(self._snapshot_provider(), self._term)
            self._visible = True
            logger.debug(f"搜索 {self._term!r} 命中 {len(self._results)} 条")
        else:
            self._results = []
            self._visible = False


__all__ = [
    "ORGANIZATION_SEARCH_FIELDS",
    "PERSONNEL_SEARCH_FIELDS",
    "match_organization",
    "match_personnel",
    "search_records",
    "PERSONNEL_FILTER_FIELDS",
    "FILTER_ALL",
    "filter_personnel",
    "SearchIndex",
]
