"""
组织管理模块 (Organization Module)

提供组织与人员的内存管理核心：
- EntityStore: 组织、人员、操作日志的唯一写入口，维护人员数量与级联删除
- hierarchy: 从扁平组织集合构建组织树，按关键词过滤
- statistics: 基于快照的统计计算
- search: 全文搜索、实时搜索状态与人员列表筛选
- NotificationCenter: 系统通知的已读、删除与未读计数
- BatchImportProcessor: 原始行批量导入，逐行校验、部分成功

使用示例:
    from yorg.organization import EntityStore, build_tree, compute_statistics

    store = EntityStore()
    company = store.create_organization({"name": "示例公司", "type": "company"})
    store.create_personnel({"name": "张三", "organizationId": company.id, "email": "z@example.com"})

    snapshot = store.snapshot()
    forest = build_tree(snapshot.organizations, snapshot.personnel)
    stats = compute_statistics(snapshot)
"""

from .enums import (
    OrgType,
    OrgStatus,
    PersonnelStatus,
    Gender,
    OperationType,
    EntityType,
)
from .schemas import (
    RawRow,
    Organization,
    Personnel,
    FieldChange,
    OperationLogEntry,
    StoreSnapshot,
    CascadePreview,
    OrgNode,
    SearchResult,
    BatchImportError,
    BatchImportResult,
    Statistics,
)
from .factory import (
    build_organization,
    build_personnel,
    organization_data_from_row,
    personnel_data_from_row,
)
from .store import EntityStore, UNKNOWN_ORGANIZATION
from .hierarchy import (
    build_tree,
    filter_tree,
    prune_tree,
    flatten_tree,
    find_node,
    get_node_path,
    tree_depth,
    get_ancestor_ids,
    get_descendant_ids,
    would_create_cycle,
)
from .statistics import compute_statistics, percentage, distribution_percentages
from .search import search_records, filter_personnel, SearchIndex
from .notifications import Notification, NotificationCenter
from .record_source import RecordSource, CsvRecordSource, RowsRecordSource
from .importer import BatchImportProcessor
from .export import import_template, export_rows, export_filename
from .seed import load_seed, seed_dataset

__all__ = [
    # 枚举
    "OrgType",
    "OrgStatus",
    "PersonnelStatus",
    "Gender",
    "OperationType",
    "EntityType",
    # 数据模型
    "RawRow",
    "Organization",
    "Personnel",
    "FieldChange",
    "OperationLogEntry",
    "StoreSnapshot",
    "CascadePreview",
    "OrgNode",
    "SearchResult",
    "BatchImportError",
    "BatchImportResult",
    "Statistics",
    # 记录工厂
    "build_organization",
    "build_personnel",
    "organization_data_from_row",
    "personnel_data_from_row",
    # 存储
    "EntityStore",
    "UNKNOWN_ORGANIZATION",
    # 组织树
    "build_tree",
    "filter_tree",
    "prune_tree",
    "flatten_tree",
    "find_node",
    "get_node_path",
    "tree_depth",
    "get_ancestor_ids",
    "get_descendant_ids",
    "would_create_cycle",
    # 统计
    "compute_statistics",
    "percentage",
    "distribution_percentages",
    # 搜索
    "search_records",
    "filter_personnel",
    "SearchIndex",
    # 通知
    "Notification",
    "NotificationCenter",
    # 导入导出
    "RecordSource",
    "CsvRecordSource",
    "RowsRecordSource",
    "BatchImportProcessor",
    "import_template",
    "export_rows",
    "export_filename",
    # 种子数据
    "load_seed",
    "seed_dataset",
]
