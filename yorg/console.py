"""
管理控制台

OrgConsole 把实体存储、搜索状态、批量导入和共享口令门禁组装在一起，
对外提供界面层需要的全部操作。所有派生视图（组织树、统计、搜索结果）
都在调用时基于存储快照重新计算。

使用示例:
    from yorg.config import AppSettings
    from yorg.console import OrgConsole

    console = OrgConsole.from_settings(AppSettings())
    console.login("zuzhiguanli", "123456")

    console.get_statistics().total_personnel
    console.search("张三")
    forest = console.build_organization_tree()

    result = await console.import_batch("personnel", rows)
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from yorg.auth import SharedCredentialGate
from yorg.config import AppSettings
from yorg.log import get_logger, setup_root_logger
from yorg.organization import (
    BatchImportProcessor,
    BatchImportResult,
    CascadePreview,
    EntityStore,
    EntityType,
    Notification,
    NotificationCenter,
    OperationLogEntry,
    OperationType,
    Organization,
    OrgNode,
    Personnel,
    PersonnelStatus,
    RawRow,
    RecordSource,
    SearchIndex,
    SearchResult,
    Statistics,
    build_tree,
    compute_statistics,
    export_filename,
    export_rows,
    filter_personnel,
    filter_tree,
    import_template,
    load_seed,
)
from yorg.organization.export import ExportKind

logger = get_logger()


class OrgConsole:
    """组织管理控制台"""

    def __init__(
        self,
        store: Optional[EntityStore] = None,
        settings: Optional[AppSettings] = None,
        gate: Optional[SharedCredentialGate] = None,
    ):
        self.settings = settings or AppSettings()
        self.store = store or EntityStore(self.settings.store)
        self.gate = gate or SharedCredentialGate(self.settings.auth)
        self.importer = BatchImportProcessor(self.store, self.settings.importer)
        self.search_index = SearchIndex(self.store.snapshot)
        self.notifications = NotificationCenter()
        # 数据变化后按当前关键词刷新搜索结果
        self.store.add_listener(self.search_index.refresh)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[AppSettings] = None,
        seed: Optional[bool] = None,
        configure_logging: bool = False,
    ) -> "OrgConsole":
        """根据配置创建控制台

        Args:
            settings: 应用配置，默认读取环境变量
            seed: 是否载入种子数据，默认取 settings.seed_data
            configure_logging: 是否按 settings.logging 配置根日志器
        """
        settings = settings or AppSettings()
        if configure_logging:
            setup_root_logger(config=settings.logging)
        console = cls(settings=settings)
        if settings.seed_data if seed is None else seed:
            load_seed(console.store, console.notifications)
        logger.info(f"{settings.app_name} 已启动")
        return console

    # ==================== 登录 ====================

    @property
    def is_logged_in(self) -> bool:
        return self.gate.logged_in

    def login(self, username: str, password: str) -> bool:
        return self.gate.login(username, password)

    def logout(self) -> None:
        """退出登录，同时清空搜索关键词并隐藏结果"""
        self.gate.logout()
        self.search_index.clear()

    # ==================== 组织与人员 ====================

    def create_organization(self, data: Any) -> Organization:
        return self.store.create_organization(data)

    def update_organization(self, org: Any) -> Optional[Organization]:
        return self.store.update_organization(org)

    def preview_organization_delete(self, org_id: str) -> Optional[CascadePreview]:
        return self.store.preview_organization_delete(org_id)

    def delete_organization(self, org_id: str) -> Optional[CascadePreview]:
        return self.store.delete_organization(org_id)

    def create_personnel(self, data: Any) -> Personnel:
        return self.store.create_personnel(data)

    def update_personnel(self, person: Any) -> Optional[Personnel]:
        return self.store.update_personnel(person)

    def delete_personnel(self, personnel_id: str) -> Optional[Personnel]:
        return self.store.delete_personnel(personnel_id)

    # ==================== 派生视图 ====================

    def build_organization_tree(self) -> List[OrgNode]:
        snapshot = self.store.snapshot()
        return build_tree(snapshot.organizations, snapshot.personnel)

    def filter_tree(self, term: str) -> List[OrgNode]:
        return filter_tree(self.build_organization_tree(), term)

    def get_statistics(self) -> Statistics:
        return compute_statistics(self.store.snapshot())

    def search(self, term: str) -> List[SearchResult]:
        return self.search_index.set_term(term)

    @property
    def search_visible(self) -> bool:
        return self.search_index.visible

    @property
    def search_results(self) -> List[SearchResult]:
        return self.search_index.results

    def close_search(self) -> None:
        self.search_index.close()

    def filter_personnel(
        self,
        term: str = "",
        organization_id: Optional[str] = "all",
        status: Union[PersonnelStatus, str, None] = "all",
    ) -> List[Personnel]:
        """人员列表：关键词 + 组织 + 状态筛选"""
        return filter_personnel(self.store.list_personnel(), term, organization_id, status)

    # ==================== 操作日志 ====================

    def get_operation_log(self, limit: Optional[int] = None) -> List[OperationLogEntry]:
        return self.store.get_operation_log(limit)

    def recent_operations(self, limit: Optional[int] = None) -> List[OperationLogEntry]:
        return self.store.recent_operations(limit)

    # ==================== 通知 ====================

    def get_notifications(self) -> List[Notification]:
        return self.notifications.notifications

    @property
    def unread_count(self) -> int:
        return self.notifications.unread_count

    def mark_notification_read(self, notification_id: str) -> bool:
        return self.notifications.mark_as_read(notification_id)

    def mark_all_notifications_read(self) -> int:
        return self.notifications.mark_all_as_read()

    def delete_notification(self, notification_id: str) -> Optional[Notification]:
        return self.notifications.delete(notification_id)

    # ==================== 导入导出 ====================

    async def import_batch(self, kind: ExportKind, rows: Sequence[RawRow]) -> BatchImportResult:
        return await self.importer.import_rows(kind, rows)

    async def import_from_source(self, kind: ExportKind, source: RecordSource) -> BatchImportResult:
        return await self.importer.import_from_source(kind, source)

    def import_template(self, kind: ExportKind) -> List[Dict[str, Any]]:
        return import_template(kind)

    def export(self, kind: ExportKind) -> List[Dict[str, Any]]:
        """导出展示格式的数据行，并记录一条导出日志"""
        entity_type = EntityType(kind)
        rows = export_rows(self.store.snapshot(), entity_type)
        self.store.record_operation(
            OperationType.CREATE,
            entity_type,
            "export",
            f"导出{entity_type.label}数据，共{len(rows)}条记录",
        )
        logger.info(f"导出{entity_type.label}数据 {len(rows)} 条 -> {export_filename(entity_type, date.today())}")
        return rows


__all__ = ["OrgConsole"]
