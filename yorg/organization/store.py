"""
组织管理模块 - 实体存储

EntityStore 持有组织、人员和操作日志三个集合，是唯一的写入口。

一致性规则：
- 任何写操作完成后，每个组织的 employee_count 等于引用它的人员数量
- 删除组织级联删除其直属人员（不转移到上级组织），只记录一条删除日志
- 操作日志只追加不修改，对外按"最新在前"提供
- 写入组织时拒绝形成环的上级关系（可通过 StoreSettings.validate_acyclic 关闭）

并发模型：
所有写操作串行化在同一把可重入锁中，人员写入与所属组织计数的更新在同一个临界区内完成；
读操作通过 snapshot() 取得不可变快照。变更监听器在释放锁之后调用。
"""

import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from yorg.config import StoreSettings
from yorg.exceptions import Err, ErrorCode
from yorg.log import get_logger
from yorg.utils import generate_id

from .enums import EntityType, OperationType
from .factory import build_organization, build_personnel, to_field_data
from .hierarchy import would_create_cycle
from .schemas import (
    CascadePreview,
    FieldChange,
    OperationLogEntry,
    Organization,
    Personnel,
    StoreSnapshot,
)

logger = get_logger()

UNKNOWN_ORGANIZATION = "未知组织"

# 不参与变更对比的字段
_AUDIT_FIELDS = frozenset({"id", "created_by", "created_at", "updated_by", "updated_at", "employee_count"})

OrganizationInput = Union[Organization, Mapping[str, Any]]
PersonnelInput = Union[Personnel, Mapping[str, Any]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def diff_records(old, new) -> Dict[str, FieldChange]:
    """对比两条记录，返回值不同的业务字段"""
    old_data = old.model_dump(mode="json")
    new_data = new.model_dump(mode="json")
    changes = {}
    for key, old_value in old_data.items():
        if key in _AUDIT_FIELDS:
            continue
        new_value = new_data.get(key)
        if old_value != new_value:
            changes[key] = FieldChange(old=old_value, new=new_value)
    return changes


class EntityStore:
    """组织与人员的内存存储

    使用示例:
        from yorg.organization import EntityStore

        store = EntityStore()
        company = store.create_organization({"name": "示例公司", "type": "company"})
        dept = store.create_organization({"name": "技术部", "parentId": company.id})
        zhang = store.create_personnel({
            "name": "张三",
            "organizationId": dept.id,
            "email": "zhangsan@example.com",
        })

        store.get_organization(dept.id).employee_count   # 1

        preview = store.preview_organization_delete(dept.id)
        preview.personnel_count                          # 1
        store.delete_organization(dept.id)               # 同时删除张三
    """

    def __init__(
        self,
        settings: Optional[StoreSettings] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = generate_id,
    ):
        self.settings = settings or StoreSettings()
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()
        self._depth = 0
        # dict 保持插入顺序，按ID替换不改变位置
        self._organizations: Dict[str, Organization] = {}
        self._personnel: Dict[str, Personnel] = {}
        self._log: List[OperationLogEntry] = []
        self._listeners: List[Callable[[], None]] = []

    # ==================== 锁与通知 ====================

    @contextmanager
    def transaction(self, notify: bool = True):
        """写临界区

        嵌套使用时只在最外层退出后通知监听器；notify=False 时最外层退出也不通知，
        由之后的一次写入统一触发。批量导入逐行使用它，行与行之间释放锁。
        """
        with self._lock:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
                outermost = self._depth == 0
        if outermost and notify:
            self._notify()

    def add_listener(self, listener: Callable[[], None]) -> None:
        """注册数据变更监听器"""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _now(self) -> datetime:
        return self._clock()

    @property
    def operator_name(self) -> str:
        return self.settings.operator_name

    @property
    def operator_id(self) -> str:
        return self.settings.operator_id

    # ==================== 读取 ====================

    def snapshot(self) -> StoreSnapshot:
        """获取当前状态的不可变快照"""
        with self._lock:
            return StoreSnapshot(
                organizations=tuple(self._organizations.values()),
                personnel=tuple(self._personnel.values()),
                operation_log=tuple(self._log),
            )

    def get_organization(self, org_id: str) -> Optional[Organization]:
        with self._lock:
            return self._organizations.get(org_id)

    def get_personnel(self, personnel_id: str) -> Optional[Personnel]:
        with self._lock:
            return self._personnel.get(personnel_id)

    def list_organizations(self) -> List[Organization]:
        with self._lock:
            return list(self._organizations.values())

    def list_personnel(self) -> List[Personnel]:
        with self._lock:
            return list(self._personnel.values())

    def personnel_of(self, org_id: str) -> List[Personnel]:
        """组织的直属人员"""
        with self._lock:
            return [p for p in self._personnel.values() if p.organization_id == org_id]

    def organization_name(self, org_id: Optional[str]) -> str:
        """组织名称，悬空引用返回"未知组织" """
        org = self.get_organization(org_id) if org_id else None
        return org.name if org else UNKNOWN_ORGANIZATION

    def get_operation_log(self, limit: Optional[int] = None) -> List[OperationLogEntry]:
        """操作日志，最新在前"""
        with self._lock:
            entries = list(reversed(self._log))
        return entries[:limit] if limit is not None else entries

    def recent_operations(self, limit: Optional[int] = None) -> List[OperationLogEntry]:
        """最近的操作日志"""
        return self.get_operation_log(limit or self.settings.recent_operations_limit)

    # ==================== 内部工具 ====================

    def _count_personnel(self, org_id: str) -> int:
        return sum(1 for p in self._personnel.values() if p.organization_id == org_id)

    def _recount(self, org_id: Optional[str]) -> None:
        """从头重新统计组织人数"""
        if not org_id:
            return
        org = self._organizations.get(org_id)
        if org is None:
            return
        count = self._count_personnel(org_id)
        if org.employee_count != count:
            self._organizations[org_id] = org.model_copy(update={"employee_count": count})

    def _department_for(self, person: Personnel) -> Personnel:
        """用所属组织名称刷新部门冗余字段，组织不存在时保留原值"""
        org = self._organizations.get(person.organization_id)
        if org is not None and person.department != org.name:
            return person.model_copy(update={"department": org.name})
        return person

    def _check_parent(self, org_id: str, parent_id: Optional[str]) -> None:
        if not self.settings.validate_acyclic:
            return
        if would_create_cycle(self._organizations.values(), org_id, parent_id):
            raise Err.invalid(
                "上级组织不能是自身或其下级组织",
                code=ErrorCode.CIRCULAR_REFERENCE,
                field="parentId",
                org_id=org_id,
                parent_id=parent_id,
            )

    def _not_found(self, entity_type: EntityType, entity_id: str, action: str) -> None:
        if entity_type is EntityType.ORGANIZATION:
            message, code = f"组织不存在: {entity_id}", ErrorCode.ORGANIZATION_NOT_FOUND
        else:
            message, code = f"人员不存在: {entity_id}", ErrorCode.PERSONNEL_NOT_FOUND
        if self.settings.strict_not_found:
            raise Err.not_found(
                message,
                code=code,
                resource_type=entity_type.value,
                resource_id=entity_id,
            )
        logger.warning(f"{action}忽略，{message}")

    def record_operation(
        self,
        type: OperationType,
        entity_type: EntityType,
        entity_id: str,
        description: str,
        batch_size: Optional[int] = None,
        changes: Optional[Dict[str, FieldChange]] = None,
    ) -> OperationLogEntry:
        """追加一条操作日志"""
        with self.transaction():
            entry = OperationLogEntry(
                id=generate_id("log_"),
                type=type,
                entity_type=entity_type,
                entity_id=entity_id,
                operator_name=self.operator_name,
                operator_id=self.operator_id,
                timestamp=self._now(),
                description=description,
                batch_size=batch_size,
                changes=changes or None,
            )
            self._log.append(entry)
        return entry

    # ==================== 组织 ====================

    def create_organization(self, data: OrganizationInput) -> Organization:
        """创建组织

        Args:
            data: 组织数据（字典或模型），缺省值由 build_organization 统一补齐

        Returns:
            新建的组织记录

        Raises:
            pydantic.ValidationError: 数据无法转换为合法记录
            ValidationException: 上级组织形成环
        """
        with self.transaction():
            org = build_organization(
                data,
                record_id=self._id_factory(),
                operator_name=self.operator_name,
                now=self._now(),
            )
            self._check_parent(org.id, org.parent_id)
            org = org.model_copy(update={"employee_count": self._count_personnel(org.id)})
            self._organizations[org.id] = org
            self.record_operation(
                OperationType.CREATE,
                EntityType.ORGANIZATION,
                org.id,
                f"创建新组织: {org.name}",
            )
        logger.info(f"创建组织: {org.name} ({org.id})")
        return org

    def update_organization(self, org: OrganizationInput) -> Optional[Organization]:
        """按ID替换组织

        传入完整的 Organization 时整体替换；传入字典时只覆盖给出的字段。
        创建审计字段保留，employee_count 重新统计（不信任调用方的值）。

        Returns:
            更新后的组织；ID 不存在时返回 None（严格模式下抛出 ResourceNotFoundException）
        """
        fields = to_field_data(Organization, org)
        org_id = fields.get("id")
        with self.transaction():
            existing = self._organizations.get(org_id) if org_id else None
            if existing is None:
                self._not_found(EntityType.ORGANIZATION, str(org_id), "更新组织")
                return None

            merged = existing.model_dump()
            merged.update(fields)
            merged.update(
                id=existing.id,
                created_by=existing.created_by,
                created_at=existing.created_at,
                updated_by=self.operator_name,
                updated_at=self._now(),
                employee_count=self._count_personnel(existing.id),
            )
            updated = Organization.model_validate(merged)
            self._check_parent(updated.id, updated.parent_id)

            self._organizations[updated.id] = updated
            self.record_operation(
                OperationType.UPDATE,
                EntityType.ORGANIZATION,
                updated.id,
                f"更新组织信息: {updated.name}",
                changes=diff_records(existing, updated),
            )
        logger.info(f"更新组织: {updated.name} ({updated.id})")
        return updated

    def preview_organization_delete(self, org_id: str) -> Optional[CascadePreview]:
        """删除组织前的影响预览

        Returns:
            级联影响；组织不存在时返回 None（严格模式下抛出 ResourceNotFoundException）
        """
        with self._lock:
            org = self._organizations.get(org_id)
            if org is None:
                self._not_found(EntityType.ORGANIZATION, org_id, "删除预览")
                return None
            personnel_ids = tuple(
                p.id for p in self._personnel.values() if p.organization_id == org_id
            )
            child_count = sum(
                1 for other in self._organizations.values() if other.parent_id == org_id
            )
            return CascadePreview(
                organization_id=org_id,
                organization_name=org.name,
                personnel_count=len(personnel_ids),
                personnel_ids=personnel_ids,
                child_organization_count=child_count,
            )

    def delete_organization(self, org_id: str) -> Optional[CascadePreview]:
        """删除组织并级联删除其直属人员

        下级组织不会被删除，它们在下一次构建树时成为根节点。

        Returns:
            实际删除的影响范围；组织不存在时返回 None（严格模式下抛出异常）
        """
        with self.transaction():
            preview = self.preview_organization_delete(org_id)
            if preview is None:
                return None
            del self._organizations[org_id]
            for personnel_id in preview.personnel_ids:
                del self._personnel[personnel_id]
            self.record_operation(
                OperationType.DELETE,
                EntityType.ORGANIZATION,
                org_id,
                f"删除组织: {preview.organization_name}",
            )
        logger.info(
            f"删除组织: {preview.organization_name} ({org_id})，级联删除人员 {preview.personnel_count} 名"
        )
        return preview

    # ==================== 人员 ====================

    def create_personnel(
        self,
        data: PersonnelInput,
        fallback_organization_id: Optional[str] = None,
    ) -> Personnel:
        """创建人员，并重新统计所属组织人数

        Args:
            data: 人员数据（字典或模型）
            fallback_organization_id: 数据未指定组织时使用的组织ID

        Raises:
            pydantic.ValidationError: 数据无法转换为合法记录
        """
        with self.transaction():
            person = build_personnel(
                data,
                record_id=self._id_factory(),
                operator_name=self.operator_name,
                now=self._now(),
                fallback_organization_id=fallback_organization_id,
            )
            person = self._department_for(person)
            self._personnel[person.id] = person
            self._recount(person.organization_id)
            self.record_operation(
                OperationType.CREATE,
                EntityType.PERSONNEL,
                person.id,
                f"新增人员: {person.name}",
            )
        logger.info(f"新增人员: {person.name} ({person.id}) -> 组织 {person.organization_id}")
        return person

    def update_personnel(self, person: PersonnelInput) -> Optional[Personnel]:
        """按ID替换人员，并重新统计新旧所属组织的人数

        Returns:
            更新后的人员；ID 不存在时返回 None（严格模式下抛出 ResourceNotFoundException）
        """
        fields = to_field_data(Personnel, person)
        personnel_id = fields.get("id")
        with self.transaction():
            existing = self._personnel.get(personnel_id) if personnel_id else None
            if existing is None:
                self._not_found(EntityType.PERSONNEL, str(personnel_id), "更新人员")
                return None

            merged = existing.model_dump()
            merged.update(fields)
            merged.update(
                id=existing.id,
                created_by=existing.created_by,
                created_at=existing.created_at,
                updated_by=self.operator_name,
                updated_at=self._now(),
            )
            updated = self._department_for(Personnel.model_validate(merged))

            self._personnel[updated.id] = updated
            self._recount(existing.organization_id)
            self._recount(updated.organization_id)
            self.record_operation(
                OperationType.UPDATE,
                EntityType.PERSONNEL,
                updated.id,
                f"更新人员信息: {updated.name}",
                changes=diff_records(existing, updated),
            )
        logger.info(f"更新人员: {updated.name} ({updated.id})")
        return updated

    def delete_personnel(self, personnel_id: str) -> Optional[Personnel]:
        """删除人员，并重新统计原所属组织人数

        Returns:
            被删除的人员；ID 不存在时返回 None（严格模式下抛出 ResourceNotFoundException）
        """
        with self.transaction():
            person = self._personnel.pop(personnel_id, None)
            if person is None:
                self._not_found(EntityType.PERSONNEL, personnel_id, "删除人员")
                return None
            self._recount(person.organization_id)
            self.record_operation(
                OperationType.DELETE,
                EntityType.PERSONNEL,
                personnel_id,
                f"删除人员: {person.name}",
            )
        logger.info(f"删除人员: {person.name} ({personnel_id})")
        return person

    # ==================== 批量装载 ====================

    def load(
        self,
        organizations: Iterable[Organization],
        personnel: Iterable[Personnel],
        operation_log: Iterable[OperationLogEntry] = (),
    ) -> None:
        """整体替换存储内容（用于启动时载入种子数据），不产生操作日志

        operation_log 按"旧 -> 新"的顺序给出。人数缓存会被重新统计。
        """
        with self.transaction():
            self._organizations = {org.id: org for org in organizations}
            self._personnel = {p.id: p for p in personnel}
            self._log = list(operation_log)
            self.reconcile_employee_counts()

    def reconcile_employee_counts(self) -> int:
        """重新统计所有组织的人数，返回被修正的组织数量"""
        with self.transaction():
            fixed = 0
            for org_id, org in list(self._organizations.items()):
                count = self._count_personnel(org_id)
                if org.employee_count != count:
                    self._organizations[org_id] = org.model_copy(update={"employee_count": count})
                    fixed += 1
        if fixed:
            logger.info(f"修正组织人数缓存 {fixed} 条")
        return fixed

    def clear(self) -> None:
        """清空所有数据"""
        self.load((), (), ())


__all__ = [
    "UNKNOWN_ORGANIZATION",
    "EntityStore",
    "diff_records",
]
