"""
组织管理模块 - 数据模型

规范记录（Organization / Personnel / OperationLogEntry）均为不可变的 Pydantic 模型：
- 属性名使用 snake_case，同时接受并输出 camelCase 别名（parentId、employeeCount 等），
  与导入模板、导出数据中的列名一致
- 更新通过"按ID整体替换"完成，调用方用 model_copy(update=...) 构造新记录

树节点 OrgNode 与统计快照 Statistics 是派生视图，每次读取重新计算，不进入存储。
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import (
    EntityType,
    Gender,
    OperationType,
    OrgStatus,
    OrgType,
    PersonnelStatus,
)


# 外部记录源产出的原始行：列名 -> 任意值，未经校验
RawRow = Dict[str, Any]


class RecordModel(BaseModel):
    """记录模型基类"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,      # 同时接受 snake_case 与 camelCase
        extra="ignore",             # 忽略额外字段，便于从原始字典创建
        frozen=True,
    )

    def to_camel_dict(self) -> Dict[str, Any]:
        """导出为 camelCase 字典（JSON 友好）"""
        return self.model_dump(by_alias=True, mode="json")


# ==================== 规范记录 ====================

class Organization(RecordModel):
    """组织"""
    id: str = Field(..., description="组织ID")
    name: str = Field(..., description="组织名称")
    type: OrgType = Field(OrgType.DEPARTMENT, description="组织类型")
    parent_id: Optional[str] = Field(None, description="上级组织ID，为空表示根组织")
    description: Optional[str] = Field(None, description="描述")
    location: Optional[str] = Field(None, description="地点")
    manager: Optional[str] = Field(None, description="负责人")
    established_date: date = Field(..., description="成立日期")
    status: OrgStatus = Field(OrgStatus.ACTIVE, description="状态")
    employee_count: int = Field(0, ge=0, description="人员数量（派生缓存）")
    created_by: str = Field(..., description="创建人")
    created_at: datetime = Field(..., description="创建时间")
    updated_by: Optional[str] = Field(None, description="更新人")
    updated_at: Optional[datetime] = Field(None, description="更新时间")


class Personnel(RecordModel):
    """人员"""
    id: str = Field(..., description="人员ID")
    name: str = Field(..., description="姓名")
    position: str = Field("", description="职位")
    organization_id: str = Field(..., description="所属组织ID")
    email: str = Field("", description="邮箱")
    phone: str = Field("", description="电话")
    join_date: date = Field(..., description="入职日期")
    status: PersonnelStatus = Field(PersonnelStatus.ACTIVE, description="状态")
    department: str = Field("", description="部门（所属组织名称的冗余副本）")
    manager: Optional[str] = Field(None, description="直属领导")
    salary: Optional[int] = Field(None, description="薪资")
    age: Optional[int] = Field(None, description="年龄")
    gender: Optional[Gender] = Field(None, description="性别")
    education: Optional[str] = Field(None, description="学历")
    created_by: str = Field(..., description="创建人")
    created_at: datetime = Field(..., description="创建时间")
    updated_by: Optional[str] = Field(None, description="更新人")
    updated_at: Optional[datetime] = Field(None, description="更新时间")


class FieldChange(RecordModel):
    """单个字段的变更"""
    old: Any = None
    new: Any = None


class OperationLogEntry(RecordModel):
    """操作日志条目，追加后不再修改"""
    id: str
    type: OperationType
    entity_type: EntityType
    entity_id: str
    operator_name: str
    operator_id: str
    timestamp: datetime
    description: str
    batch_size: Optional[int] = None
    changes: Optional[Dict[str, FieldChange]] = None


@dataclass(frozen=True)
class StoreSnapshot:
    """存储在某一时刻的只读快照，所有派生视图都基于快照计算"""
    organizations: Tuple[Organization, ...] = ()
    personnel: Tuple[Personnel, ...] = ()
    # 按追加顺序（旧 -> 新）
    operation_log: Tuple[OperationLogEntry, ...] = ()


@dataclass(frozen=True)
class CascadePreview:
    """删除组织前的影响预览，供界面生成确认提示"""
    organization_id: str
    organization_name: str
    personnel_count: int
    personnel_ids: Tuple[str, ...] = ()
    child_organization_count: int = 0

    @property
    def confirmation_message(self) -> str:
        message = f"确定要删除组织「{self.organization_name}」吗？"
        if self.personnel_count:
            message += f"这将同时删除该组织下的 {self.personnel_count} 名人员。"
        if self.child_organization_count:
            message += f"其 {self.child_organization_count} 个下级组织将变为顶级组织。"
        return message


# ==================== 派生视图 ====================

@dataclass
class OrgNode:
    """组织树节点

    children 与 personnel 只存在于树视图中，不会写回规范记录。
    """
    organization: Organization
    personnel: List[Personnel] = field(default_factory=list)
    children: List["OrgNode"] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.organization.id

    @property
    def name(self) -> str:
        return self.organization.name

    def copy_shallow(self, children: Optional[List["OrgNode"]] = None) -> "OrgNode":
        return OrgNode(
            organization=self.organization,
            personnel=list(self.personnel),
            children=list(self.children) if children is None else children,
        )


class SearchResult(BaseModel):
    """搜索结果"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: EntityType
    id: str
    name: str
    details: Union[Organization, Personnel]
    matched_fields: List[str] = Field(default_factory=list)


class BatchImportError(BaseModel):
    """导入错误：行号从 1 开始，0 表示整个文件级别的错误"""
    row: int
    field: str
    message: str


class BatchImportResult(BaseModel):
    """批量导入结果"""
    success: int = 0
    failed: int = 0
    errors: List[BatchImportError] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.success + self.failed


class Statistics(BaseModel):
    """统计快照"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_organizations: int = 0
    total_personnel: int = 0
    active_organizations: int = 0
    active_personnel: int = 0
    recent_operations: int = 0
    organizations_by_type: Dict[str, int] = Field(default_factory=dict)
    personnel_by_status: Dict[str, int] = Field(default_factory=dict)
    personnel_by_department: Dict[str, int] = Field(default_factory=dict)
    average_age: float = 0.0
    gender_distribution: Dict[str, int] = Field(default_factory=dict)
    education_distribution: Dict[str, int] = Field(default_factory=dict)
    salary_ranges: Dict[str, int] = Field(default_factory=dict)
    monthly_join_trend: Dict[str, int] = Field(default_factory=dict)


__all__ = [
    "RawRow",
    "RecordModel",
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
]
