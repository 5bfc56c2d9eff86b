"""
组织管理模块 - 批量导入

BatchImportProcessor 把外部原始行逐行写入 EntityStore：

- 行号从 1 开始；第 0 行表示整个文件或整个批次级别的错误
- 每行单独校验，失败的行记录错误后继续处理下一行（只保证单行原子）
- 单行的第一个失败校验即终止该行，每行最多一条错误
- 全部行处理完后追加一条 batch-import 操作日志

整批导入是一个异步工作单元：行循环在工作线程中执行，调用方 await 到最终结果，
不产生中间进度。存储锁只在单行写入期间持有，导入进行中其他协程仍可读取存储。
超时后在下一个行边界停止，已写入的行保留。

使用示例:
    processor = BatchImportProcessor(store, ImporterSettings(timeout_seconds=30))
    result = await processor.import_rows("personnel", rows)
    result.success, result.failed, result.errors
"""

import asyncio
import csv
import threading
from typing import List, Optional, Sequence, Union

from yorg.config import ImporterSettings
from yorg.log import get_logger
from yorg.utils import generate_id, is_blank

from .enums import EntityType, OperationType
from .factory import organization_data_from_row, personnel_data_from_row
from .record_source import RecordSource
from .schemas import BatchImportError, BatchImportResult, RawRow
from .store import EntityStore

logger = get_logger()

ImportKind = Union[EntityType, str]

# 错误字段
FIELD_GENERAL = "general"
FIELD_FILE = "file"
FIELD_TIMEOUT = "timeout"

MSG_ORG_NAME_REQUIRED = "组织名称不能为空"
MSG_PERSON_NAME_REQUIRED = "姓名不能为空"
MSG_EMAIL_INVALID = "邮箱格式不正确"
MSG_BAD_FORMAT = "数据格式错误"
MSG_TIMEOUT = "导入超时"
MSG_PARSE_FAILED = "文件解析失败"


class _ImportRun:
    """一次导入的进度，由工作线程写入"""

    def __init__(self, kind: EntityType, rows: Sequence[RawRow]):
        self.kind = kind
        self.rows = rows
        self.success = 0
        self.processed = 0
        self.errors: List[BatchImportError] = []
        self.stop = threading.Event()

    def to_result(self) -> BatchImportResult:
        # 未处理的行（超时后剩余的行）计为失败
        return BatchImportResult(
            success=self.success,
            failed=len(self.rows) - self.success,
            errors=list(self.errors),
        )


class BatchImportProcessor:
    """批量导入处理器"""

    def __init__(self, store: EntityStore, settings: Optional[ImporterSettings] = None):
        self.store = store
        self.settings = settings or ImporterSettings()

    async def import_rows(self, kind: ImportKind, rows: Sequence[RawRow]) -> BatchImportResult:
        """导入一批原始行

        Args:
            kind: "organization" 或 "personnel"
            rows: 原始行列表，列名与导入模板一致

        Returns:
            导入结果，success + failed 等于行数（超时时额外附带一条第 0 行错误）
        """
        run = _ImportRun(EntityType(kind), list(rows))
        logger.info(f"开始批量导入{run.kind.label}，共 {len(run.rows)} 行")

        worker = asyncio.ensure_future(asyncio.to_thread(self._process, run))
        done, _ = await asyncio.wait({worker}, timeout=self.settings.timeout_seconds)
        timed_out = worker not in done
        if timed_out:
            run.stop.set()
        # 工作线程在下一个行边界退出，异常在这里重新抛出
        await worker

        result = run.to_result()
        if timed_out and run.processed < len(run.rows):
            result.errors.append(BatchImportError(row=0, field=FIELD_TIMEOUT, message=MSG_TIMEOUT))
            logger.warning(
                f"批量导入{run.kind.label}超时（{self.settings.timeout_seconds}秒），"
                f"已处理 {run.processed}/{len(run.rows)} 行"
            )
        logger.info(
            f"批量导入{run.kind.label}完成: 成功 {result.success} 条，失败 {result.failed} 条"
        )
        return result

    async def import_from_source(self, kind: ImportKind, source: RecordSource) -> BatchImportResult:
        """从记录源读取原始行后导入

        记录源解析失败时不写入任何数据，返回一条第 0 行的 file 错误。
        """
        try:
            rows = await asyncio.to_thread(source.read)
        except (OSError, UnicodeDecodeError, ValueError, csv.Error) as e:
            logger.warning(f"记录源解析失败: {e}")
            return BatchImportResult(
                success=0,
                failed=1,
                errors=[BatchImportError(row=0, field=FIELD_FILE, message=f"{MSG_PARSE_FAILED}: {e}")],
            )
        return await self.import_rows(kind, rows)

    # ==================== 工作线程 ====================

    def _process(self, run: _ImportRun) -> None:
        # 每行单独持有存储锁，行与行之间其他读写可以进入；整批结束时由批次日志统一通知监听器
        for index, row in enumerate(run.rows, start=1):
            if run.stop.is_set():
                break
            with self.store.transaction(notify=False):
                error = self._import_row(run.kind, row, index)
            if error is None:
                run.success += 1
            else:
                run.errors.append(error)
                logger.debug(f"第 {index} 行导入失败: {error.field} {error.message}")
            run.processed = index

        failed = len(run.rows) - run.success
        self.store.record_operation(
            OperationType.BATCH_IMPORT,
            run.kind,
            generate_id("batch_"),
            f"批量导入{run.kind.label}，成功{run.success}条，失败{failed}条",
            batch_size=len(run.rows),
        )

    def _import_row(self, kind: EntityType, row: RawRow, index: int) -> Optional[BatchImportError]:
        try:
            if kind is EntityType.ORGANIZATION:
                return self._import_organization(row, index)
            return self._import_personnel(row, index)
        except Exception as e:
            logger.debug(f"第 {index} 行数据异常: {e!r}", exc_info=True)
            return BatchImportError(row=index, field=FIELD_GENERAL, message=MSG_BAD_FORMAT)

    def _import_organization(self, row: RawRow, index: int) -> Optional[BatchImportError]:
        if is_blank(row.get("name")):
            return BatchImportError(row=index, field="name", message=MSG_ORG_NAME_REQUIRED)
        self.store.create_organization(organization_data_from_row(row))
        return None

    def _import_personnel(self, row: RawRow, index: int) -> Optional[BatchImportError]:
        if is_blank(row.get("name")):
            return BatchImportError(row=index, field="name", message=MSG_PERSON_NAME_REQUIRED)
        email = row.get("email")
        if not isinstance(email, str) or "@" not in email:
            return BatchImportError(row=index, field="email", message=MSG_EMAIL_INVALID)
        self.store.create_personnel(
            personnel_data_from_row(row),
            fallback_organization_id=self.settings.fallback_organization_id,
        )
        return None


__all__ = [
    "FIELD_GENERAL",
    "FIELD_FILE",
    "FIELD_TIMEOUT",
    "BatchImportProcessor",
]
