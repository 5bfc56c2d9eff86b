"""
组织管理模块 - 通知中心

内存中的系统通知列表，支持标记已读、全部已读、删除和未读计数。
通知与组织/人员数据相互独立，不产生操作日志。

使用示例:
    center = NotificationCenter()
    center.notify("新员工入职", "技术部新增3名员工")
    center.unread_count      # 1
    center.mark_all_as_read()
"""

import threading
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from pydantic import Field

from yorg.log import get_logger
from yorg.utils import generate_id

from .schemas import RecordModel

logger = get_logger()


class Notification(RecordModel):
    """系统通知"""

    id: str
    title: str = Field(..., description="标题")
    message: str = Field("", description="内容")
    time: datetime = Field(..., description="通知时间")
    read: bool = Field(False, description="是否已读")


class NotificationCenter:
    """通知中心

    列表按"最新在前"保存；notify() 新增的通知插入到最前面。
    未知 ID 的标记与删除是空操作。
    """

    def __init__(
        self,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._id_factory = id_factory or (lambda: generate_id("notice_"))
        self._lock = threading.Lock()
        self._items: List[Notification] = []

    @property
    def notifications(self) -> List[Notification]:
        with self._lock:
            return list(self._items)

    @property
    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for item in self._items if not item.read)

    def get(self, notification_id: str) -> Optional[Notification]:
        with self._lock:
            return self._find(notification_id)

    def load(self, notifications: Iterable[Notification]) -> None:
        """替换全部通知"""
        with self._lock:
            self._items = list(notifications)

    def notify(self, title: str, message: str = "") -> Notification:
        """新增一条未读通知"""
        notification = Notification(id=self._id_factory(), title=title, message=message, time=self._clock())
        with self._lock:
            self._items.insert(0, notification)
        logger.info(f"新通知: {title}")
        return notification

    def mark_as_read(self, notification_id: str) -> bool:
        """标记为已读，返回是否找到该通知"""
        with self._lock:
            for i, item in enumerate(self._items):
                if item.id == notification_id:
                    if not item.read:
                        self._items[i] = item.model_copy(update={"read": True})
                    return True
        return False

    def mark_all_as_read(self) -> int:
        """全部标记为已读，返回本次变为已读的数量"""
        with self._lock:
            changed = 0
            for i, item in enumerate(self._items):
                if not item.read:
                    self._items[i] = item.model_copy(update={"read": True})
                    changed += 1
            return changed

    def delete(self, notification_id: str) -> Optional[Notification]:
        """删除通知，返回被删除的通知"""
        with self._lock:
            item = self._find(notification_id)
            if item is not None:
                self._items.remove(item)
            return item

    def _find(self, notification_id: str) -> Optional[Notification]:
        for item in self._items:
            if item.id == notification_id:
                return item
        return None


__all__ = [
    "Notification",
    "NotificationCenter",
]
