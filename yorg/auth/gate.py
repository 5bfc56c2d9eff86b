"""共享口令登录

控制台只有一个共享账号，登录结果只是一个布尔状态，
不区分用户、不签发令牌、不做会话管理。所有审计字段仍记为默认操作人。
"""

import hmac
import threading
from typing import Optional

from yorg.config import AuthSettings
from yorg.log import get_logger

from .password import hash_password, verify_password

logger = get_logger()


class SharedCredentialGate:
    """共享口令门禁

    使用示例:
        gate = SharedCredentialGate(AuthSettings())
        gate.login("zuzhiguanli", "123456")   # True
        gate.logged_in                        # True
        gate.logout()
    """

    def __init__(self, settings: Optional[AuthSettings] = None):
        settings = settings or AuthSettings()
        self._username = settings.username
        self._password_hash = hash_password(settings.password)
        self._logged_in = False
        self._lock = threading.Lock()

    @property
    def logged_in(self) -> bool:
        return self._logged_in

    def check(self, username: Optional[str], password: Optional[str]) -> bool:
        """只校验口令，不改变登录状态"""
        username_ok = hmac.compare_digest((username or "").encode(), self._username.encode())
        password_ok = verify_password(password, self._password_hash)
        return username_ok and password_ok

    def login(self, username: Optional[str], password: Optional[str]) -> bool:
        """登录，成功返回 True；失败返回 False 且不改变当前状态"""
        if not self.check(username, password):
            logger.warning(f"登录失败: 用户名 {username!r}")
            return False
        with self._lock:
            self._logged_in = True
        logger.info(f"登录成功: {username}")
        return True

    def logout(self) -> None:
        with self._lock:
            was_logged_in = self._logged_in
            self._logged_in = False
        if was_logged_in:
            logger.info("已退出登录")


__all__ = ["SharedCredentialGate"]
