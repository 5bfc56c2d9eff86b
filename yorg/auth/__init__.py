"""认证模块

提供控制台的共享口令登录（单一账号，不是多用户认证体系）。

使用示例:
    from yorg.auth import SharedCredentialGate

    gate = SharedCredentialGate(settings.auth)
    if gate.login(username, password):
        ...
"""

from .password import hash_password, verify_password
from .gate import SharedCredentialGate

__all__ = [
    "hash_password",
    "verify_password",
    "SharedCredentialGate",
]
