"""密码工具模块

提供共享口令的哈希与验证，只保存哈希值，不保存明文。

使用示例:
    from yorg.auth.password import hash_password, verify_password

    hashed = hash_password("123456")
    verify_password("123456", hashed)   # True
"""

from typing import Optional

from passlib.context import CryptContext

# 密码哈希上下文，使用 pbkdf2_sha256
_pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto"
)


def hash_password(password: str) -> str:
    """对口令进行哈希处理

    Returns:
        哈希后的口令字符串（格式：$pbkdf2-sha256$...）
    """
    return _pwd_context.hash(password)


def verify_password(password: Optional[str], hashed: Optional[str]) -> bool:
    """验证口令，空值或无法识别的哈希格式返回 False"""
    if not password or not hashed:
        return False
    try:
        return _pwd_context.verify(password, hashed)
    except ValueError:
        return False


__all__ = [
    "hash_password",
    "verify_password",
]
