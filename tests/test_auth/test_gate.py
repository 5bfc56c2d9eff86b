"""认证模块 - 共享口令测试"""

from yorg.auth import SharedCredentialGate, hash_password, verify_password
from yorg.config import AuthSettings


class TestPassword:
    """口令哈希测试"""

    def test_hash_returns_pbkdf2_format(self):
        """测试哈希返回 pbkdf2 格式"""
        assert hash_password("123456").startswith("$pbkdf2-sha256$")

    def test_verify(self):
        """测试验证口令"""
        hashed = hash_password("123456")
        assert verify_password("123456", hashed) is True
        assert verify_password("654321", hashed) is False

    def test_verify_empty_or_unknown_hash(self):
        """测试空值与无法识别的哈希返回 False"""
        assert verify_password("123456", "") is False
        assert verify_password("123456", None) is False
        assert verify_password("", hash_password("123456")) is False
        assert verify_password("123456", "not-a-hash") is False


class TestSharedCredentialGate:
    """共享口令门禁测试"""

    def test_login_success(self):
        """测试登录成功"""
        gate = SharedCredentialGate(AuthSettings())
        assert gate.login("zuzhiguanli", "123456") is True
        assert gate.logged_in is True

    def test_wrong_username(self):
        """测试用户名错误"""
        gate = SharedCredentialGate(AuthSettings())
        assert gate.login("admin", "123456") is False
        assert gate.logged_in is False

    def test_failed_login_keeps_state(self):
        """测试登录失败不改变已登录状态"""
        gate = SharedCredentialGate(AuthSettings())
        gate.login("zuzhiguanli", "123456")
        assert gate.login("zuzhiguanli", "wrong") is False
        assert gate.logged_in is True

    def test_logout(self):
        """测试退出登录"""
        gate = SharedCredentialGate(AuthSettings())
        gate.login("zuzhiguanli", "123456")
        gate.logout()
        assert gate.logged_in is False

    def test_check_does_not_login(self):
        """测试只校验不登录"""
        gate = SharedCredentialGate(AuthSettings(username="u", password="p"))
        assert gate.check("u", "p") is True
        assert gate.check(None, None) is False
        assert gate.logged_in is False
