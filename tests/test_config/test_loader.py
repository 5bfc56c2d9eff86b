"""配置模块 - YAML 加载测试"""

import pytest

from yorg.config import AppSettings, ConfigLoader, load_yaml_config


@pytest.fixture(autouse=True)
def clear_config_cache():
    """每个测试前后清空配置缓存"""
    ConfigLoader.clear_cache()
    yield
    ConfigLoader.clear_cache()


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "app_name: 测试系统\n"
        "seed_data: false\n"
        "store:\n"
        "  strict_not_found: true\n"
        "importer:\n"
        "  timeout_seconds: 30\n",
        encoding="utf-8",
    )
    return path


class TestConfigLoader:
    """ConfigLoader 测试"""

    def test_load(self, settings_file):
        """测试加载 YAML 文件"""
        config = ConfigLoader.load(str(settings_file))
        assert config["store"]["strict_not_found"] is True

    def test_cache(self, settings_file):
        """测试按绝对路径缓存"""
        first = ConfigLoader.load(str(settings_file))
        settings_file.write_text("app_name: 新名称\n", encoding="utf-8")

        assert ConfigLoader.load(str(settings_file)) is first
        assert ConfigLoader.reload(str(settings_file))["app_name"] == "新名称"
        assert ConfigLoader.get_cached_paths() == [str(settings_file)]

    def test_base_dir(self, settings_file):
        """测试相对路径配合基础目录"""
        config = ConfigLoader.load("settings.yaml", base_dir=str(settings_file.parent))
        assert config["app_name"] == "测试系统"

    def test_missing_file(self, tmp_path):
        """测试文件不存在"""
        with pytest.raises(FileNotFoundError):
            ConfigLoader.load(str(tmp_path / "missing.yaml"))

    def test_empty_file(self, tmp_path):
        """测试空文件返回空字典"""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert ConfigLoader.load(str(path)) == {}


class TestLoadYamlConfig:
    """load_yaml_config 测试"""

    def test_settings_instance(self, settings_file):
        """测试得到配置实例"""
        settings = load_yaml_config(str(settings_file), AppSettings)

        assert settings.app_name == "测试系统"
        assert settings.seed_data is False
        assert settings.store.strict_not_found is True
        assert settings.importer.timeout_seconds == 30
        # 未配置的子项使用默认值
        assert settings.auth.username == "zuzhiguanli"

    def test_overrides_not_cached(self, settings_file):
        """测试覆盖参数不写回缓存"""
        settings = load_yaml_config(str(settings_file), AppSettings, app_name="覆盖")
        assert settings.app_name == "覆盖"
        assert ConfigLoader.load(str(settings_file))["app_name"] == "测试系统"
