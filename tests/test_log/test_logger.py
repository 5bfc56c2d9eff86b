"""日志模块测试"""

import logging

import pytest

from yorg.config import LoggingSettings
from yorg.log import (
    LoggingConfigProtocol,
    MicrosecondFormatter,
    create_formatter,
    get_logger,
    setup_logger,
    setup_root_logger,
)


@pytest.fixture
def restore_root_logger():
    """测试后恢复根日志器"""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    root.propagate = True


class TestGetLogger:
    """get_logger 测试"""

    def test_auto_module_name(self):
        """测试自动推断模块名"""
        assert get_logger().name == __name__

    def test_short_name_prefixed(self):
        """测试简写名称自动加前缀"""
        assert get_logger("importer").name == "yorg.importer"
        assert get_logger("yorg").name == "yorg"
        assert get_logger("app.jobs").name == "app.jobs"


class TestSetupLogger:
    """setup_logger 测试"""

    def test_repeated_setup_does_not_stack(self):
        """测试重复配置不叠加处理器"""
        setup_logger("yorg.test_stack", level="DEBUG")
        logger = setup_logger("yorg.test_stack", level="WARNING")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_file_handler_with_date(self, tmp_path):
        """测试写入文件并展开日期占位符"""
        log_file = tmp_path / "logs" / "yorg_{date}.log"
        logger = setup_logger("yorg.test_file", log_file=str(log_file), console=False)
        logger.info("组织已创建")
        for handler in logger.handlers:
            handler.flush()

        files = list((tmp_path / "logs").iterdir())
        assert len(files) == 1
        assert "{date}" not in files[0].name
        assert "组织已创建" in files[0].read_text(encoding="utf-8")

    def test_root_logger_from_config(self, restore_root_logger, tmp_path):
        """测试按配置对象设置根日志器"""
        config = LoggingSettings(level="ERROR", file_path=str(tmp_path / "root.log"), enable_console=False)
        assert isinstance(config, LoggingConfigProtocol)

        root = setup_root_logger(config=config)

        assert root.level == logging.ERROR
        assert [type(h) for h in root.handlers] == [logging.FileHandler]


class TestFormatter:
    """格式化器测试"""

    def test_microseconds(self):
        """测试微秒精度时间"""
        formatter = create_formatter()
        record = logging.LogRecord("yorg", logging.INFO, __file__, 1, "msg", None, None)
        assert isinstance(formatter, MicrosecondFormatter)
        assert len(formatter.formatTime(record).split(".")[-1]) == 6

    def test_plain_formatter(self):
        """测试关闭微秒精度"""
        formatter = create_formatter(use_microseconds=False)
        assert not isinstance(formatter, MicrosecondFormatter)
