"""
配置模块
提供核心库的默认配置，业务项目可以继承并覆盖
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class LoggingSettings(BaseSettings):
    """日志配置

    使用示例:
        from yorg.config import LoggingSettings

        log_config = LoggingSettings(level="DEBUG", file_path="logs/yorg_{date}.log")
    """
    level: str = Field(default="INFO", description="日志级别")
    file_path: str = Field(default="", description="日志文件路径，留空表示不写文件，支持 {date} 占位符")
    file_encoding: str = Field(default="utf-8", description="文件编码")
    enable_console: bool = Field(default=True, description="是否启用控制台输出")

    class Config:
        env_prefix = "YORG_LOG_"


class StoreSettings(BaseSettings):
    """实体存储配置

    使用示例:
        from yorg.config import StoreSettings

        store_config = StoreSettings(strict_not_found=True)
    """
    operator_name: str = Field(default="系统管理员", description="审计字段中的操作人名称")
    operator_id: str = Field(default="admin", description="审计字段中的操作人ID")
    strict_not_found: bool = Field(
        default=False,
        description="按未知ID更新/删除时是否抛出 ResourceNotFoundException（默认静默忽略）"
    )
    validate_acyclic: bool = Field(default=True, description="写入组织时是否校验上级关系无环")
    recent_operations_limit: int = Field(default=10, description="最近操作列表的条数")

    class Config:
        env_prefix = "YORG_STORE_"


class ImporterSettings(BaseSettings):
    """批量导入配置

    使用示例:
        from yorg.config import ImporterSettings

        importer_config = ImporterSettings(timeout_seconds=30, fallback_organization_id="1")
    """
    timeout_seconds: Optional[float] = Field(
        default=60.0,
        description="单次批量导入的超时时间（秒），None 表示不限制"
    )
    fallback_organization_id: str = Field(default="1", description="人员行未指定组织时使用的组织ID")

    class Config:
        env_prefix = "YORG_IMPORT_"


class AuthSettings(BaseSettings):
    """共享口令配置

    控制台只有一个共享账号，不是多用户认证体系。
    生产环境请通过环境变量 YORG_AUTH_PASSWORD 覆盖默认口令。
    """
    username: str = Field(default="zuzhiguanli", description="共享账号用户名")
    password: str = Field(default="123456", description="共享账号口令")

    class Config:
        env_prefix = "YORG_AUTH_"


class AppSettings(BaseSettings):
    """应用基础配置

    将各子配置类聚合为嵌套结构，业务项目继承后只需添加项目特有的配置项。

    配置优先级（从高到低）:
        显式参数（含 YAML 配置文件） > 环境变量 > 代码中的默认值

    内置子配置及环境变量前缀:
        - logging:  LoggingSettings   (YORG_LOG_)
        - store:    StoreSettings     (YORG_STORE_)
        - importer: ImporterSettings  (YORG_IMPORT_)
        - auth:     AuthSettings      (YORG_AUTH_)

    使用示例:
        from yorg.config import AppSettings, load_yaml_config

        settings = load_yaml_config("config/settings.yaml", AppSettings)

    YAML 配置示例 (config/settings.yaml):
        logging:
          level: "DEBUG"
        store:
          strict_not_found: true
        importer:
          timeout_seconds: 30
    """
    app_name: str = Field(default="组织管理系统", description="应用名称")
    seed_data: bool = Field(default=True, description="启动时是否载入种子数据")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    importer: ImporterSettings = Field(default_factory=ImporterSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)

    class Config:
        env_prefix = "YORG_"
