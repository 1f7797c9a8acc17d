"""
全局配置模块：通过 pydantic-settings 读取环境变量 / .env
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用全局配置，从环境变量和 .env 文件加载"""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── 应用 ──
    ENV: str = "development"  # development | production
    APP_NAME: str = "todo-service"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 9999

    # ── Todo 存储 ──
    TODO_FIRST_ID: int = 1  # 首个分配的 id，0 保留不用

    # ── 日志 ──
    LOG_LEVEL: str = "INFO"

    @field_validator("TODO_FIRST_ID")
    @classmethod
    def _check_first_id(cls, v: int) -> int:
        """id 必须从 1 及以上开始分配"""
        if v < 1:
            raise ValueError("TODO_FIRST_ID 必须 >= 1")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """单例获取配置（带缓存）"""
    return Settings()
