from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class LinterConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DOC_LINTER_")

    log_level: str = "WARNING"
    fail_on_warning: bool = False
    format: Literal["text", "json"] = "text"
