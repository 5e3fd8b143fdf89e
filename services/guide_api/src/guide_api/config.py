from pydantic_settings import BaseSettings, SettingsConfigDict


class GuideApiConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GUIDE_API_")

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    max_page_size: int = 100
