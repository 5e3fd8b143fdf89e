from pydantic_settings import BaseSettings, SettingsConfigDict


class SiteBuilderConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SITE_BUILDER_")

    log_level: str = "INFO"
    output_dir: str = "site"
    site_title: str = "AL Development Guides"
