from pydantic_settings import BaseSettings, SettingsConfigDict


class CorpusConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GUIDES_CORPUS_")

    root: str = "."
    pattern: str = "**/*.md"
    exclude: list[str] = [
        "README.md",
        "CHANGELOG.md",
        "CONTRIBUTING.md",
        "LICENSE.md",
    ]


class CatalogConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GUIDES_CATALOG_")

    url: str = "sqlite:///guides.db"
    echo: bool = False
