from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Catat Uang"

    # JSON file used by the store; relative paths resolve against the CWD
    DATA_PATH: Path = Path("data/seed.json")
    LOG_LEVEL: str = "INFO"

    TOP_CATEGORY_LIMIT: int = 5
    RECENT_LIMIT: int = 10

    FALLBACK_CATEGORY_NAME: str = "Lainnya"
    FALLBACK_CATEGORY_ICON: str = "help-circle"
    FALLBACK_CATEGORY_COLOR: str = "#6B7280"

    CURRENCY_SYMBOL: str = "Rp"

    model_config = SettingsConfigDict(env_file=(".env",), env_prefix="CATAT_", case_sensitive=False)


settings = Settings()
