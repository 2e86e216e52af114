from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration"""

    # App Settings
    app_name: str = "Loyalty Keyring"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Storage Settings
    database_path: str = "./data/loyalty_keyring.db"
    echo_sql: bool = False  # Set to True for SQL debug logging

    # Group Settings
    all_cards_label: str = "All"  # Pseudo-group shown first; means "no filter"

    model_config = SettingsConfigDict(
        env_prefix="LOYALTY_KEYRING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


settings = Settings()
