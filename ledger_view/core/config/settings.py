# ledger_view/core/config/settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env file.
    Includes general app settings, loading and debounce configuration.
    """
    # General App Settings
    APP_NAME: str = "Ledger View Engine API"
    APP_VERSION: str = "0.1.0"
    DEBUG_MODE: bool = False # Set to True for development, False for production

    # API Specific Settings
    API_V1_STR: str = "/api/v1"

    # Logging Settings
    LOG_LEVEL: str = "INFO" # e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL

    # Loading Settings
    DEFAULT_LOAD_COUNT: int = 10000
    MAX_LOAD_COUNT: int = 100000
    LOAD_DELAY_SECONDS: float = 0.0 # Simulated latency of the data source

    # Filter input debounce windows
    SEARCH_DEBOUNCE_SECONDS: float = 0.3
    MIN_AMOUNT_DEBOUNCE_SECONDS: float = 0.5

    # Transaction cache
    CACHE_ENABLED: bool = True
    CACHE_FILE: Path = Path.home() / ".cache" / "ledger_view" / "transactions.json"
    CACHE_MAX_AGE_HOURS: float = 24.0

    # Pydantic-settings configuration
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).parent.parent.parent.parent / ".env"),
        env_file_encoding='utf-8',
        case_sensitive=False, # Allows env vars like APP_NAME or app_name
        extra='ignore' # Ignore extra environment variables not defined in the model
    )

settings = Settings()
