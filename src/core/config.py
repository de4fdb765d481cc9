from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Recipe Calculator"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Display labels for a freshly created recipe
    DEFAULT_VOLUME_UNITS: str = "mL"
    DEFAULT_MASS_UNITS: str = "g"

    # Known-solids catalog lookup
    CATALOG_BASE_URL: str = "https://tinyurl.com"
    CATALOG_REQUEST_TIMEOUT_SECONDS: float = 10.0
    CATALOG_CACHE_TTL_SECONDS: int = 3600
    CATALOG_CACHE_MAX_ENTRIES: int = 64

    class Config:
        case_sensitive = True


settings = Settings()
