from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "LegalHub"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Locale settings
    supported_locales: list[str] = ["ka", "en", "ru"]
    default_locale: str = "ka"
    locale_cookie_name: str = "NEXT_LOCALE"
    locale_cookie_max_age: int = 60 * 60 * 24 * 365

    # Paths that never receive a locale prefix
    internal_path_prefixes: list[str] = ["_next", "_static", "_vercel"]
    api_path_prefix: str = "api"
    favicon_name: str = "favicon.ico"

    # 307 keeps the request method on redirect
    redirect_status_code: int = 307

    # Logging settings
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()
