from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Site Chat"
    API_STR: str = "/api"
    LOG_LEVEL: str = "INFO"

    # "groq" or "gemini"
    LLM_PROVIDER: str = "groq"
    GROQ_API_KEY: str | None = None
    GROQ_CHAT_MODEL: str = "llama-3.1-8b-instant"
    GEMINI_API_KEY: str | None = None
    GEMINI_CHAT_MODEL: str = "gemini-3-flash-preview"
    LLM_MAX_TOKENS: int = 8000

    REDIS_URL: str = "redis://localhost:6379"
    REDIS_CONNECT_TIMEOUT_SEC: float = 1.0
    REDIS_SOCKET_TIMEOUT_SEC: float = 1.0
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_REQUESTS: int = 10
    RATE_LIMIT_WINDOW_SEC: int = 10
    RATE_LIMIT_FAIL_OPEN: bool = True
    RATE_LIMIT_PREFIX: str = "ratelimit"
    RATE_LIMIT_EXCLUDE_PATTERN: str = r"^/(static/|_next/static/|_next/image|favicon\.ico$)"

    SCRAPE_MAX_CONCURRENCY: int = 4
    SCRAPE_NAV_TIMEOUT_MS: int = 30000
    SCRAPE_TIMEOUT_SEC: float = 45.0
    SCRAPE_MAX_TOKENS: int = 1500
    SCRAPE_MIN_TEXT_LENGTH: int = 50
    BROWSER_HEADLESS: bool = True
    BROWSER_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
