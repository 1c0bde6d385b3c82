from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./data/rise66.db",
        description="SQLAlchemy async URL, e.g., postgresql+asyncpg://...",
    )

    # Together AI (OpenAI-compatible) is tried first, Hugging Face second
    TOGETHER_API_KEY: str | None = None
    # Older deployments used LLAMA_API_KEY for the same credential
    LLAMA_API_KEY: str | None = None
    TOGETHER_BASE_URL: str = "https://api.together.xyz/v1"
    TOGETHER_MODEL_ID: str = "meta-llama/Llama-3.1-8B-Instruct-Turbo"

    HUGGINGFACE_API_KEY: str | None = None
    HF_API_URL: str = "https://api-inference.huggingface.co/models/meta-llama/Llama-3.1-8B-Instruct"

    AI_TIMEOUT_SECONDS: float = 15.0
    AI_MAX_RETRIES: int = 2

    # Program rules
    TOTAL_PROGRAM_DAYS: int = 66
    STREAK_WINDOW_DAYS: int = 66
    DAY_COMPLETE_THRESHOLD: int = 7

    ENABLE_SCHEDULER: bool = True
    ENABLE_METRICS: bool = False

settings = Settings()
if not settings.TOGETHER_API_KEY:
    # set fallback after instantiation so either variable name works
    settings.TOGETHER_API_KEY = settings.LLAMA_API_KEY
