from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "ToolsVault API"
    ENVIRONMENT: Literal["development", "production"] = "development"
    LOG_LEVEL: str = "INFO"

    # Admin
    ADMIN_SECRET_KEY: str

    # AI Providers (모두 선택 사항, 우선순위: Groq -> Gemini -> Backup)
    GROQ_API_KEY: Optional[str] = None
    GEMINI_API_KEY: Optional[str] = None
    OPENROUTER_API_KEY: Optional[str] = None
    BACKUP_PROVIDER_KIND: Literal["openrouter", "openai"] = "openrouter"

    # AI Endpoints & Models
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_CHAT_MODEL: str = "llama-3.1-8b-instant"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    GEMINI_CHAT_MODEL: str = "gemini-flash-latest"
    OPENROUTER_BASE_URL: str = "https://openrouter.ai/api/v1"
    OPENROUTER_CHAT_MODEL: str = "google/gemini-2.0-flash-exp:free"
    OPENROUTER_APP_TITLE: str = "ToolsVault"
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_CHAT_MODEL: str = "gpt-4o"

    # AI Generation Settings
    AI_GENERATION_TEMPERATURE: float = 0.7
    AI_PROVIDER_TIMEOUT_SECONDS: float = 120.0
    GEMINI_PRE_CALL_DELAY_SECONDS: float = 1.5
    AI_RATE_LIMIT_MAX_RETRIES: int = 3
    AI_RATE_LIMIT_RETRY_DELAY_SECONDS: float = 2.0
    AI_BATCH_REQUEST_DELAY_SECONDS: float = 2.0
    AI_BATCH_MAX_POSTS: int = 10

    # Database & Storage
    DB_URL: str
    REDIS_URL: str = "redis://localhost:6379/0"
    AWS_REGION: str = "ap-northeast-2"
    AWS_S3_BUCKET: str
    AWS_ACCESS_KEY_ID: str
    AWS_SECRET_ACCESS_KEY: str
    UPLOAD_KEY_PREFIX: str = "blog"
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024

    # HTTP
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://127.0.0.1:3000",
    ]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

settings = Settings()
