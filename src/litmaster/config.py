from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache

class Settings(BaseSettings):
    OPENAI_API_KEY: str = Field("", description="OpenAI API Key")
    MODEL: str = Field("gpt-4o-mini", description="Model used for analysis and tutor chat")
    ANALYSIS_TEMPERATURE: float = Field(0.3, description="Low temperature keeps answers on-template")
    DB_PATH: str = Field("./litmaster.sqlite", description="Path to SQLite key-value store")
    LOG_LEVEL: str = "INFO"
    PASSWORD_HASH_ITERATIONS: int = 200_000

    # MLflow settings
    MLFLOW_TRACKING_URI: str = Field("http://127.0.0.1:5000", description="MLflow tracking server URI")
    MLFLOW_ENABLE_TRACING: bool = Field(False, description="Enable MLflow tracing")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
