from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    OPENAI_KEY: str  # Required; the service refuses to start without it
    UPSTREAM_URL: str = Field(default="https://api.openai.com/v1/chat/completions")
    UPSTREAM_TIMEOUT_S: float = Field(default=30.0, gt=0)
    LLM_MODEL: str = Field(default="gpt-4o-mini")
    LLM_MAX_TOKENS: int = Field(default=500, gt=0)
    LLM_TEMPERATURE: float = Field(default=0.7, ge=0.0, le=1.0)
    SERVICE_VERSION: str = Field(default="finance-chatbot-local")
    LOG_LEVEL: str = Field(default="INFO")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8081)

    # Pydantic v2 configuration: ignore unrelated environment variables
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
