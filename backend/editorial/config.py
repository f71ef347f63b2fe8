"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# Values shipped in example env files that must not be treated as real keys
API_KEY_PLACEHOLDERS = ("YOUR_DEEPSEEK_API_KEY", "你的DeepSeek密钥", "你的密钥")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Bilingual Editorial"

    # Server
    host: str = "0.0.0.0"
    port: int = 8787
    frontend_port: int = 3000

    # History database (empty string disables history sync)
    database_url: str = "sqlite+aiosqlite:///./bilingual_editorial.db"
    history_limit: int = 100
    auto_save_history: bool = True

    # LLM provider
    llm_provider: str = "deepseek"
    llm_model: str = "deepseek-chat"
    llm_base_url: Optional[str] = None
    llm_temperature: float = 0.3
    llm_max_tokens: int = 8192
    llm_request_timeout: float = 120.0

    # Translation settings
    chunk_size: int = 5500  # characters per request
    max_concurrency: int = 4  # parallel trailing chunks in batch mode
    tolerate_trailing_errors: bool = True

    # CORS - dynamically built based on frontend_port
    cors_origins: list[str] = []

    # LLM API Keys
    deepseek_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    dashscope_api_key: Optional[str] = None  # Alibaba Qwen
    openrouter_api_key: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Build CORS origins based on frontend port
        if not self.cors_origins:
            self.cors_origins = [
                f"http://localhost:{self.frontend_port}",
                f"http://127.0.0.1:{self.frontend_port}",
            ]

    @property
    def history_enabled(self) -> bool:
        return bool(self.database_url.strip())

    def get_api_key(self, provider: Optional[str] = None) -> Optional[str]:
        """Get the usable API key for a provider.

        Blank keys and the placeholders from example env files are treated
        as missing.
        """
        key_map = {
            "deepseek": self.deepseek_api_key,
            "openai": self.openai_api_key,
            "anthropic": self.anthropic_api_key,
            "gemini": self.gemini_api_key,
            "qwen": self.dashscope_api_key,
            "openrouter": self.openrouter_api_key,
        }
        key = (key_map.get(provider or self.llm_provider) or "").strip()
        if not key or any(p in key for p in API_KEY_PLACEHOLDERS):
            return None
        return key


settings = Settings()
