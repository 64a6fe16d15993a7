from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # mongodb://host:port/dbname, or memory:// for the in-process store
    host: str = "127.0.0.1"
    port: int = 4000
    debug: bool = False
    production: bool = False  # Marks the session cookie as Secure
    cors_origins: list[str] = []
    session_ttl_days: int = 7
    password_hash_rounds: int = 12  # bcrypt cost factor
    static_path: str | None = None  # Directory with the built SPA (index.html + assets)
    weather_api_url: str = "https://api.open-meteo.com/v1/forecast"
    weather_timeout: float = 10.0  # Seconds
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "HOMEDASH_",
        "extra": "ignore",
    }

    @property
    def uses_memory_store(self) -> bool:
        return self.database_url.startswith("memory://")
