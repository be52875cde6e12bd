from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Graph Store Configuration
    graph_db_path: str = "data/garden-knowledge.sqlite"
    seed_on_startup: bool = True

    # Export Configuration
    export_dir: str = "exports"

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging Configuration
    log_level: str = "INFO"
    log_file: str = "logs/app.log"

    @property
    def log_dir(self) -> Path:
        """Get log directory path."""
        return Path(self.log_file).parent

    def ensure_directories(self):
        """Ensure necessary directories exist."""
        self.log_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_directories()
