"""Flatshare API configuration."""

import secrets
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    app_name: str = "Flatshare API"
    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = ""
    cors_origins: str = "http://localhost:3000"

    # Paths
    data_dir: Path = Path.home() / "flatshare" / "data"

    # Database (defaults to a SQLite file under data_dir)
    database_url: str = ""

    # JWT
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 10080  # 7 days

    # Password hashing
    bcrypt_rounds: int = 10

    # Error messages: 'es' | 'en'
    locale: str = "es"

    model_config = {"env_prefix": "FLATSHARE_", "env_file": ".env", "extra": "ignore"}

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def ensure_database_url(self) -> None:
        if not self.database_url:
            self.database_url = f"sqlite:///{self.data_dir / 'flatshare.db'}"

    def ensure_secrets(self) -> None:
        """Generate the JWT secret if not set, persist it so tokens survive restarts."""
        if self.jwt_secret:
            return
        secrets_file = self.data_dir / ".secrets"
        saved = {}
        if secrets_file.exists():
            for line in secrets_file.read_text().strip().splitlines():
                if "=" in line:
                    k, v = line.split("=", 1)
                    saved[k.strip()] = v.strip()

        self.jwt_secret = saved.get("jwt_secret", "") or secrets.token_urlsafe(32)
        secrets_file.write_text(f"jwt_secret={self.jwt_secret}\n")

    def get_cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
settings.ensure_dirs()
settings.ensure_database_url()
settings.ensure_secrets()
