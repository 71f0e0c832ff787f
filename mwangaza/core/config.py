from typing import List, Optional
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    APP_NAME: str = "Mwangaza Case Management API"

    # Storage backend: "memory" or "sql"
    STORE_BACKEND: str = "memory"
    QUERY_LATENCY_MS: int = 100

    # Database configuration (only used by the sql store backend)
    DATABASE_URL: Optional[str] = None
    DB_HOST: Optional[str] = None
    DB_PORT: int = 5432
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "mwangaza_db"

    # JWT Configuration
    JWT_SECRET_KEY: str = "your-super-secret-jwt-key-here-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 60

    # Staff accounts
    STAFF_EMAIL_DOMAIN: str = "mwangaza.org"
    DEFAULT_ADMIN_EMAIL: str = "admin@mwangaza.org"
    DEFAULT_ADMIN_PASSWORD: str = "admin12345"
    DEFAULT_ADMIN_NAME: str = "System Administrator"

    ADMISSION_PREFIX: str = "MWZ"

    # Frontend (comma separated origins)
    FRONTEND_URL: str = "http://localhost:8080,http://localhost:5173"

    LOG_LEVEL: str = "INFO"

    # Development
    DEBUG: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra environment variables

    @property
    def frontend_origins(self) -> List[str]:
        return [url.strip() for url in self.FRONTEND_URL.split(",") if url.strip()]

    def get_database_url(self) -> str:
        """Resolve the SQLAlchemy URL for the sql store backend"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if not self.DB_HOST:
            return "sqlite:///./mwangaza.db"
        encoded_password = quote_plus(self.DB_PASSWORD) if self.DB_PASSWORD else ""
        return (
            f"postgresql+psycopg://{self.DB_USER}:{encoded_password}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    def describe_database(self) -> dict:
        """Connection details with the password masked"""
        return {
            "host": self.DB_HOST or "localhost",
            "user": self.DB_USER,
            "password": "********" if self.DB_PASSWORD else "",
            "database": self.DB_NAME,
        }

settings = Settings()
