"""
Application Configuration
"""
from pydantic_settings import BaseSettings
from typing import List, Optional
import warnings

WEAK_SECRET_KEYS = {"dev-secret-key-change-in-production", "secret-key", "change-me"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "FrameBOX API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str = "sqlite:///./framebox.db"
    SEED_DEFAULTS: bool = True

    # Security
    SECRET_KEY: str = "dev-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 720  # 12 hours

    # Single account allowed to sign in
    ADMIN_EMAIL: str = "admin@framebox.local"
    ADMIN_PASSWORD_HASH: Optional[str] = None

    # CORS
    CORS_ORIGINS: str = "http://localhost:5000,http://127.0.0.1:5000"

    # Listing; lists without a limit return every row
    MAX_PAGE_SIZE: int = 500

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def database_url(self) -> str:
        """SQLAlchemy URL; bare `file:` paths become SQLite URLs"""
        if self.DATABASE_URL.startswith("file:"):
            return "sqlite:///" + self.DATABASE_URL[len("file:"):]
        return self.DATABASE_URL

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    def page_size(self, limit: Optional[int]) -> Optional[int]:
        """Clamp a requested page size; None means the whole list"""
        if not limit or limit < 1:
            return None
        return min(limit, self.MAX_PAGE_SIZE)

    def security_problems(self) -> List[str]:
        """Insecure settings, as human readable messages"""
        problems = []
        if self.SECRET_KEY in WEAK_SECRET_KEYS:
            problems.append("SECRET_KEY is a well-known default; set a random value")
        elif len(self.SECRET_KEY) < 32:
            problems.append("SECRET_KEY is shorter than 32 characters")
        if not self.ADMIN_PASSWORD_HASH:
            problems.append("ADMIN_PASSWORD_HASH is not set, nobody can sign in")
        if self.DEBUG and self.is_production:
            problems.append("DEBUG must be off in production")
        return problems

    def validate_security_settings(self):
        """Fail in production on insecure settings, warn everywhere else"""
        problems = self.security_problems()
        if problems and self.is_production:
            raise ValueError("Insecure production settings: " + "; ".join(problems))
        for problem in problems:
            warnings.warn(problem, UserWarning)
        return not problems

    class Config:
        env_file = ".env"
        case_sensitive = True
        # the frontend reads its own keys from the same .env
        extra = "ignore"


settings = Settings()
settings.validate_security_settings()
