from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    API_PREFIX: str = "/api"
    DATABASE_URL: str = "sqlite:///./fittrack.db"
    SECRET_KEY: str = "your-secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Session cookie
    TOKEN_COOKIE_NAME: str = "token"
    COOKIE_SECURE: bool = False

    # Page routes policed by the access gate
    PROTECTED_ROUTES: List[str] = ["/dashboard", "/workouts", "/analytics", "/profile", "/goals", "/settings"]
    AUTH_ROUTES: List[str] = ["/login", "/register"]
    GATE_EXEMPT_PREFIXES: List[str] = ["/api", "/_next", "/static", "/favicon.ico"]
    LOGIN_PATH: str = "/login"
    HOME_PATH: str = "/dashboard"

    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"

@lru_cache()
def get_settings():
    return Settings()

settings = get_settings()
