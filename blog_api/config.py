"""
Environment-aware configuration.
Values are read once at import time (.env is loaded first) and never reloaded.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present

DEFAULT_JWT_SECRET = "dev-secret-change-me"
DEFAULT_CORS_ORIGINS = "http://localhost:5173,https://worldinsight.netlify.app"


class BaseConfig:
    DEBUG = False
    TESTING = False
    APP_ENV = "dev"
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    # Comma-separated list; credentials are allowed so '*' is not usable here
    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",") if o.strip()]
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///worldinsight.db")
    DATABASE_ECHO = False

    # session token
    JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("JWT_TOKEN_EXPIRES_SECONDS", "604800")))
    TOKEN_COOKIE_NAME = "token"
    TOKEN_COOKIE_SECURE = False
    TOKEN_COOKIE_SAMESITE = "Strict"


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "test"
    DATABASE_URL = "sqlite://"
    JWT_SECRET = "test-secret-with-enough-length-for-hs256"
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_EXPIRES = timedelta(days=7)
    CORS_ORIGINS = DEFAULT_CORS_ORIGINS.split(",")


class ProductionConfig(BaseConfig):
    DEBUG = False
    APP_ENV = "production"
    # Cross-site cookie use from the deployed frontend
    TOKEN_COOKIE_SECURE = True
    TOKEN_COOKIE_SAMESITE = "None"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
