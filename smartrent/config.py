import os
from datetime import timedelta

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _allowed_origins():
    default = ["http://localhost:5173", "http://127.0.0.1:5173"]
    extra = os.environ.get("CORS_ALLOWED_ORIGINS", "")
    return sorted(set(default + [o.strip() for o in extra.split(",") if o.strip()]))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY")

    # None means "sqlite in the instance folder", filled in by create_app
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT Configuration
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY") or SECRET_KEY
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.environ.get("JWT_ACCESS_TOKEN_EXPIRES_MINUTES", 60 * 24))
    )

    API_PREFIX = "/api"
    CORS_ALLOWED_ORIGINS = _allowed_origins()
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    JSON_SORT_KEYS = False

    @classmethod
    def validate(cls):
        # JWT_SECRET_KEY falls back to SECRET_KEY
        if not cls.SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable must be set")


class ProductionConfig(Config):
    @classmethod
    def validate(cls):
        super().validate()
        # A database is REQUIRED in production
        if not cls.SQLALCHEMY_DATABASE_URI:
            raise ValueError("DATABASE_URL environment variable must be set")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
