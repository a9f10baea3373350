"""
config.py
-----------------
Flask configuration classes. Every value can be overridden through an
environment variable of the same name; APP_ENV picks the class.
"""

import os

TRUE_VALUES = {"1", "true", "yes", "on"}


def env_flag(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


class Config:
    DEBUG = False
    TESTING = False

    # MongoDB
    MONGO_URI = os.environ.get("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DBNAME = os.environ.get("MONGO_DBNAME", "attendanceSystem")
    SUBJECTS_COLLECTION = os.environ.get("SUBJECTS_COLLECTION", "subjects")
    MONGO_TIMEOUT_MS = int(os.environ.get("MONGO_TIMEOUT_MS", "5000"))
    MONGO_CONNECT_RETRY_SECONDS = float(os.environ.get("MONGO_CONNECT_RETRY_SECONDS", "5"))

    # HTTP
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")
    PORT = int(os.environ.get("PORT", "3000"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    DEBUG = env_flag("DEBUG", default=True)
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    TESTING = True
    MONGO_DBNAME = "attendanceSystem_test"
    MONGO_TIMEOUT_MS = 1000


class ProductionConfig(Config):
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "WARNING")


def get_config():
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return ProductionConfig
    if env in {"test", "testing"}:
        return TestingConfig
    return DevelopmentConfig
