import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 30))
    SESSION_EXPIRE_DAYS = int(data.get("SESSION_EXPIRE_DAYS", 30))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    ROTATE_REFRESH_TOKENS = bool(data.get("ROTATE_REFRESH_TOKENS", False))
    DEFAULT_SESSION_EXPIRY_MINUTES = int(data.get("DEFAULT_SESSION_EXPIRY_MINUTES", 30))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    ENABLE_MAINTENANCE_SWEEPS = bool(data.get("ENABLE_MAINTENANCE_SWEEPS", False))
    MAINTENANCE_INTERVAL_SECONDS = int(data.get("MAINTENANCE_INTERVAL_SECONDS", 3600))
