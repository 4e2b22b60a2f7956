import os
import secrets
from pathlib import Path
from typing import List

DEFAULT_DB_FILE = "jobs-db.json"
DEFAULT_SEED_COUNT = 10000
DEFAULT_SEED_VALUE = 250
DEFAULT_TOKEN_MAX_AGE = 7 * 24 * 3600  # 7 days

# Fallback signing key for the lifetime of the process when TOKEN_SECRET is unset
_EPHEMERAL_SECRET = secrets.token_hex(32)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    """Environment-backed settings, read at call time so tests can override them."""

    @staticmethod
    def env() -> str:
        return os.getenv("CERTJOBS_ENV", "production").lower()

    @staticmethod
    def is_dev() -> bool:
        return Settings.env() == "dev"

    @staticmethod
    def db_file() -> Path:
        return Path(os.getenv("JOBS_DB_FILE", DEFAULT_DB_FILE))

    @staticmethod
    def seed_count() -> int:
        return _int_env("SEED_COUNT", DEFAULT_SEED_COUNT)

    @staticmethod
    def seed_value() -> int:
        return _int_env("SEED_VALUE", DEFAULT_SEED_VALUE)

    @staticmethod
    def token_secret() -> str:
        return os.getenv("TOKEN_SECRET") or _EPHEMERAL_SECRET

    @staticmethod
    def token_max_age() -> int:
        return _int_env("TOKEN_MAX_AGE", DEFAULT_TOKEN_MAX_AGE)

    # Rate limits: looser in dev, tighter in production
    @staticmethod
    def rate_limit_search() -> str:
        return os.getenv("RATE_LIMIT_SEARCH") or ("240/minute" if Settings.is_dev() else "120/minute")

    @staticmethod
    def rate_limit_submit() -> str:
        return os.getenv("RATE_LIMIT_SUBMIT") or ("60/minute" if Settings.is_dev() else "20/minute")

    @staticmethod
    def rate_limit_login() -> str:
        return os.getenv("RATE_LIMIT_LOGIN") or ("30/minute" if Settings.is_dev() else "10/minute")

    @staticmethod
    def cors_origins() -> List[str]:
        raw = os.getenv("CORS_ORIGINS", "http://localhost:3000")
        return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Capabilities:
    @staticmethod
    def is_store_writable() -> bool:
        """Check the JSON database file (or its directory) can be written"""
        path = Settings.db_file()
        if path.exists():
            return os.access(path, os.W_OK)
        parent = path.parent if str(path.parent) else Path(".")
        return parent.exists() and os.access(parent, os.W_OK)

    @staticmethod
    def is_auth_configured() -> bool:
        return bool(os.getenv("TOKEN_SECRET"))

    @staticmethod
    def is_seeding_enabled() -> bool:
        return Settings.seed_count() > 0

    @classmethod
    def get_status(cls) -> dict:
        store = cls.is_store_writable()
        auth = cls.is_auth_configured()

        if store and auth:
            status = "green"
        else:
            status = "amber"

        return {
            "status": status,
            "components": {
                "store": store,
                "auth": auth,
            },
        }

    @classmethod
    def get_capabilities(cls) -> dict:
        return {
            "auth": cls.is_auth_configured(),
            "seeding": cls.is_seeding_enabled(),
            "admin": Settings.is_dev(),
        }


def get_env_presence() -> dict:
    required_vars = [
        "CERTJOBS_ENV",
        "JOBS_DB_FILE",
        "SEED_COUNT",
        "SEED_VALUE",
        "TOKEN_SECRET",
        "TOKEN_MAX_AGE",
        "CORS_ORIGINS",
        "RATE_LIMIT_SEARCH",
        "RATE_LIMIT_SUBMIT",
        "RATE_LIMIT_LOGIN",
    ]

    return {var: bool(os.getenv(var)) for var in required_vars}
