import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class ConfigurationError(Exception):
    pass


class Settings:
    """Runtime settings read from the environment (and a .env file, if any)."""

    def __init__(self):
        self.mongo_uri = os.getenv("MONGO_URI", "")
        if not self.mongo_uri:
            raise ConfigurationError("Missing MONGO_URI environment variable")

        port = os.getenv("PORT") or "8080"
        try:
            self.port = int(port)
        except ValueError:
            raise ConfigurationError(f"Invalid PORT value: {port!r}")

        self.database_name = os.getenv("DATABASE_NAME") or "chatdb"
        self.log_level = (os.getenv("LOG_LEVEL") or "INFO").upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Invalid LOG_LEVEL value: {self.log_level!r}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
