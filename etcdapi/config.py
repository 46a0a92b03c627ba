"""
Client Configuration

Loads transport and logging settings from environment variables.
The server list is never read here: callers pass it to open_session.
"""

import logging
import sys
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ClientSettings(BaseSettings):
    """Client settings loaded from environment variables."""

    # HTTP transport
    http_timeout: float = Field(default=10.0, gt=0, alias="ETCDAPI_HTTP_TIMEOUT")
    follow_redirects: bool = Field(default=True, alias="ETCDAPI_FOLLOW_REDIRECTS")

    # Logging
    log_level: str = Field(default="INFO", alias="ETCDAPI_LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        populate_by_name = True
        extra = "ignore"


@lru_cache()
def get_settings() -> ClientSettings:
    """Get cached settings instance."""
    return ClientSettings()


def setup_logging(level: str = "INFO", stream=None):
    """Configure root logging (stdout unless ``stream`` is given) with UTF-8 support."""
    handler = logging.StreamHandler(stream or sys.stdout)

    try:
        if hasattr(handler.stream, 'reconfigure'):
            handler.stream.reconfigure(encoding='utf-8', errors='replace')
    except (AttributeError, ValueError):
        # Replaced streams (pytest capture, pipes) may refuse reconfiguration
        pass

    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
