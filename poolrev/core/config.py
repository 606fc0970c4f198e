import os
from typing import List


def get_cors_origins() -> List[str]:
    """Get CORS origins from environment and defaults."""
    default_origins = [
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # Add additional origins from environment variable
    env_origins = os.getenv("CORS_ORIGINS", "")
    if env_origins:
        additional_origins = [origin.strip() for origin in env_origins.split(",") if origin.strip()]
        default_origins.extend(additional_origins)

    return default_origins


def get_log_level() -> str:
    """Get the root log level name from the environment."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


ASSUMPTIONS_VERSION = "2026.10.0"
SERVICE_NAME = "pool-revenue-engine"
