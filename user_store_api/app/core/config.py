"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Before it is built, variables from an env
file are loaded with ``python-dotenv``; variables already present in
the environment take precedence.  The env file defaults to
``backend.env`` in the project root and can be relocated with the
``ENV_FILE`` variable.  Defaults are provided for all fields.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def load_env_file() -> None:
    """Load variables from the env file, if it exists."""
    env_file = Path(os.getenv("ENV_FILE", "backend.env"))
    if not env_file.is_absolute():
        env_file = PROJECT_ROOT / env_file
    load_dotenv(env_file, override=False)


load_env_file()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "User Records API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    # Mount prefix for the versioned router.  Empty keeps ``/users`` at the root.
    api_prefix: str = os.getenv("API_PREFIX", "")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Directory holding one ``<collection>.json`` file per collection.  A
    # relative path is resolved against the project root by ``core.db``.
    data_dir: str = os.getenv("DATA_DIR", "data")
    users_collection: str = os.getenv("USERS_COLLECTION", "users")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
