"""Database configuration from the environment and engine creation."""

import os
from typing import Mapping, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine


class DatabaseConfigError(RuntimeError):
    """Raised when the database settings are missing."""


def database_url_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    """Join DATABASE_URL and DATABASE_NAME into a connection URL."""
    env = os.environ if environ is None else environ
    base = env.get("DATABASE_URL", "")
    if not base:
        raise DatabaseConfigError("DATABASE_URL is not set")
    name = env.get("DATABASE_NAME", "")
    if not name:
        raise DatabaseConfigError("DATABASE_NAME is not set")
    url = f"{base}/{name}"
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def connect(environ: Optional[Mapping[str, str]] = None) -> Engine:
    """Create a pooled engine for the configured database."""
    engine = create_engine(database_url_from_env(environ))
    print("Connected to PostgreSQL")
    return engine