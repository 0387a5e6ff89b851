"""
Application settings.

Read once from environment variables at import time, with defaults that work for local development.
"""

import os

DATABASE_URL = os.environ.get("CHESS_DATABASE_URL", "sqlite:///./chess.db")
LOG_LEVEL = os.environ.get("CHESS_LOG_LEVEL", "INFO").upper()
SQL_ECHO = os.environ.get("CHESS_SQL_ECHO", "0").lower() in {"1", "true", "yes"}
