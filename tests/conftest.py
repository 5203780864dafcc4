"""Shared test configuration.

The environment is set before any application module is imported so the
cached settings come up in test mode (no log files, no metrics).
"""

import os

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-chars")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
