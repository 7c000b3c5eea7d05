"""Test configuration and fixtures for the coffee shop service."""

import os

# Must be set before the application modules load config.yaml
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE", "")

from tests.fixtures import *  # noqa: E402,F401,F403
