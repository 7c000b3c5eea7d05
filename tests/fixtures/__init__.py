"""Shared pytest fixtures for store, config and HTTP tests."""

from .core import *  # noqa: F401,F403
from .services import *  # noqa: F401,F403
