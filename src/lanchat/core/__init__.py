"""Core models and services for LanChat."""

from .models import PropertyKey, Setting, User
from .reporting import ErrorReporter, LoggingErrorReporter
from .settings import SettingsStore

__all__ = [
    "ErrorReporter",
    "LoggingErrorReporter",
    "PropertyKey",
    "Setting",
    "SettingsStore",
    "User",
]
