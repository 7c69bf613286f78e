"""LanChat - a serverless chat client for the local network."""

APP_NAME = "LanChat"
APP_VERSION = "1.0.0"

__version__ = APP_VERSION
