"""Postboard: social feed backend with live post updates."""

__version__ = "1.0.0"
