"""Core components for the Scale Explorer application."""

# Import interfaces for easier access
from .interfaces import (
    IAudioBackend,
    IAudioOutput,
)

__all__ = ["IAudioBackend", "IAudioOutput"]
