"""Utility helpers for reusable functionality."""

from .clock import current_millis

__all__ = ["current_millis"]
