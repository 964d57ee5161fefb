"""Backends for selector output (text)."""

from .text import requirement_to_text, selector_to_text

__all__ = ["requirement_to_text", "selector_to_text"]
