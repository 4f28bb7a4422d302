"""Serialize Python values into TOML documents."""

__version__ = "0.1.0"
__all__ = ["encoder", "tags", "text"]