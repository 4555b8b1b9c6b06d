"""TOTP codes for cached tokens, with fuzzy search and Alfred workflow output."""

__version__ = "0.1.0"