"""Builtin functions available to Zumbra programs, grouped by topic, and their name table."""

__all__ = [
    "arrays",
    "dicts",
    "conversions",
    "text",
    "numbers",
    "system",
    "web",
    "mailer",
    "mysql",
    "registry",
]