"""Tokens, runtime values, builtin library and script transpiler of the Zumbra language."""

__version__ = "0.1.0"
__all__ = ["token", "objects", "transpiler", "builtins"]