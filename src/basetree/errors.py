# src/basetree/errors.py
"""Root of the basetree exception hierarchy."""


class BasetreeError(Exception):
    """Base class for every fatal basetree failure that is not an OSError."""
