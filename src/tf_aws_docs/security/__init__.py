"""
Security module for validating tool input before it reaches the resolver
or the document store.
"""

from .exceptions import SecurityError, ValidationError
from .input_validator import InputValidator

__all__ = [
    "SecurityError",
    "ValidationError",
    "InputValidator",
]
