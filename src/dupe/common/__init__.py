"""
Dupe Common Utilities

Shared errors, configuration and naming helpers used across Dupe modules.
"""

from .errors import (
    DupeError,
    UnknownVerbError,
    InvalidArgumentError,
    InvalidDefinitionError,
    UnknownTableError,
    ResourceNotFoundError,
    RequestNotFoundError
)
from .config import DupeConfig
from .naming import singularize, pluralize, is_plural
from .utils import indent

__all__ = [
    'DupeError',
    'UnknownVerbError',
    'InvalidArgumentError',
    'InvalidDefinitionError',
    'UnknownTableError',
    'ResourceNotFoundError',
    'RequestNotFoundError',
    'DupeConfig',
    'singularize',
    'pluralize',
    'is_plural',
    'indent'
]
