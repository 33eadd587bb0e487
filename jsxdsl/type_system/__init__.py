"""
Types module for the DSL compiler.

This module provides type conversion utilities for DSL type annotations.
"""

from .mappings import (
    type_to_ts,
    resolve_type_name,
    is_collection_type,
    TYPE_ALIASES,
    DEFAULT_TYPE,
)

__all__ = [
    'type_to_ts',
    'resolve_type_name',
    'is_collection_type',
    'TYPE_ALIASES',
    'DEFAULT_TYPE',
]
