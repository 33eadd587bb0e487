"""
Type mappings and conversion utilities for DSL type annotations.

This module contains the mappings and functions for converting the DSL's
type annotations into their TypeScript equivalents.
"""

from types import MappingProxyType
from typing import Optional

from ..parser.ast_nodes import (
    TypeNode,
    SimpleType,
    ArrayType,
    UnionType,
    GenericType,
)


# =============================================================================
# TYPE MAPPING CONSTANTS
# =============================================================================

# Shorthand DSL type names -> TypeScript names; anything else passes through
TYPE_ALIASES = MappingProxyType({
    'str': 'string',
    'num': 'number',
    'bool': 'boolean',
})

# Used wherever a declaration carries no annotation
DEFAULT_TYPE = 'any'

# Generic names treated as collections when lowering list updates
COLLECTION_GENERICS = frozenset({'Array', 'ReadonlyArray'})


# =============================================================================
# TYPE CONVERSION FUNCTIONS
# =============================================================================

def resolve_type_name(name: str) -> str:
    """Map a DSL type name to its TypeScript name."""
    return TYPE_ALIASES.get(name, name)


def type_to_ts(type_node: Optional[TypeNode]) -> str:
    """
    Convert a DSL type node to its TypeScript equivalent.

    Args:
        type_node: The type annotation, or None when none was written

    Returns:
        The TypeScript type string ('any' when there is no annotation)
    """
    if type_node is None:
        return DEFAULT_TYPE

    if isinstance(type_node, SimpleType):
        return resolve_type_name(type_node.name)

    if isinstance(type_node, ArrayType):
        return f'{resolve_type_name(type_node.element_type)}[]'

    if isinstance(type_node, UnionType):
        return ' | '.join(type_to_ts(t) for t in type_node.types)

    if isinstance(type_node, GenericType):
        params = ', '.join(type_to_ts(t) for t in type_node.type_params)
        return f'{resolve_type_name(type_node.name)}<{params}>'

    raise TypeError(f'Unsupported type node: {type(type_node).__name__}')


def is_collection_type(type_node: Optional[TypeNode]) -> bool:
    """Check whether an annotation describes a list (``T[]`` or ``Array<T>``)."""
    if isinstance(type_node, ArrayType):
        return True
    if isinstance(type_node, GenericType):
        return type_node.name in COLLECTION_GENERICS
    return False
