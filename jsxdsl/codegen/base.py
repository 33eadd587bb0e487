"""
Base generator class with shared utilities.

This module provides the BaseGenerator class that contains common utilities
used across all specialized generator classes in the code generation pipeline.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from ..parser.ast_nodes import TypeNode
from ..type_system import type_to_ts


class BaseGenerator:
    """
    Base class for all code generators.

    Provides shared utilities for:
    - Indentation management
    - Type annotation rendering
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the base generator.

        Args:
            ctx: The code generation context containing all state
        """
        self._ctx = ctx

    # =========================================================================
    # INDENTATION
    # =========================================================================

    def indent(self) -> str:
        """Return the current indentation string."""
        return self._ctx.indent()

    @property
    def indent_level(self) -> int:
        """Get the current indentation level."""
        return self._ctx.indent_level

    @indent_level.setter
    def indent_level(self, value: int):
        """Set the current indentation level."""
        self._ctx.indent_level = value

    # =========================================================================
    # TYPE ANNOTATIONS
    # =========================================================================

    def type_argument(self, type_node: Optional[TypeNode]) -> str:
        """Render ``<T>`` for a hook call in typed output, or nothing."""
        if not self._ctx.typed or type_node is None:
            return ''
        return f'<{type_to_ts(type_node)}>'

    def type_suffix(self, type_node: Optional[TypeNode]) -> str:
        """Render ``: T`` for a parameter in typed output, or nothing."""
        if not self._ctx.typed or type_node is None:
            return ''
        return f': {type_to_ts(type_node)}'
