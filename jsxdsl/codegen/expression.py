"""
Expression generation for DSL to React compilation.

This module handles the generation of JavaScript code from DSL expression
AST nodes, and the lowering of event handler expressions into setter calls.
"""

import json
from dataclasses import replace

from .base import BaseGenerator
from .naming import setter_name
from ..lexer import format_number
from ..type_system import is_collection_type
from ..parser.ast_nodes import (
    Expression,
    Literal,
    Identifier,
    BinaryOperation,
    UpdateExpression,
    PropertyAccess,
    MethodCall,
    ArrowFunction,
    ArrayLiteral,
)


class ExpressionGenerator(BaseGenerator):
    """
    Generates JavaScript code from DSL expression AST nodes.

    This class handles all expression types including:
    - Literals (numbers, strings, booleans)
    - Identifiers, property access and method calls
    - Binary operations and update shorthands
    - Arrow functions and array literals
    """

    # =========================================================================
    # MAIN DISPATCH
    # =========================================================================

    def generate(self, expr: Expression) -> str:
        """Generate JavaScript expression from AST node.

        Args:
            expr: The expression AST node

        Returns:
            The JavaScript code string

        Raises:
            TypeError: if ``expr`` is not an expression node
        """
        if isinstance(expr, Literal):
            return self.generate_literal(expr)
        elif isinstance(expr, Identifier):
            return expr.name
        elif isinstance(expr, BinaryOperation):
            return f'{self.generate(expr.left)} {expr.operator} {self.generate(expr.right)}'
        elif isinstance(expr, UpdateExpression):
            return self.generate_update_value(expr)
        elif isinstance(expr, PropertyAccess):
            return f'{expr.object}.{expr.property}'
        elif isinstance(expr, MethodCall):
            return f'{expr.object}.{expr.method}({self.generate_arguments(expr.args)})'
        elif isinstance(expr, ArrowFunction):
            return f'({", ".join(expr.params)}) => {self.generate(expr.body)}'
        elif isinstance(expr, ArrayLiteral):
            return f'[{self.generate_arguments(expr.elements)}]'

        raise TypeError(f'Unsupported expression node: {type(expr).__name__}')

    def generate_arguments(self, args) -> str:
        """Generate a comma separated argument list."""
        return ', '.join(self.generate(arg) for arg in args)

    # =========================================================================
    # LITERALS
    # =========================================================================

    def generate_literal(self, lit: Literal) -> str:
        """Generate JavaScript code for a literal."""
        if lit.kind == 'number':
            return format_number(lit.value)
        elif lit.kind == 'string':
            return json.dumps(lit.value, ensure_ascii=False)
        elif lit.kind == 'bool':
            return 'true' if lit.value else 'false'
        raise TypeError(f'Unsupported literal kind: {lit.kind}')

    # =========================================================================
    # UPDATES
    # =========================================================================

    def generate_update_value(self, expr: UpdateExpression) -> str:
        """Generate the value an update shorthand computes (``x++`` -> ``x + 1``)."""
        if expr.operator == '++':
            return f'{expr.target} + 1'
        if expr.operator == '--':
            return f'{expr.target} - 1'
        if expr.operator == '+=' and expr.value is not None:
            return f'{expr.target} + {self.generate(expr.value)}'
        return expr.target

    # =========================================================================
    # EVENT HANDLERS
    # =========================================================================

    def generate_event_handler(self, handler: Expression, line: int = 0) -> str:
        """
        Lower an event handler expression into an arrow function.

        Update shorthands become setter calls, ``list.push(v)`` on a list state
        becomes a spread append, and anything else is wrapped as-is.
        """
        if isinstance(handler, UpdateExpression):
            setter = setter_name(handler.target)
            return f'() => {setter}({self.generate_update_value(handler)})'

        if isinstance(handler, MethodCall) and handler.method == 'push':
            if self._is_list_state(handler.object):
                setter = setter_name(handler.object)
                args = self.generate_arguments(handler.args)
                return f'() => {setter}([...{handler.object}, {args}])'
            self._ctx.diagnostics.warn_push_on_non_collection(
                handler.object, self._ctx.file_path, line or None
            )

        return f'() => {self.generate(handler)}'

    def _is_list_state(self, name: str) -> bool:
        """A state counts as a list when it is untyped or annotated as a collection."""
        if not self._ctx.is_state(name):
            return False
        state_type = self._ctx.state_types[name]
        return state_type is None or is_collection_type(state_type)


# =============================================================================
# REWRITING
# =============================================================================

def rename_identifier(expr: Expression, old: str, new: str) -> Expression:
    """
    Return a copy of ``expr`` with every free reference to ``old`` renamed to ``new``.

    Arrow functions that declare ``old`` as a parameter shadow it and are left
    untouched. The input tree is not modified.
    """
    if isinstance(expr, Literal):
        return expr
    if isinstance(expr, Identifier):
        return Identifier(name=new) if expr.name == old else expr
    if isinstance(expr, BinaryOperation):
        return replace(
            expr,
            left=rename_identifier(expr.left, old, new),
            right=rename_identifier(expr.right, old, new),
        )
    if isinstance(expr, UpdateExpression):
        value = rename_identifier(expr.value, old, new) if expr.value is not None else None
        target = new if expr.target == old else expr.target
        return replace(expr, target=target, value=value)
    if isinstance(expr, PropertyAccess):
        return replace(expr, object=new if expr.object == old else expr.object)
    if isinstance(expr, MethodCall):
        return replace(
            expr,
            object=new if expr.object == old else expr.object,
            args=[rename_identifier(arg, old, new) for arg in expr.args],
        )
    if isinstance(expr, ArrowFunction):
        if old in expr.params:
            return expr
        return replace(expr, body=rename_identifier(expr.body, old, new))
    if isinstance(expr, ArrayLiteral):
        return replace(expr, elements=[rename_identifier(e, old, new) for e in expr.elements])

    raise TypeError(f'Unsupported expression node: {type(expr).__name__}')
