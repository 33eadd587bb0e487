"""
Dependency extraction for memoized values, cached callbacks and effects.

The dependency array of a generated hook lists every free identifier the
expression reads, once each, in the order they are first seen.
"""

from typing import Iterable, List, Set

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


# Identifiers that name values rather than bindings
LITERAL_KEYWORDS = frozenset({'true', 'false', 'null', 'undefined'})


class DependencyCollector:
    """Walks an expression and collects the free identifiers it reads."""

    def __init__(self, exclude: Iterable[str] = ()):
        self._exclude: Set[str] = set(exclude)
        self._seen: Set[str] = set()
        self.dependencies: List[str] = []

    def _add(self, name: str, bound: Set[str]) -> None:
        if name in bound or name in self._exclude or name in LITERAL_KEYWORDS:
            return
        if name in self._seen:
            return
        self._seen.add(name)
        self.dependencies.append(name)

    def visit(self, expr: Expression, bound: Set[str] = frozenset()) -> None:
        """Collect dependencies of ``expr``; ``bound`` holds enclosing arrow parameters."""
        if isinstance(expr, Literal):
            return
        if isinstance(expr, Identifier):
            self._add(expr.name, bound)
        elif isinstance(expr, BinaryOperation):
            self.visit(expr.left, bound)
            self.visit(expr.right, bound)
        elif isinstance(expr, UpdateExpression):
            self._add(expr.target, bound)
            if expr.value is not None:
                self.visit(expr.value, bound)
        elif isinstance(expr, PropertyAccess):
            self._add(expr.object, bound)
        elif isinstance(expr, MethodCall):
            self._add(expr.object, bound)
            for arg in expr.args:
                self.visit(arg, bound)
        elif isinstance(expr, ArrowFunction):
            self.visit(expr.body, set(bound) | set(expr.params))
        elif isinstance(expr, ArrayLiteral):
            for element in expr.elements:
                self.visit(element, bound)
        else:
            raise TypeError(f'Unsupported expression node: {type(expr).__name__}')


def extract_dependencies(*expressions: Expression, exclude: Iterable[str] = ()) -> List[str]:
    """
    Collect the free identifiers read by one or more expressions.

    Args:
        *expressions: Expressions to walk, in order
        exclude: Names that are never dependencies (e.g. a callback's own parameters)

    Returns:
        Identifier names, each once, in first-seen order
    """
    collector = DependencyCollector(exclude)
    for expr in expressions:
        collector.visit(expr)
    return collector.dependencies


def callback_dependencies(value: Expression) -> List[str]:
    """Dependencies of a cached callback, never including its own parameters."""
    if isinstance(value, ArrowFunction):
        return extract_dependencies(value.body, exclude=value.params)
    return extract_dependencies(value)
