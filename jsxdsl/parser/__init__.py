"""
Parser module for the DSL compiler.

This module provides AST node definitions and the parser implementation.
"""

from .ast_nodes import (
    # Base
    ASTNode,
    # Types
    TypeNode,
    SimpleType,
    ArrayType,
    UnionType,
    GenericType,
    # Expressions
    Expression,
    Literal,
    Identifier,
    BinaryOperation,
    UpdateExpression,
    PropertyAccess,
    MethodCall,
    ArrowFunction,
    ArrayLiteral,
    # Markup
    MarkupNode,
    EventHandlerRef,
    Attribute,
    Element,
    Fragment,
    Interpolation,
    Text,
    EachLoop,
    # Declarations
    Declaration,
    PropDeclaration,
    StateDeclaration,
    ReducerAction,
    ReducerDeclaration,
    TransitionDeclaration,
    DeferredDeclaration,
    OptimisticDeclaration,
    SyncDeclaration,
    ActionStateDeclaration,
    ContextDeclaration,
    CallbackDeclaration,
    RefDeclaration,
    HandleDeclaration,
    MemoDeclaration,
    EffectDeclaration,
    EventDeclaration,
    IdDeclaration,
    # Root
    Component,
)
from .parser import Parser, parse

__all__ = [
    # Base
    'ASTNode',
    # Types
    'TypeNode',
    'SimpleType',
    'ArrayType',
    'UnionType',
    'GenericType',
    # Expressions
    'Expression',
    'Literal',
    'Identifier',
    'BinaryOperation',
    'UpdateExpression',
    'PropertyAccess',
    'MethodCall',
    'ArrowFunction',
    'ArrayLiteral',
    # Markup
    'MarkupNode',
    'EventHandlerRef',
    'Attribute',
    'Element',
    'Fragment',
    'Interpolation',
    'Text',
    'EachLoop',
    # Declarations
    'Declaration',
    'PropDeclaration',
    'StateDeclaration',
    'ReducerAction',
    'ReducerDeclaration',
    'TransitionDeclaration',
    'DeferredDeclaration',
    'OptimisticDeclaration',
    'SyncDeclaration',
    'ActionStateDeclaration',
    'ContextDeclaration',
    'CallbackDeclaration',
    'RefDeclaration',
    'HandleDeclaration',
    'MemoDeclaration',
    'EffectDeclaration',
    'EventDeclaration',
    'IdDeclaration',
    # Root
    'Component',
    # Parser
    'Parser',
    'parse',
]
