"""
Code generation module for the DSL compiler.

This module provides JSX and TSX code generation from DSL AST nodes.
"""

from .context import CodeGenerationContext
from .base import BaseGenerator
from .expression import ExpressionGenerator, rename_identifier
from .markup import MarkupGenerator, TAG_ALIASES, EVENT_ATTRIBUTES
from .declarations import DeclarationGenerator
from .imports import ImportGenerator
from .component import ComponentGenerator
from .dependencies import extract_dependencies, callback_dependencies
from .source_map import PositionMap, encode_vlq
from .plain import generate
from .typed import generate_typed, GenerateOptions, GeneratedOutput
from .diagnostics import CompilerDiagnostics, Diagnostic, DiagnosticSeverity

__all__ = [
    'CodeGenerationContext',
    'BaseGenerator',
    'ExpressionGenerator',
    'rename_identifier',
    'MarkupGenerator',
    'TAG_ALIASES',
    'EVENT_ATTRIBUTES',
    'DeclarationGenerator',
    'ImportGenerator',
    'ComponentGenerator',
    'extract_dependencies',
    'callback_dependencies',
    'PositionMap',
    'encode_vlq',
    'generate',
    'generate_typed',
    'GenerateOptions',
    'GeneratedOutput',
    'CompilerDiagnostics',
    'Diagnostic',
    'DiagnosticSeverity',
]
