"""
DSL to React Compiler

This package compiles a terse, sigil-driven component language into React
function components, as JSX or as TypeScript.

Module Structure:
- lexer/: Tokenization (TokenType, Token, Lexer)
- parser/: AST nodes and parsing (Parser, all AST node types)
- type_system/: DSL type annotation mappings
- codegen/: Code generation (generate, generate_typed, CompilerDiagnostics)
- compiler.py: Compiler orchestration and the jsx-dsl command line

Usage:
    from jsxdsl import tokenize, parse, generate

    code = generate(parse(tokenize(source)), 'Counter')

    # Or through the orchestrator:
    from jsxdsl import DslCompiler
    result = DslCompiler(typescript=True).compile_source(source, 'Counter')
"""

# Re-export main classes for convenience
from .errors import DslError, LexError, ParseError, MismatchedTagError
from .lexer import Lexer, tokenize
from .parser import Parser, parse
from .codegen import (
    generate,
    generate_typed,
    GenerateOptions,
    GeneratedOutput,
    CompilerDiagnostics,
)
from .compiler import (
    DslCompiler,
    CompileResult,
    FileInfo,
    get_file_info,
    component_name_from_path,
)

__all__ = [
    'DslError',
    'LexError',
    'ParseError',
    'MismatchedTagError',
    'Lexer',
    'tokenize',
    'Parser',
    'parse',
    'generate',
    'generate_typed',
    'GenerateOptions',
    'GeneratedOutput',
    'CompilerDiagnostics',
    'DslCompiler',
    'CompileResult',
    'FileInfo',
    'get_file_info',
    'component_name_from_path',
]
