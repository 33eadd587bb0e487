"""
Plain (JSX) component generator.
"""

from typing import Optional

from .component import ComponentGenerator
from .context import CodeGenerationContext
from .diagnostics import CompilerDiagnostics
from ..parser.ast_nodes import Component


def generate(
    component: Component,
    component_name: str = 'Component',
    diagnostics: Optional[CompilerDiagnostics] = None,
    file_path: str = '',
) -> str:
    """
    Generate a JSX module for ``component``.

    Args:
        component: The parsed component
        component_name: Name of the generated function and its default export
        diagnostics: Collector for non-fatal warnings
        file_path: Source path reported in diagnostics

    Returns:
        The generated module text
    """
    ctx = CodeGenerationContext.for_component(
        component,
        component_name=component_name,
        file_path=file_path,
        diagnostics=diagnostics,
    )
    return ComponentGenerator(ctx).generate(component)
