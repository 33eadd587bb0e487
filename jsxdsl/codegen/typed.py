"""
Typed (TSX) component generator.

Emits the same component as the plain generator plus TypeScript interfaces
and type arguments, and optionally a position map back to the DSL source.
"""

from dataclasses import dataclass
from typing import Optional

from .component import ComponentGenerator
from .context import CodeGenerationContext
from .diagnostics import CompilerDiagnostics
from .source_map import PositionMap
from ..parser.ast_nodes import Component


DEFAULT_OUTPUT_FILE = 'output.tsx'


@dataclass
class GenerateOptions:
    """Options for typed generation."""
    component_name: str = 'Component'
    output_file: str = DEFAULT_OUTPUT_FILE
    source_map: bool = False


@dataclass
class GeneratedOutput:
    """Generated module text and, when requested, its position map."""
    code: str
    position_map: Optional[PositionMap] = None


def generate_typed(
    component: Component,
    source_id: Optional[str] = None,
    options: Optional[GenerateOptions] = None,
    diagnostics: Optional[CompilerDiagnostics] = None,
) -> GeneratedOutput:
    """
    Generate a TSX module for ``component``.

    Args:
        component: The parsed component
        source_id: Identifier of the DSL source (usually its path)
        options: Generation options; defaults when omitted
        diagnostics: Collector for non-fatal warnings

    Returns:
        GeneratedOutput; ``position_map`` is set only when ``options.source_map``
        is true and a ``source_id`` is given
    """
    options = options or GenerateOptions()
    track_positions = bool(options.source_map and source_id)

    ctx = CodeGenerationContext.for_component(
        component,
        component_name=options.component_name,
        typed=True,
        file_path=source_id or '',
        track_positions=track_positions,
        diagnostics=diagnostics,
    )
    code = ComponentGenerator(ctx).generate(component)

    position_map = None
    if track_positions:
        position_map = PositionMap(file=options.output_file, source=source_id)
        for generated_line, original_line in ctx.positions:
            position_map.add_mapping(generated_line, original_line)

    return GeneratedOutput(code=code, position_map=position_map)
