"""
Code generation context for the component code generators.

This module provides a context class that holds all state needed during
code generation, separating state management from the generation logic.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..parser.ast_nodes import Component, TypeNode
from .diagnostics import CompilerDiagnostics


@dataclass
class CodeGenerationContext:
    """
    Holds all state needed while generating one component.

    A fresh context is built for every generator call, so nothing leaks
    between compilations.
    """

    # Indentation state
    indent_level: int = 0
    indent_str: str = '  '

    # Output flavour
    component_name: str = 'Component'
    typed: bool = False

    # File context (used in diagnostics and position mappings)
    file_path: str = ''
    track_positions: bool = False

    # Variable tracking: state name -> annotation (None when untyped)
    state_types: Dict[str, Optional[TypeNode]] = field(default_factory=dict)

    # Emitted output
    lines: List[str] = field(default_factory=list)
    positions: List[Tuple[int, int]] = field(default_factory=list)

    # Diagnostics collector
    _diagnostics: Optional[CompilerDiagnostics] = None

    @property
    def diagnostics(self) -> CompilerDiagnostics:
        """Get the diagnostics collector, creating one if needed."""
        if self._diagnostics is None:
            self._diagnostics = CompilerDiagnostics()
        return self._diagnostics

    def indent(self) -> str:
        """Return the current indentation string."""
        return self.indent_str * self.indent_level

    def add_line(self, content: str, original_line: Optional[int] = None) -> None:
        """Append one output line, recording its source line when tracking positions."""
        if original_line and self.track_positions:
            self.positions.append((len(self.lines) + 1, original_line))
        self.lines.append(content)

    def add_lines(self, content: str, original_line: Optional[int] = None) -> None:
        """Append a multi-line block, one output line per text line."""
        for line in content.split('\n'):
            self.add_line(line, original_line)

    @property
    def code(self) -> str:
        """The output emitted so far."""
        return '\n'.join(self.lines)

    def is_state(self, name: str) -> bool:
        """Check whether ``name`` is a plain state cell."""
        return name in self.state_types

    @classmethod
    def for_component(
        cls,
        component: Component,
        component_name: str = 'Component',
        typed: bool = False,
        file_path: str = '',
        track_positions: bool = False,
        diagnostics: Optional[CompilerDiagnostics] = None,
    ) -> 'CodeGenerationContext':
        """
        Create a context for generating ``component``.

        Args:
            component: The parsed component
            component_name: Name of the emitted function and its export
            typed: Whether to emit TypeScript annotations
            file_path: Source path reported in diagnostics
            track_positions: Whether add_line records source positions
            diagnostics: Collector to report into (a private one when omitted)

        Returns:
            A new CodeGenerationContext instance
        """
        ctx = cls(
            component_name=component_name,
            typed=typed,
            file_path=file_path,
            track_positions=track_positions,
            _diagnostics=diagnostics,
        )
        for state in component.states:
            ctx.state_types[state.name] = state.type
        return ctx
