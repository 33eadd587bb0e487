"""
Diagnostic/warning system for the compiler.

Collects and reports warnings about DSL constructs that compiled, but
probably not the way the author intended.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for compiler diagnostics."""
    WARNING = 'warning'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    file_path: str = ''
    line: Optional[int] = None
    construct: str = ''  # e.g., 'duplicate declaration', 'markup'

    def __str__(self) -> str:
        location = self.file_path
        if self.line:
            location = f'{location}:{self.line}'
        if location:
            return f'[{self.severity.value}] {location}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class CompilerDiagnostics:
    """
    Collects compiler warnings/diagnostics during code generation.

    Usage:
        diag = CompilerDiagnostics()
        diag.warn_duplicate_declaration("count", "Counter.jsx.dsl", line=3)
        # ... after compilation ...
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    @property
    def count(self) -> int:
        """Get total diagnostic count."""
        return len(self._diagnostics)

    # =========================================================================
    # SPECIFIC WARNING METHODS
    # =========================================================================

    def warn_duplicate_declaration(
        self,
        name: str,
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Warn that a name is declared more than once."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f'"{name}" is declared more than once. '
                    f'Every declaration is emitted; the generated code may not compile.',
            file_path=file_path,
            line=line,
            construct='duplicate declaration',
        ))

    def warn_push_on_non_collection(
        self,
        name: str,
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Warn that a push handler targets something other than a list state."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message=f'"{name}.push(...)" does not target a list state; '
                    f'the call is emitted as-is and will not trigger a re-render.',
            file_path=file_path,
            line=line,
            construct='push handler',
        ))

    def warn_missing_markup(
        self,
        file_path: str = '',
    ) -> None:
        """Warn that the component has no markup tree."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W003',
            message='Component has no markup; rendering an empty <div />.',
            file_path=file_path,
            construct='markup',
        ))

    def warn_shadowed_loop_variable(
        self,
        name: str,
        file_path: str = '',
    ) -> None:
        """Warn that a nested loop's item hides an outer loop variable its template reads."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W004',
            message=f'"{name}" is read inside a nested <each>; both loops bind _item, '
                    f'so the reference resolves to the inner item.',
            file_path=file_path,
            construct='shadowed loop variable',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print a summary of all diagnostics to stderr (or specified file)."""
        if file is None:
            file = sys.stderr

        warnings = self.warnings
        if not warnings:
            return

        print(f'\nCompiler warnings ({len(warnings)}):', file=file)
        # Group by construct type
        by_construct: dict = {}
        for w in warnings:
            key = w.construct or 'other'
            if key not in by_construct:
                by_construct[key] = []
            by_construct[key].append(w)

        for construct, diags in sorted(by_construct.items()):
            print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
            if self._verbose:
                for d in diags:
                    print(f'    {d}', file=file)

    def get_summary(self) -> str:
        """Get a summary string of all diagnostics."""
        if not self._diagnostics:
            return 'No compiler warnings.'

        by_construct: dict = {}
        for w in self.warnings:
            key = w.construct or 'other'
            if key not in by_construct:
                by_construct[key] = 0
            by_construct[key] += 1

        parts = [f'{count} {construct}' for construct, count in sorted(by_construct.items())]
        return f'Compiler warnings: {", ".join(parts)}'
