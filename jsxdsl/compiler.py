#!/usr/bin/env python3
"""
DSL to React Compiler

This compiler converts terse component definitions written in the DSL into
React function components, as plain JSX or as TypeScript (TSX) with an
optional source map.

Key features:
- One component per .jsx.dsl / .tsx.dsl file
- Hooks derived from sigils (state, reducers, effects, memos, refs, ...)
- Dependency arrays inferred from the expressions they guard
- Line-level source maps for typed output

Usage:
    jsx-dsl src/Counter.jsx.dsl
    jsx-dsl src/Counter.tsx.dsl -s

The package is split into:
- lexer: Tokenization (tokens.py, lexer.py)
- parser: AST nodes and parsing (ast_nodes.py, parser.py)
- type_system: DSL type annotation mappings
- codegen: Code generation (plain.py, typed.py + specialized generators)
"""

import re
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Optional

from .lexer import Lexer
from .parser import Parser, Component
from .codegen import (
    generate,
    generate_typed,
    GenerateOptions,
    CompilerDiagnostics,
)
from .codegen.typed import DEFAULT_OUTPUT_FILE


VERSION = '2.0.0'

JSX_DSL_EXTENSION = '.jsx.dsl'
TSX_DSL_EXTENSION = '.tsx.dsl'


@dataclass
class FileInfo:
    """What a DSL file's name says about how to compile it."""
    is_typescript: bool
    component_name: str
    extension: Optional[str]
    default_output: str


@dataclass
class CompileResult:
    """The outcome of compiling one DSL unit."""
    code: str
    component: Component
    source_map: Optional[str] = None
    output_file: str = ''


def component_name_from_path(path: str, identifier_only: bool = False) -> str:
    """
    Derive a component name from a DSL file path.

    ``todo-list.jsx.dsl`` becomes ``TodoList``: the DSL extension is removed,
    the first character is capitalized and each ``-x`` becomes ``X``.

    Args:
        path: Path of the DSL file
        identifier_only: Also strip any remaining non-alphanumeric characters

    Returns:
        The component name
    """
    base_name = PurePath(path).name
    for extension in (TSX_DSL_EXTENSION, JSX_DSL_EXTENSION):
        if base_name.endswith(extension):
            base_name = base_name[:-len(extension)]
            break

    name = base_name[:1].upper() + base_name[1:]
    name = re.sub(r'-(\w)', lambda m: m.group(1).upper(), name)
    if identifier_only:
        name = re.sub(r'[^A-Za-z0-9]', '', name)
    return name


def get_file_info(path: str) -> FileInfo:
    """Get extension, component name and default output path for a DSL file."""
    if path.endswith(TSX_DSL_EXTENSION):
        extension = TSX_DSL_EXTENSION
    elif path.endswith(JSX_DSL_EXTENSION):
        extension = JSX_DSL_EXTENSION
    else:
        extension = None

    is_typescript = extension == TSX_DSL_EXTENSION
    output_extension = '.tsx' if is_typescript else '.jsx'
    if extension:
        default_output = path[:-len(extension)] + output_extension
    else:
        default_output = str(PurePath(path).with_suffix(output_extension))

    return FileInfo(
        is_typescript=is_typescript,
        component_name=component_name_from_path(path),
        extension=extension,
        default_output=default_output,
    )


class DslCompiler:
    """Main compiler class that orchestrates the conversion process."""

    def __init__(
        self,
        typescript: bool = False,
        source_map: bool = False,
        verbose: bool = False,
    ):
        self.typescript = typescript
        self.source_map = source_map
        self.diagnostics = CompilerDiagnostics(verbose=verbose)

    def compile_source(
        self,
        source: str,
        component_name: str = 'Component',
        typescript: Optional[bool] = None,
        source_id: Optional[str] = None,
        output_file: Optional[str] = None,
    ) -> CompileResult:
        """
        Compile DSL text to a React module.

        Args:
            source: The DSL text
            component_name: Name of the generated component
            typescript: Emit TSX; defaults to the compiler's setting
            source_id: Identifier of the source, used in diagnostics and source maps
            output_file: Name of the generated file recorded in the source map

        Returns:
            CompileResult with the generated code (and source map JSON for
            typed output when source maps are enabled)

        Raises:
            LexError, ParseError: on the first problem in ``source``
        """
        if typescript is None:
            typescript = self.typescript

        # Tokenize using the lexer module
        tokens = Lexer(source).tokenize()

        # Parse using the parser module
        component = Parser(tokens).parse()

        if typescript:
            options = GenerateOptions(
                component_name=component_name,
                output_file=output_file or DEFAULT_OUTPUT_FILE,
                source_map=self.source_map,
            )
            output = generate_typed(component, source_id, options, self.diagnostics)
            source_map = output.position_map.to_json() if output.position_map else None
            return CompileResult(
                code=output.code,
                component=component,
                source_map=source_map,
                output_file=output_file or '',
            )

        code = generate(component, component_name, self.diagnostics, source_id or '')
        return CompileResult(code=code, component=component, output_file=output_file or '')

    def compile_file(self, filepath: str, output: Optional[str] = None) -> CompileResult:
        """Compile a DSL file; ``.tsx.dsl`` inputs and ``.tsx`` outputs select typed output."""
        file_info = get_file_info(filepath)
        output_file = output or file_info.default_output
        typescript = self.typescript or file_info.is_typescript or output_file.endswith('.tsx')

        with open(filepath, 'r') as f:
            source = f.read()

        return self.compile_source(
            source,
            component_name=component_name_from_path(filepath, identifier_only=True),
            typescript=typescript,
            source_id=filepath,
            output_file=output_file,
        )

    def write_output(self, result: CompileResult) -> None:
        """Write the generated module, and its source map when there is one."""
        code = result.code
        path = Path(result.output_file)
        path.parent.mkdir(parents=True, exist_ok=True)

        if result.source_map is not None:
            map_path = Path(f'{result.output_file}.map')
            with open(map_path, 'w') as f:
                f.write(result.source_map)
            print(f"Written: {map_path}")
            code = f'{code}\n//# sourceMappingURL={map_path.name}'

        with open(path, 'w') as f:
            f.write(code)
        print(f"Written: {path}")


# =============================================================================
# CLI INTERFACE
# =============================================================================

EXAMPLES = (
    ('Simple Counter', """
:label
@count = 0
!click = count++
<btn @click=click>{label}: {count}</btn>
"""),
    ('TypeScript Counter', """
:label::str
@count::num = 0
!click = count++
<btn @click=click>{label}: {count}</btn>
"""),
    ('Todo List with Types', """
@todos::str[] = []
@input::str = ""
!add = todos.push(input)

<div>
  <input val={input} />
  <btn @click=add>Add</btn>
  <ul>
    <each item::str in todos>
      <li>{item}</li>
    </each>
  </ul>
</div>
"""),
    ('Reducer and Imperative Handle', """
@count:reducer = {0, {increment: (s) => s + 1, reset: (s) => 0}}
#input
~focus = () => input.focus()
<div>
  <input ref={input} />
  <span>{count}</span>
</div>
"""),
)

STATS_FIELDS = (
    ('Props', 'props'),
    ('States', 'states'),
    ('Ids', 'ids'),
    ('Deferred values', 'deferreds'),
    ('Optimistic values', 'optimistics'),
    ('External stores', 'syncs'),
    ('Action states', 'action_states'),
    ('Reducers', 'reducers'),
    ('Transitions', 'transitions'),
    ('Contexts', 'contexts'),
    ('Callbacks', 'callbacks'),
    ('Refs', 'refs'),
    ('Handles', 'handles'),
    ('Memos', 'memos'),
    ('Effects', 'effects'),
    ('Layout effects', 'layout_effects'),
    ('Events', 'events'),
)


def print_examples() -> None:
    print('DSL Examples:')
    for title, source in EXAMPLES:
        print(f'\n{title}:')
        print(source)


def print_stats(component: Component) -> None:
    print('\nCompilation Stats:')
    for label, attribute in STATS_FIELDS:
        print(f'  {label}: {len(getattr(component, attribute))}')


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        prog='jsx-dsl',
        description='DSL to React component compiler with TypeScript and source map support',
    )
    parser.add_argument('input', nargs='?', help='Input DSL file (.jsx.dsl or .tsx.dsl)')
    parser.add_argument('-o', '--output', help='Output file path')
    parser.add_argument('-t', '--typescript', action='store_true', help='Generate TypeScript (.tsx) output')
    parser.add_argument('-s', '--sourcemap', action='store_true', help='Generate a source map (typed output)')
    parser.add_argument('--stdout', action='store_true', help='Print to stdout instead of file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show generated code and every warning')
    parser.add_argument('--stats', action='store_true', help='Show compilation statistics')
    parser.add_argument('--debug', action='store_true', help='Show stack traces on failure')
    parser.add_argument('--examples', action='store_true', help='Show DSL syntax examples')
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    args = parser.parse_args(argv)

    if args.examples:
        print_examples()
        return 0

    if not args.input:
        parser.error('the following arguments are required: input')

    compiler = DslCompiler(
        typescript=args.typescript,
        source_map=args.sourcemap,
        verbose=args.verbose,
    )

    try:
        result = compiler.compile_file(args.input, args.output)
        if args.stdout:
            print(result.code)
            if result.source_map is not None:
                print('Note: source map not written with --stdout', file=sys.stderr)
        else:
            compiler.write_output(result)
            print(f"Compiled {args.input} to {result.output_file}")
            if args.verbose:
                print('\n' + result.code)
    except Exception as e:
        print(f"Compilation failed: {e}", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        return 1

    if args.stats:
        print_stats(result.component)
    compiler.diagnostics.print_summary()
    return 0


if __name__ == '__main__':
    sys.exit(main())
