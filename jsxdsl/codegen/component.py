"""
Component assembly shared by the plain and typed generators.

This module lays out a whole generated module: imports, reducer functions,
(typed) interfaces, the component signature, its body and the export.
"""

from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .base import BaseGenerator
from .declarations import DeclarationGenerator
from .expression import ExpressionGenerator
from .imports import ImportGenerator
from .markup import MarkupGenerator
from .naming import props_interface_name, handle_interface_name
from ..parser.ast_nodes import Component
from ..type_system import type_to_ts


# Declaration lists whose names become bindings in the component body
NAMED_DECLARATIONS = (
    'props', 'states', 'ids', 'deferreds', 'optimistics', 'syncs',
    'action_states', 'reducers', 'transitions', 'contexts', 'callbacks',
    'refs', 'handles', 'memos', 'events',
)

MARKUP_INDENT = 4
EMPTY_MARKUP = '<div />'


class ComponentGenerator(BaseGenerator):
    """
    Generates a complete React component module.

    The same layout serves both output flavours; the context's ``typed`` flag
    decides whether interfaces and type arguments are emitted.
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        super().__init__(ctx)
        self._expr = ExpressionGenerator(ctx)
        self._markup = MarkupGenerator(ctx, self._expr)
        self._declarations = DeclarationGenerator(ctx, self._expr)
        self._imports = ImportGenerator(ctx)

    def generate(self, component: Component) -> str:
        """Generate the module text for ``component``."""
        self.check_duplicate_names(component)

        self._imports.generate(component)
        self.generate_reducer_functions(component)
        if self._ctx.typed:
            self.generate_interfaces(component)

        self.generate_signature(component)
        self.indent_level += 1
        self._declarations.generate(component)
        self.generate_return(component)
        self.indent_level -= 1
        self._ctx.add_line('});' if component.handles else '}')

        self._ctx.add_line('')
        self._ctx.add_line(f'export default {self._ctx.component_name};')
        return self._ctx.code

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def check_duplicate_names(self, component: Component) -> None:
        """Report every declaration whose name was already declared."""
        seen = set()
        for name, line in self._declared_names(component):
            if name in seen:
                self._ctx.diagnostics.warn_duplicate_declaration(
                    name, self._ctx.file_path, line or None
                )
            seen.add(name)

    def _declared_names(self, component: Component) -> List[Tuple[str, int]]:
        declarations = []
        for attribute in NAMED_DECLARATIONS:
            declarations.extend(getattr(component, attribute))
        declarations.sort(key=lambda decl: decl.line)
        return [(decl.name, decl.line) for decl in declarations]

    # =========================================================================
    # MODULE-LEVEL DEFINITIONS
    # =========================================================================

    def generate_reducer_functions(self, component: Component) -> None:
        for reducer in component.reducers:
            self._declarations.generate_reducer_function(reducer)
            self._ctx.add_line('')

    def generate_interfaces(self, component: Component) -> None:
        """Emit the props interface and, for handles, the handle interface."""
        name = self._ctx.component_name

        if component.props:
            self._ctx.add_line(f'interface {props_interface_name(name)} {{')
            for prop in component.props:
                self._ctx.add_line(f'  {prop.name}: {type_to_ts(prop.type)};', prop.line)
            self._ctx.add_line('}')
            self._ctx.add_line('')

        if component.handles:
            self._ctx.add_line(f'interface {handle_interface_name(name)} {{')
            for handle in component.handles:
                self._ctx.add_line(f'  {handle.name}: (...args: any[]) => any;', handle.line)
            self._ctx.add_line('}')
            self._ctx.add_line('')

    # =========================================================================
    # SIGNATURE AND BODY
    # =========================================================================

    def props_parameter(self, component: Component) -> str:
        """The destructured props parameter, or '' when there are no props."""
        if not component.props:
            return ''
        names = ', '.join(prop.name for prop in component.props)
        if self._ctx.typed:
            return f'{{ {names} }}: {props_interface_name(self._ctx.component_name)}'
        return f'{{ {names} }}'

    def generate_signature(self, component: Component) -> None:
        name = self._ctx.component_name
        props = self.props_parameter(component)

        if not component.handles:
            self._ctx.add_line(f'function {name}({props}) {{')
            return

        # Handles need the forwarded ref
        type_args = ''
        if self._ctx.typed:
            params = [handle_interface_name(name)]
            if component.props:
                params.append(props_interface_name(name))
            type_args = f'<{", ".join(params)}>'
        self._ctx.add_line(
            f'const {name} = forwardRef{type_args}(function {name}({props or "props"}, ref) {{'
        )

    def generate_return(self, component: Component) -> None:
        self._ctx.add_line(f'{self.indent()}return (')
        if component.markup is None:
            self._ctx.diagnostics.warn_missing_markup(self._ctx.file_path)
            self._ctx.add_line(' ' * MARKUP_INDENT + EMPTY_MARKUP)
        else:
            self._ctx.add_lines(self._markup.generate(component.markup, MARKUP_INDENT))
        self._ctx.add_line(f'{self.indent()});')
