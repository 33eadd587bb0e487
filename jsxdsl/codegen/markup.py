"""
Markup generation for DSL to React compilation.

This module renders the component's markup tree as JSX: tag aliases,
attribute lowering, inline versus block child layout and each-loops.
"""

from dataclasses import replace
from types import MappingProxyType
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .base import BaseGenerator
from .dependencies import extract_dependencies
from .expression import ExpressionGenerator, rename_identifier
from .naming import capitalize, setter_name
from ..parser.ast_nodes import (
    Expression,
    Identifier,
    MarkupNode,
    EventHandlerRef,
    Attribute,
    Element,
    Fragment,
    Interpolation,
    Text,
    EachLoop,
)


# DSL tag shorthands; unknown tags pass through unchanged
TAG_ALIASES = MappingProxyType({
    'btn': 'button',
})

# DSL event names -> React props; others become 'on' + Name
EVENT_ATTRIBUTES = MappingProxyType({
    'click': 'onClick',
    'change': 'onChange',
    'submit': 'onSubmit',
})

# Loop variables are rewritten to these fixed names
LOOP_ITEM_NAME = '_item'
LOOP_INDEX_NAME = '_index'
LOOP_NAMES = frozenset({LOOP_ITEM_NAME, LOOP_INDEX_NAME})


def resolve_tag(tag_name: str) -> str:
    return TAG_ALIASES.get(tag_name, tag_name)


def event_prop_name(event: str) -> str:
    return EVENT_ATTRIBUTES.get(event, f'on{capitalize(event)}')


class MarkupGenerator(BaseGenerator):
    """
    Generates JSX from DSL markup AST nodes.

    Each generate_* method returns the rendered node as text, indented by the
    given number of spaces; multi-line nodes are joined with newlines.
    """

    def __init__(self, ctx: 'CodeGenerationContext', expr_generator: ExpressionGenerator):
        """
        Initialize the markup generator.

        Args:
            ctx: The code generation context
            expr_generator: Generator used for attribute and interpolation expressions
        """
        super().__init__(ctx)
        self._expr = expr_generator

    # =========================================================================
    # MAIN DISPATCH
    # =========================================================================

    def generate(self, node: MarkupNode, indent: int) -> str:
        """Render a markup node at ``indent`` spaces."""
        spaces = ' ' * indent

        if isinstance(node, Element):
            return self.generate_element(node, indent)
        elif isinstance(node, Fragment):
            return self.generate_fragment(node, indent)
        elif isinstance(node, EachLoop):
            return self.generate_each_loop(node, indent)
        elif isinstance(node, Interpolation):
            return f'{spaces}{self.generate_interpolation(node)}'
        elif isinstance(node, Text):
            return f'{spaces}{node.value}'

        raise TypeError(f'Unsupported markup node: {type(node).__name__}')

    def generate_interpolation(self, node: Interpolation) -> str:
        return f'{{{self._expr.generate(node.expression)}}}'

    # =========================================================================
    # ELEMENTS
    # =========================================================================

    def generate_element(self, element: Element, indent: int) -> str:
        """Render an element, self-closing it when it has no children."""
        spaces = ' ' * indent
        tag = resolve_tag(element.tag_name)

        attrs = [self.generate_attribute(attr) for attr in element.attributes]
        attr_string = ' ' + ' '.join(attrs) if attrs else ''

        if not element.children:
            return f'{spaces}<{tag}{attr_string} />'

        # Text and interpolations only: keep on one line
        if all(isinstance(child, (Text, Interpolation)) for child in element.children):
            content = ' '.join(self._inline_child(child) for child in element.children)
            return f'{spaces}<{tag}{attr_string}>{content}</{tag}>'

        children = '\n'.join(self.generate(child, indent + 2) for child in element.children)
        return f'{spaces}<{tag}{attr_string}>\n{children}\n{spaces}</{tag}>'

    def _inline_child(self, child: MarkupNode) -> str:
        if isinstance(child, Text):
            return child.value
        return self.generate_interpolation(child)

    def generate_fragment(self, fragment: Fragment, indent: int) -> str:
        spaces = ' ' * indent
        children = '\n'.join(self.generate(child, indent + 2) for child in fragment.children)
        return f'{spaces}<>\n{children}\n{spaces}</>'

    # =========================================================================
    # ATTRIBUTES
    # =========================================================================

    def generate_attribute(self, attr: Attribute) -> str:
        """Lower one attribute to its JSX form."""
        if isinstance(attr.value, EventHandlerRef):
            return f'{event_prop_name(attr.name)}={{{attr.value.handler}}}'

        value = self._expr.generate(attr.value)

        if attr.name == 'val':
            # Two-way binding when bound straight to a name; loop variables have no setter
            if isinstance(attr.value, Identifier) and attr.value.name not in LOOP_NAMES:
                setter = setter_name(attr.value.name)
                return f'value={{{value}}} onChange={{(e) => {setter}(e.target.value)}}'
            return f'value={{{value}}}'

        if attr.name == 'on':
            return f'onChange={{{value}}}'

        return f'{attr.name}={{{value}}}'

    # =========================================================================
    # LOOPS
    # =========================================================================

    def generate_each_loop(self, loop: EachLoop, indent: int) -> str:
        """Render ``{source.map((_item, _index) => (...))}`` around the template."""
        spaces = ' ' * indent
        if references_in_nested_loop(loop.template, loop.item):
            self._ctx.diagnostics.warn_shadowed_loop_variable(loop.item, self._ctx.file_path)
        template = rename_in_markup(loop.template, loop.item, LOOP_ITEM_NAME)
        body = self.generate(template, indent + 2)
        item_param = f'{LOOP_ITEM_NAME}{self.type_suffix(loop.item_type)}'
        return (
            f'{spaces}{{{loop.source}.map(({item_param}, {LOOP_INDEX_NAME}) => (\n'
            f'{body}\n'
            f'{spaces}))}}'
        )


# =============================================================================
# REWRITING
# =============================================================================

def rename_in_markup(node: MarkupNode, old: str, new: str) -> MarkupNode:
    """Return a copy of ``node`` with expression references to ``old`` renamed to ``new``."""
    if isinstance(node, Element):
        return replace(
            node,
            attributes=[_rename_attribute(attr, old, new) for attr in node.attributes],
            children=_rename_children(node.children, old, new),
        )
    if isinstance(node, Fragment):
        return replace(node, children=_rename_children(node.children, old, new))
    if isinstance(node, Interpolation):
        return replace(node, expression=rename_identifier(node.expression, old, new))
    if isinstance(node, Text):
        return node
    if isinstance(node, EachLoop):
        source = new if node.source == old else node.source
        if node.item == old:
            # Inner loop variable shadows the outer one
            return replace(node, source=source)
        return replace(node, source=source, template=rename_in_markup(node.template, old, new))

    raise TypeError(f'Unsupported markup node: {type(node).__name__}')


def markup_references(node: MarkupNode, name: str) -> bool:
    """Check whether any expression under ``node`` reads ``name`` as a free identifier."""
    if isinstance(node, Element):
        for attr in node.attributes:
            if isinstance(attr.value, Expression) and name in extract_dependencies(attr.value):
                return True
        return any(markup_references(child, name) for child in node.children)
    if isinstance(node, Fragment):
        return any(markup_references(child, name) for child in node.children)
    if isinstance(node, Interpolation):
        return name in extract_dependencies(node.expression)
    if isinstance(node, EachLoop):
        if node.source == name:
            return True
        return node.item != name and markup_references(node.template, name)
    return False


def references_in_nested_loop(node: MarkupNode, name: str) -> bool:
    """
    Check whether a loop nested under ``node`` reads ``name`` from its template.

    Every loop binds the same item name, so such a reference would resolve to
    the inner item once both variables are renamed.
    """
    if isinstance(node, (Element, Fragment)):
        return any(references_in_nested_loop(child, name) for child in node.children)
    if isinstance(node, EachLoop):
        return node.item != name and markup_references(node.template, name)
    return False


def _rename_children(children: List[MarkupNode], old: str, new: str) -> List[MarkupNode]:
    return [rename_in_markup(child, old, new) for child in children]


def _rename_attribute(attr: Attribute, old: str, new: str) -> Attribute:
    if isinstance(attr.value, Expression):
        return replace(attr, value=rename_identifier(attr.value, old, new))
    return attr
