"""
AST node definitions for DSL parsing.

This module contains all the dataclasses representing nodes in the
Abstract Syntax Tree (AST) produced by the DSL parser. Nodes are built once
by the parser and only read by the code generators.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Union


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    pass


# =============================================================================
# TYPE NODES
# =============================================================================

@dataclass
class TypeNode(ASTNode):
    """Base class for type annotations."""
    pass


@dataclass
class SimpleType(TypeNode):
    """A named type (e.g., str, User)."""
    name: str


@dataclass
class ArrayType(TypeNode):
    """An array of a named element type (e.g., str[])."""
    element_type: str


@dataclass
class UnionType(TypeNode):
    """A union of member types (e.g., str | num)."""
    types: List[TypeNode] = field(default_factory=list)


@dataclass
class GenericType(TypeNode):
    """A generic type application (e.g., Map<str, num>)."""
    name: str
    type_params: List[TypeNode] = field(default_factory=list)


# =============================================================================
# EXPRESSION NODES
# =============================================================================

@dataclass
class Expression(ASTNode):
    """Base class for all expression nodes."""
    pass


@dataclass
class Literal(Expression):
    """Represents a literal value."""
    value: Union[str, float, bool]
    kind: str  # 'number', 'string', 'bool'


@dataclass
class Identifier(Expression):
    """Represents an identifier reference."""
    name: str


@dataclass
class BinaryOperation(Expression):
    """Represents a binary arithmetic operation (e.g., a + b)."""
    operator: str
    left: Expression
    right: Expression


@dataclass
class UpdateExpression(Expression):
    """Represents a postfix update on a name (x++, x--, x += v)."""
    target: str
    operator: str  # '++', '--', '+='
    value: Optional[Expression] = None


@dataclass
class PropertyAccess(Expression):
    """Represents property access on a name (e.g., user.name)."""
    object: str
    property: str


@dataclass
class MethodCall(Expression):
    """Represents a method call on a name (e.g., todos.push(input))."""
    object: str
    method: str
    args: List[Expression] = field(default_factory=list)


@dataclass
class ArrowFunction(Expression):
    """Represents an arrow function (e.g., (x) => x + 1)."""
    params: List[str]
    body: Expression


@dataclass
class ArrayLiteral(Expression):
    """Represents an array literal (e.g., [1, 2, 3])."""
    elements: List[Expression] = field(default_factory=list)


# =============================================================================
# MARKUP NODES
# =============================================================================

@dataclass
class MarkupNode(ASTNode):
    """Base class for all markup nodes."""
    pass


@dataclass
class EventHandlerRef(ASTNode):
    """Attribute value naming an event handler declared with '!'."""
    handler: str


@dataclass
class Attribute(ASTNode):
    """Represents an element attribute."""
    name: str
    value: Union[Expression, EventHandlerRef]


@dataclass
class Element(MarkupNode):
    """Represents an element with attributes and children."""
    tag_name: str
    attributes: List[Attribute] = field(default_factory=list)
    children: List[MarkupNode] = field(default_factory=list)


@dataclass
class Fragment(MarkupNode):
    """Represents sibling top-level elements wrapped in a fragment."""
    children: List[MarkupNode] = field(default_factory=list)


@dataclass
class Interpolation(MarkupNode):
    """Represents an expression embedded in markup ({expr})."""
    expression: Expression


@dataclass
class Text(MarkupNode):
    """Represents a run of literal text."""
    value: str


@dataclass
class EachLoop(MarkupNode):
    """Represents <each item in source> iteration over a collection."""
    item: str
    source: str
    template: Element
    item_type: Optional[TypeNode] = None


# =============================================================================
# DECLARATION NODES
# =============================================================================

@dataclass
class Declaration(ASTNode):
    """Base class for component declarations (cells)."""
    pass


@dataclass
class PropDeclaration(Declaration):
    """Represents a prop (:name or :name::Type)."""
    name: str
    type: Optional[TypeNode] = None
    line: int = 0


@dataclass
class StateDeclaration(Declaration):
    """Represents a state cell (@name = value)."""
    name: str
    initial_value: Expression
    type: Optional[TypeNode] = None
    line: int = 0


@dataclass
class ReducerAction(ASTNode):
    """One action of a reducer and the expression that handles it."""
    name: str
    handler: Expression


@dataclass
class ReducerDeclaration(Declaration):
    """Represents a reducer cell (@name:reducer = {initial, {actions}})."""
    name: str
    initial_value: Expression
    actions: List[ReducerAction] = field(default_factory=list)
    line: int = 0


@dataclass
class TransitionDeclaration(Declaration):
    """Represents a transition cell (@name:transition)."""
    name: str
    line: int = 0


@dataclass
class DeferredDeclaration(Declaration):
    """Represents a deferred value (@name:deferred = source)."""
    name: str
    source_value: Expression
    line: int = 0


@dataclass
class OptimisticDeclaration(Declaration):
    """Represents an optimistic update cell (@name:optimistic = {state, updateFn})."""
    name: str
    state: Expression
    update_fn: Expression
    line: int = 0


@dataclass
class SyncDeclaration(Declaration):
    """Represents an external store subscription (&&name = {subscribe, getSnapshot})."""
    name: str
    subscribe: Expression
    get_snapshot: Expression
    get_server_snapshot: Optional[Expression] = None
    line: int = 0


@dataclass
class ActionStateDeclaration(Declaration):
    """Represents an action-state cell (!!name = {actionFn, initialState})."""
    name: str
    action_fn: Expression
    initial_state: Expression
    line: int = 0


@dataclass
class ContextDeclaration(Declaration):
    """Represents context consumption (&name or &name::Type)."""
    name: str
    type: Optional[TypeNode] = None
    line: int = 0


@dataclass
class CallbackDeclaration(Declaration):
    """Represents a cached callback (^name = fn)."""
    name: str
    value: Expression
    line: int = 0


@dataclass
class RefDeclaration(Declaration):
    """Represents a ref (#name, #name::Type or #name = value)."""
    name: str
    type: Optional[TypeNode] = None
    initial_value: Optional[Expression] = None
    line: int = 0


@dataclass
class HandleDeclaration(Declaration):
    """Represents a method exposed through an imperative handle (~name = fn)."""
    name: str
    value: Expression
    line: int = 0


@dataclass
class MemoDeclaration(Declaration):
    """Represents a memoized value (%name = expression)."""
    name: str
    value: Expression
    type: Optional[TypeNode] = None
    line: int = 0


@dataclass
class EffectDeclaration(Declaration):
    """Represents an effect ($fn(args)) or layout effect ($$fn(args))."""
    function_name: str
    args: List[Expression] = field(default_factory=list)
    line: int = 0


@dataclass
class EventDeclaration(Declaration):
    """Represents an event handler (!name = expression)."""
    name: str
    handler: Expression
    line: int = 0


@dataclass
class IdDeclaration(Declaration):
    """Represents a generated id (?name)."""
    name: str
    line: int = 0


# =============================================================================
# ROOT NODE
# =============================================================================

@dataclass
class Component(ASTNode):
    """Root node representing one component definition."""
    props: List[PropDeclaration] = field(default_factory=list)
    states: List[StateDeclaration] = field(default_factory=list)
    reducers: List[ReducerDeclaration] = field(default_factory=list)
    transitions: List[TransitionDeclaration] = field(default_factory=list)
    deferreds: List[DeferredDeclaration] = field(default_factory=list)
    optimistics: List[OptimisticDeclaration] = field(default_factory=list)
    syncs: List[SyncDeclaration] = field(default_factory=list)
    action_states: List[ActionStateDeclaration] = field(default_factory=list)
    contexts: List[ContextDeclaration] = field(default_factory=list)
    callbacks: List[CallbackDeclaration] = field(default_factory=list)
    refs: List[RefDeclaration] = field(default_factory=list)
    handles: List[HandleDeclaration] = field(default_factory=list)
    memos: List[MemoDeclaration] = field(default_factory=list)
    effects: List[EffectDeclaration] = field(default_factory=list)
    layout_effects: List[EffectDeclaration] = field(default_factory=list)
    events: List[EventDeclaration] = field(default_factory=list)
    ids: List[IdDeclaration] = field(default_factory=list)
    markup: Optional[MarkupNode] = None
