"""
DSL parser implementation.

The Parser converts a stream of tokens from the Lexer into a Component AST.
Declarations are newline-terminated statements introduced by a sigil; the
markup tree starts at the first '<' at statement level.
"""

from types import MappingProxyType
from typing import List, Optional

from ..errors import ParseError, MismatchedTagError
from ..lexer import Token, TokenType, format_number
from .ast_nodes import (
    # Types
    TypeNode,
    SimpleType,
    ArrayType,
    UnionType,
    GenericType,
    # Expressions
    Expression,
    Literal,
    Identifier,
    BinaryOperation,
    UpdateExpression,
    PropertyAccess,
    MethodCall,
    ArrowFunction,
    ArrayLiteral,
    # Markup
    MarkupNode,
    EventHandlerRef,
    Attribute,
    Element,
    Fragment,
    Interpolation,
    Text,
    EachLoop,
    # Declarations
    PropDeclaration,
    StateDeclaration,
    ReducerAction,
    ReducerDeclaration,
    TransitionDeclaration,
    DeferredDeclaration,
    OptimisticDeclaration,
    SyncDeclaration,
    ActionStateDeclaration,
    ContextDeclaration,
    CallbackDeclaration,
    RefDeclaration,
    HandleDeclaration,
    MemoDeclaration,
    EffectDeclaration,
    EventDeclaration,
    IdDeclaration,
    # Root
    Component,
)


BINARY_OPERATORS = MappingProxyType({
    TokenType.PLUS: '+',
    TokenType.MINUS: '-',
    TokenType.MULTIPLY: '*',
    TokenType.SLASH: '/',
})

# Tokens that become literal text when they appear between tags
TEXT_SYMBOLS = MappingProxyType({
    TokenType.MINUS: '-',
    TokenType.PLUS: '+',
    TokenType.PROP: ':',
})

MODIFIER_REDUCER = 'reducer'
MODIFIER_TRANSITION = 'transition'
MODIFIER_DEFERRED = 'deferred'
MODIFIER_OPTIMISTIC = 'optimistic'

EACH_TAG = 'each'


class Parser:
    """
    Recursive descent parser for DSL source.

    Parses a stream of tokens into a Component AST. The cursor belongs to the
    parser instance and only moves forward.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.component = Component()

    def peek(self, offset: int = 0) -> Token:
        """Look ahead in the token stream without consuming."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def current(self) -> Token:
        """Return the current token."""
        return self.peek()

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def expect(self, token_type: TokenType, message: str = '') -> Token:
        """Consume the current token if it matches, otherwise raise an error."""
        token = self.current()
        if token.type != token_type:
            detail = f'Expected {token_type.name} but got {token.type.name}'
            if message:
                detail = f'{detail}: {message}'
            raise ParseError(detail, token.type.name, token.line, token.column)
        return self.advance()

    def error(self, message: str, token: Optional[Token] = None) -> ParseError:
        """Build a ParseError positioned at ``token`` (default: the current token)."""
        token = token or self.current()
        return ParseError(message, token.type.name, token.line, token.column)

    def skip_newlines(self) -> None:
        """Skip over blank lines."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    # =========================================================================
    # TOP-LEVEL PARSING
    # =========================================================================

    def parse(self) -> Component:
        """Parse the whole token stream into a Component AST."""
        while not self.match(TokenType.EOF):
            self.skip_newlines()
            if self.match(TokenType.EOF):
                break

            if self.match(TokenType.PROP):
                self.parse_prop()
            elif self.match(TokenType.STATE):
                self.parse_state()
            elif self.match(TokenType.EFFECT):
                self.component.effects.append(self.parse_effect(TokenType.EFFECT))
            elif self.match(TokenType.LAYOUT_EFFECT):
                self.component.layout_effects.append(self.parse_effect(TokenType.LAYOUT_EFFECT))
            elif self.match(TokenType.MEMO):
                self.parse_memo()
            elif self.match(TokenType.EVENT):
                self.parse_event()
            elif self.match(TokenType.ACTION_STATE):
                self.parse_action_state()
            elif self.match(TokenType.CALLBACK):
                self.parse_callback()
            elif self.match(TokenType.HANDLE):
                self.parse_handle()
            elif self.match(TokenType.REF):
                self.parse_ref()
            elif self.match(TokenType.CONTEXT):
                self.parse_context()
            elif self.match(TokenType.SYNC):
                self.parse_sync()
            elif self.match(TokenType.ID):
                self.parse_id()
            elif self.match(TokenType.LT):
                if self.component.markup is not None:
                    raise self.error('A component can only have one markup tree')
                self.component.markup = self.parse_markup()
            else:
                token = self.current()
                raise self.error(f'Unexpected token: {token.type.name}', token)

            self.skip_newlines()

        return self.component

    def parse_name(self, what: str) -> str:
        """Consume a declaration name."""
        return self.expect(TokenType.IDENTIFIER, f'Expected {what} name').value

    # =========================================================================
    # TYPE ANNOTATIONS
    # =========================================================================

    def parse_type_annotation(self) -> Optional[TypeNode]:
        """Parse an optional '::Type' annotation."""
        if not self.match(TokenType.COLON_TYPE):
            return None
        self.advance()
        return self.parse_type()

    def parse_type(self) -> TypeNode:
        """Parse a type, folding '|' separated members into a union."""
        types = [self.parse_primary_type()]
        while self.match(TokenType.PIPE):
            self.advance()
            types.append(self.parse_primary_type())

        if len(types) == 1:
            return types[0]
        return UnionType(types=types)

    def parse_primary_type(self) -> TypeNode:
        """Parse a simple, array or generic type."""
        if not self.match(TokenType.IDENTIFIER):
            raise self.error(f'Expected type but got {self.current().type.name}')
        name = self.advance().value

        if self.match(TokenType.LBRACKET):
            self.advance()
            self.expect(TokenType.RBRACKET)
            return ArrayType(element_type=name)

        if self.match(TokenType.LT):
            self.advance()
            params = [self.parse_type()]
            while self.match(TokenType.COMMA):
                self.advance()
                params.append(self.parse_type())
            self.expect(TokenType.GT)
            return GenericType(name=name, type_params=params)

        return SimpleType(name=name)

    # =========================================================================
    # DECLARATIONS
    # =========================================================================

    def parse_prop(self) -> None:
        """Parse a prop: ':name' or ':name::Type'."""
        line = self.expect(TokenType.PROP).line
        name = self.parse_name('prop')
        prop_type = self.parse_type_annotation()
        self.component.props.append(PropDeclaration(name=name, type=prop_type, line=line))

    def parse_state(self) -> None:
        """Parse a state cell or one of its ':modifier' sub-forms."""
        line = self.expect(TokenType.STATE).line
        name = self.parse_name('state')

        if self.match(TokenType.PROP) and self.peek(1).type == TokenType.IDENTIFIER:
            self.advance()  # :
            modifier_token = self.advance()
            self.parse_state_modifier(name, modifier_token, line)
            return

        state_type = self.parse_type_annotation()
        self.expect(TokenType.ASSIGN)
        value = self.parse_expression()
        self.component.states.append(
            StateDeclaration(name=name, initial_value=value, type=state_type, line=line)
        )

    def parse_state_modifier(self, name: str, modifier_token: Token, line: int) -> None:
        """Parse the remainder of '@name:modifier ...'."""
        modifier = modifier_token.value

        if modifier == MODIFIER_REDUCER:
            self.expect(TokenType.ASSIGN)
            initial_value, actions = self.parse_reducer_value()
            self.component.reducers.append(ReducerDeclaration(
                name=name, initial_value=initial_value, actions=actions, line=line,
            ))
        elif modifier == MODIFIER_TRANSITION:
            self.component.transitions.append(TransitionDeclaration(name=name, line=line))
        elif modifier == MODIFIER_DEFERRED:
            self.expect(TokenType.ASSIGN)
            source = self.parse_expression()
            self.component.deferreds.append(
                DeferredDeclaration(name=name, source_value=source, line=line)
            )
        elif modifier == MODIFIER_OPTIMISTIC:
            self.expect(TokenType.ASSIGN)
            state, update_fn = self.parse_brace_group('optimistic', 2, 2)
            self.component.optimistics.append(OptimisticDeclaration(
                name=name, state=state, update_fn=update_fn, line=line,
            ))
        else:
            raise self.error(f'Unknown state modifier: {modifier}', modifier_token)

    def parse_reducer_value(self):
        """Parse a reducer value: 'initial' or '{initial, {action: handler, ...}}'."""
        if not self.match(TokenType.LBRACE):
            return self.parse_expression(), []

        self.expect(TokenType.LBRACE)
        self.skip_newlines()
        initial_value = self.parse_expression()
        self.skip_newlines()
        self.expect(TokenType.COMMA, 'reducer needs an action block')
        self.skip_newlines()
        self.expect(TokenType.LBRACE, 'reducer needs an action block')
        self.skip_newlines()

        actions = []
        while not self.match(TokenType.RBRACE):
            action_name = self.expect(TokenType.IDENTIFIER, 'Expected action name').value
            self.expect(TokenType.PROP, 'Expected ":" after action name')
            handler = self.parse_expression()
            actions.append(ReducerAction(name=action_name, handler=handler))
            self.skip_newlines()
            if self.match(TokenType.COMMA):
                self.advance()
                self.skip_newlines()

        self.expect(TokenType.RBRACE)  # close actions
        self.skip_newlines()
        self.expect(TokenType.RBRACE)  # close reducer value
        return initial_value, actions

    def parse_brace_group(self, what: str, minimum: int, maximum: int) -> List[Expression]:
        """Parse '{expr, expr, ...}' holding between minimum and maximum expressions."""
        brace = self.expect(TokenType.LBRACE)
        values = self.parse_expression_list(TokenType.RBRACE)
        if not minimum <= len(values) <= maximum:
            expected = str(minimum) if minimum == maximum else f'{minimum} to {maximum}'
            raise self.error(f'{what} expects {expected} values but got {len(values)}', brace)
        return values

    def parse_effect(self, sigil: TokenType) -> EffectDeclaration:
        """Parse an effect: '$fn(args)' or '$$fn(args)'."""
        line = self.expect(sigil).line
        function_name = self.expect(TokenType.IDENTIFIER, 'Expected function name').value
        self.expect(TokenType.LPAREN)
        args = self.parse_expression_list(TokenType.RPAREN)
        return EffectDeclaration(function_name=function_name, args=args, line=line)

    def parse_memo(self) -> None:
        """Parse a memo: '%name = expr' or '%name::Type = expr'."""
        line = self.expect(TokenType.MEMO).line
        name = self.parse_name('memo')
        memo_type = self.parse_type_annotation()
        self.expect(TokenType.ASSIGN)
        value = self.parse_expression()
        self.component.memos.append(MemoDeclaration(name=name, value=value, type=memo_type, line=line))

    def parse_event(self) -> None:
        """Parse an event handler: '!name = expr'."""
        line = self.expect(TokenType.EVENT).line
        name = self.parse_name('event')
        self.expect(TokenType.ASSIGN)
        handler = self.parse_expression()
        self.component.events.append(EventDeclaration(name=name, handler=handler, line=line))

    def parse_action_state(self) -> None:
        """Parse an action-state cell: '!!name = {actionFn, initialState}'."""
        line = self.expect(TokenType.ACTION_STATE).line
        name = self.parse_name('action state')
        self.expect(TokenType.ASSIGN)
        action_fn, initial_state = self.parse_brace_group('action state', 2, 2)
        self.component.action_states.append(ActionStateDeclaration(
            name=name, action_fn=action_fn, initial_state=initial_state, line=line,
        ))

    def parse_callback(self) -> None:
        """Parse a cached callback: '^name = fn'."""
        line = self.expect(TokenType.CALLBACK).line
        name = self.parse_name('callback')
        self.expect(TokenType.ASSIGN)
        value = self.parse_expression()
        self.component.callbacks.append(CallbackDeclaration(name=name, value=value, line=line))

    def parse_handle(self) -> None:
        """Parse an imperative handle method: '~name = fn'."""
        line = self.expect(TokenType.HANDLE).line
        name = self.parse_name('handle')
        self.expect(TokenType.ASSIGN)
        value = self.parse_expression()
        self.component.handles.append(HandleDeclaration(name=name, value=value, line=line))

    def parse_ref(self) -> None:
        """Parse a ref: '#name', '#name::Type' and an optional '= initial'."""
        line = self.expect(TokenType.REF).line
        name = self.parse_name('ref')
        ref_type = self.parse_type_annotation()
        initial_value = None
        if self.match(TokenType.ASSIGN):
            self.advance()
            initial_value = self.parse_expression()
        self.component.refs.append(RefDeclaration(
            name=name, type=ref_type, initial_value=initial_value, line=line,
        ))

    def parse_context(self) -> None:
        """Parse a context consumption: '&name' or '&name::Type'."""
        line = self.expect(TokenType.CONTEXT).line
        name = self.parse_name('context')
        context_type = self.parse_type_annotation()
        self.component.contexts.append(ContextDeclaration(name=name, type=context_type, line=line))

    def parse_sync(self) -> None:
        """Parse an external store sync: '&&name = {subscribe, getSnapshot[, getServerSnapshot]}'."""
        line = self.expect(TokenType.SYNC).line
        name = self.parse_name('store')
        self.expect(TokenType.ASSIGN)
        values = self.parse_brace_group('external store', 2, 3)
        self.component.syncs.append(SyncDeclaration(
            name=name,
            subscribe=values[0],
            get_snapshot=values[1],
            get_server_snapshot=values[2] if len(values) > 2 else None,
            line=line,
        ))

    def parse_id(self) -> None:
        """Parse an id cell: '?name'."""
        line = self.expect(TokenType.ID).line
        name = self.parse_name('id')
        self.component.ids.append(IdDeclaration(name=name, line=line))

    # =========================================================================
    # EXPRESSION PARSING
    # =========================================================================

    def parse_expression(self) -> Expression:
        """Parse an expression.

        There is no precedence table: an identifier followed by an arithmetic
        operator takes the whole rest of the expression as its right operand,
        so 'a - b - c' parses as 'a - (b - c)'.
        """
        token = self.current()

        if token.type == TokenType.NUMBER:
            self.advance()
            return Literal(value=token.value, kind='number')

        if token.type == TokenType.STRING:
            self.advance()
            return Literal(value=token.value, kind='string')

        if token.type == TokenType.IDENTIFIER:
            return self.parse_identifier_expression()

        if token.type == TokenType.LPAREN:
            return self.parse_arrow_function()

        if token.type == TokenType.LBRACKET:
            self.advance()
            elements = self.parse_expression_list(TokenType.RBRACKET)
            return ArrayLiteral(elements=elements)

        raise self.error(f'Unexpected token in expression: {token.type.name}', token)

    def parse_identifier_expression(self) -> Expression:
        """Parse an expression that starts with an identifier."""
        name = self.advance().value

        # param => body
        if self.match(TokenType.ARROW):
            self.advance()
            body = self.parse_expression()
            return ArrowFunction(params=[name], body=body)

        if self.match(TokenType.INCREMENT):
            self.advance()
            return UpdateExpression(target=name, operator='++')

        if self.match(TokenType.DECREMENT):
            self.advance()
            return UpdateExpression(target=name, operator='--')

        if self.match(TokenType.PLUS_ASSIGN):
            self.advance()
            value = self.parse_expression()
            return UpdateExpression(target=name, operator='+=', value=value)

        if self.current().type in BINARY_OPERATORS:
            operator = BINARY_OPERATORS[self.advance().type]
            right = self.parse_expression()
            return BinaryOperation(operator=operator, left=Identifier(name=name), right=right)

        if self.match(TokenType.DOT):
            self.advance()
            member = self.expect(TokenType.IDENTIFIER, 'Expected property or method name').value
            if self.match(TokenType.LPAREN):
                self.advance()
                args = self.parse_expression_list(TokenType.RPAREN)
                return MethodCall(object=name, method=member, args=args)
            return PropertyAccess(object=name, property=member)

        return Identifier(name=name)

    def parse_arrow_function(self) -> ArrowFunction:
        """Parse '(a, b) => body' with a possibly empty parameter list."""
        self.expect(TokenType.LPAREN)
        params = []
        while not self.match(TokenType.RPAREN):
            params.append(self.expect(TokenType.IDENTIFIER, 'Expected parameter name').value)
            if self.match(TokenType.COMMA):
                self.advance()
            elif not self.match(TokenType.RPAREN):
                raise self.error(f'Unexpected token in parameter list: {self.current().type.name}')
        self.expect(TokenType.RPAREN)
        self.expect(TokenType.ARROW, 'Expected => after parameter list')
        body = self.parse_expression()
        return ArrowFunction(params=params, body=body)

    def parse_expression_list(self, closing: TokenType) -> List[Expression]:
        """Parse comma separated expressions up to and including ``closing``."""
        values = []
        self.skip_newlines()
        while not self.match(closing):
            values.append(self.parse_expression())
            self.skip_newlines()
            if self.match(TokenType.COMMA):
                self.advance()
                self.skip_newlines()
            elif not self.match(closing):
                raise self.error(
                    f'Expected {closing.name} or COMMA but got {self.current().type.name}'
                )
        self.expect(closing)
        return values

    # =========================================================================
    # MARKUP PARSING
    # =========================================================================

    def parse_markup(self) -> MarkupNode:
        """Parse the markup tree; sibling top-level elements become a fragment."""
        elements = []
        while self.match(TokenType.LT):
            elements.append(self.parse_element())
            self.skip_newlines()

        if len(elements) == 1:
            return elements[0]
        return Fragment(children=elements)

    def parse_element(self) -> Element:
        """Parse '<tag attrs>children</tag>' or '<tag attrs />'."""
        self.expect(TokenType.LT)
        tag_name = self.expect(TokenType.IDENTIFIER, 'Expected tag name').value
        attributes = self.parse_attributes(tag_name)

        # Self-closing tag
        if self.match(TokenType.SLASH):
            self.advance()
            self.expect(TokenType.GT)
            return Element(tag_name=tag_name, attributes=attributes, children=[])

        self.expect(TokenType.GT)
        children = self.parse_children(tag_name)

        # Closing tag
        self.expect(TokenType.LT)
        self.expect(TokenType.SLASH)
        closing = self.expect(TokenType.IDENTIFIER, 'Expected closing tag name')
        if closing.value != tag_name:
            raise MismatchedTagError(tag_name, closing.value, closing.line, closing.column)
        self.expect(TokenType.GT)

        return Element(tag_name=tag_name, attributes=attributes, children=children)

    def parse_attributes(self, tag_name: str) -> List[Attribute]:
        """Parse attributes until '>' or '/'."""
        attributes = []
        while not self.match(TokenType.GT, TokenType.SLASH):
            if self.match(TokenType.EOF):
                raise self.error(f'Unterminated tag <{tag_name}>')

            if self.match(TokenType.STATE) and self.peek(1).type == TokenType.IDENTIFIER:
                # @click=handler
                self.advance()
                name = self.advance().value
                self.expect(TokenType.ASSIGN)
                handler = self.expect(TokenType.IDENTIFIER, 'Expected event handler name').value
                attributes.append(Attribute(name=name, value=EventHandlerRef(handler=handler)))
            elif self.match(TokenType.IDENTIFIER):
                name = self.parse_attribute_name()
                if self.match(TokenType.ASSIGN):
                    self.advance()
                    if self.match(TokenType.LBRACE):
                        self.advance()
                        value = self.parse_expression()
                        self.expect(TokenType.RBRACE)
                    else:
                        value = self.parse_expression()
                else:
                    # Boolean attribute (no value)
                    value = Literal(value=True, kind='bool')
                attributes.append(Attribute(name=name, value=value))
            else:
                self.advance()  # Skip unknown tokens

        return attributes

    def parse_attribute_name(self) -> str:
        """Read an attribute name, joining hyphenated parts written without spaces."""
        token = self.advance()
        name = token.value
        end = token.column + len(name)
        while (
            self.match(TokenType.MINUS)
            and self.current().line == token.line
            and self.current().column == end
            and self.peek(1).type == TokenType.IDENTIFIER
            and self.peek(1).column == end + 1
        ):
            self.advance()
            part = self.advance().value
            name = f'{name}-{part}'
            end += 1 + len(part)
        return name

    def parse_children(self, tag_name: str) -> List[MarkupNode]:
        """Parse child nodes up to the closing-tag lookahead '</'."""
        children: List[MarkupNode] = []

        while not (self.match(TokenType.LT) and self.peek(1).type == TokenType.SLASH):
            token = self.current()

            if token.type == TokenType.EOF:
                raise self.error(f'Unclosed tag <{tag_name}>', token)

            if token.type == TokenType.LT:
                next_token = self.peek(1)
                if next_token.type == TokenType.IDENTIFIER and next_token.value == EACH_TAG:
                    children.append(self.parse_each_loop())
                else:
                    children.append(self.parse_element())
            elif token.type == TokenType.LBRACE:
                self.advance()
                expression = self.parse_expression()
                self.expect(TokenType.RBRACE)
                children.append(Interpolation(expression=expression))
            elif token.type in (TokenType.IDENTIFIER, TokenType.STRING):
                self.advance()
                children.append(Text(value=token.value))
            elif token.type == TokenType.NUMBER:
                self.advance()
                children.append(Text(value=format_number(token.value)))
            elif token.type in TEXT_SYMBOLS:
                self.advance()
                children.append(Text(value=TEXT_SYMBOLS[token.type]))
            else:
                self.advance()  # Skip newlines and unknown tokens

        return children

    def parse_each_loop(self) -> EachLoop:
        """Parse '<each item[::Type] in source> template </each>'."""
        self.expect(TokenType.LT)
        self.expect(TokenType.IDENTIFIER)  # each

        item = self.expect(TokenType.IDENTIFIER, 'Expected item variable').value
        item_type = self.parse_type_annotation()

        in_keyword = self.expect(TokenType.IDENTIFIER, 'Expected "in" in each loop')
        if in_keyword.value != 'in':
            raise self.error('Expected "in" in each loop', in_keyword)
        source = self.expect(TokenType.IDENTIFIER, 'Expected list variable').value
        self.expect(TokenType.GT)

        self.skip_newlines()
        if not self.match(TokenType.LT) or self.peek(1).type != TokenType.IDENTIFIER:
            raise self.error('Expected a template element inside <each>')
        template = self.parse_element()
        self.skip_newlines()

        self.expect(TokenType.LT)
        self.expect(TokenType.SLASH)
        closing = self.expect(TokenType.IDENTIFIER, 'Expected closing tag name')
        if closing.value != EACH_TAG:
            raise MismatchedTagError(EACH_TAG, closing.value, closing.line, closing.column)
        self.expect(TokenType.GT)

        return EachLoop(item=item, source=source, template=template, item_type=item_type)


def parse(tokens: List[Token]) -> Component:
    """Parse ``tokens`` with a fresh Parser."""
    return Parser(tokens).parse()
