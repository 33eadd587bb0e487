"""
Declaration generation for DSL to React compilation.

This module emits the hook calls that make up a component body, plus the
module-level reducer functions they depend on. Every emitted line carries
the source line of the declaration it came from.
"""

from types import MappingProxyType
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .base import BaseGenerator
from .dependencies import extract_dependencies, callback_dependencies
from .expression import ExpressionGenerator, rename_identifier
from .naming import (
    setter_name,
    reducer_function_name,
    dispatch_name,
    pending_flag_name,
    transition_starter_name,
    optimistic_updater_name,
    action_name,
    context_object_name,
)
from ..parser.ast_nodes import (
    Component,
    ArrowFunction,
    ReducerAction,
    StateDeclaration,
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
)


# Component body order: (Component attribute, generator method)
DECLARATION_GROUPS = (
    ('states', 'generate_states'),
    ('ids', 'generate_ids'),
    ('deferreds', 'generate_deferreds'),
    ('optimistics', 'generate_optimistics'),
    ('syncs', 'generate_syncs'),
    ('action_states', 'generate_action_states'),
    ('reducers', 'generate_reducers'),
    ('transitions', 'generate_transitions'),
    ('contexts', 'generate_contexts'),
    ('callbacks', 'generate_callbacks'),
    ('refs', 'generate_refs'),
    ('handles', 'generate_handles'),
    ('memos', 'generate_memos'),
    ('effects', 'generate_effects'),
    ('layout_effects', 'generate_layout_effects'),
    ('events', 'generate_events'),
)

# Effect functions with a different name in the browser
EFFECT_FUNCTION_ALIASES = MappingProxyType({
    'log': 'console.log',
})

REDUCER_STATE_PARAM = 'state'


class DeclarationGenerator(BaseGenerator):
    """
    Generates the declarations of a component body.

    Each generate_<group> method emits one line (or block) per declaration
    into the context at the current indentation.
    """

    def __init__(self, ctx: 'CodeGenerationContext', expr_generator: ExpressionGenerator):
        """
        Initialize the declaration generator.

        Args:
            ctx: The code generation context
            expr_generator: Generator used for every embedded expression
        """
        super().__init__(ctx)
        self._expr = expr_generator

    def generate(self, component: Component) -> None:
        """Emit every declaration group in order, each followed by a blank line."""
        for attribute, method_name in DECLARATION_GROUPS:
            declarations = getattr(component, attribute)
            if not declarations:
                continue
            getattr(self, method_name)(declarations)
            self._ctx.add_line('')

    def _emit(self, content: str, line: int) -> None:
        self._ctx.add_line(f'{self.indent()}{content}', line)

    # =========================================================================
    # STATE
    # =========================================================================

    def generate_states(self, states: List[StateDeclaration]) -> None:
        for state in states:
            value = self._expr.generate(state.initial_value)
            type_arg = self.type_argument(state.type)
            self._emit(
                f'const [{state.name}, {setter_name(state.name)}] = useState{type_arg}({value});',
                state.line,
            )

    def generate_ids(self, ids: List[IdDeclaration]) -> None:
        for id_decl in ids:
            self._emit(f'const {id_decl.name} = useId();', id_decl.line)

    def generate_deferreds(self, deferreds: List[DeferredDeclaration]) -> None:
        for deferred in deferreds:
            source = self._expr.generate(deferred.source_value)
            self._emit(f'const {deferred.name} = useDeferredValue({source});', deferred.line)

    def generate_optimistics(self, optimistics: List[OptimisticDeclaration]) -> None:
        for optimistic in optimistics:
            updater = optimistic_updater_name(optimistic.name)
            args = self._expr.generate_arguments([optimistic.state, optimistic.update_fn])
            self._emit(
                f'const [{optimistic.name}, {updater}] = useOptimistic({args});',
                optimistic.line,
            )

    def generate_syncs(self, syncs: List[SyncDeclaration]) -> None:
        for sync in syncs:
            values = [sync.subscribe, sync.get_snapshot]
            if sync.get_server_snapshot is not None:
                values.append(sync.get_server_snapshot)
            args = self._expr.generate_arguments(values)
            self._emit(f'const {sync.name} = useSyncExternalStore({args});', sync.line)

    def generate_action_states(self, action_states: List[ActionStateDeclaration]) -> None:
        for action_state in action_states:
            name = action_state.name
            args = self._expr.generate_arguments([action_state.action_fn, action_state.initial_state])
            self._emit(
                f'const [{name}, {action_name(name)}, {pending_flag_name(name)}] = '
                f'useActionState({args});',
                action_state.line,
            )

    def generate_reducers(self, reducers: List[ReducerDeclaration]) -> None:
        for reducer in reducers:
            value = self._expr.generate(reducer.initial_value)
            self._emit(
                f'const [{reducer.name}, {dispatch_name(reducer.name)}] = '
                f'useReducer({reducer_function_name(reducer.name)}, {value});',
                reducer.line,
            )

    def generate_transitions(self, transitions: List[TransitionDeclaration]) -> None:
        for transition in transitions:
            pending = pending_flag_name(transition.name)
            starter = transition_starter_name(transition.name)
            self._emit(f'const [{pending}, {starter}] = useTransition();', transition.line)

    # =========================================================================
    # CONTEXT, CALLBACKS AND REFS
    # =========================================================================

    def generate_contexts(self, contexts: List[ContextDeclaration]) -> None:
        for context in contexts:
            type_arg = self.type_argument(context.type)
            self._emit(
                f'const {context.name} = useContext{type_arg}({context_object_name(context.name)});',
                context.line,
            )

    def generate_callbacks(self, callbacks: List[CallbackDeclaration]) -> None:
        for callback in callbacks:
            fn = self._expr.generate(callback.value)
            deps = callback_dependencies(callback.value)
            self._emit(
                f'const {callback.name} = useCallback({fn}, [{", ".join(deps)}]);',
                callback.line,
            )

    def generate_refs(self, refs: List[RefDeclaration]) -> None:
        for ref in refs:
            if ref.initial_value is not None:
                value = self._expr.generate(ref.initial_value)
            else:
                value = 'null'
            type_arg = self.type_argument(ref.type)
            self._emit(f'const {ref.name} = useRef{type_arg}({value});', ref.line)

    def generate_handles(self, handles: List[HandleDeclaration]) -> None:
        """All handle methods share one useImperativeHandle call."""
        self._emit('useImperativeHandle(ref, () => ({', handles[0].line)
        self.indent_level += 1
        for handle in handles:
            self._emit(f'{handle.name}: {self._expr.generate(handle.value)},', handle.line)
        self.indent_level -= 1
        self._emit('}));', handles[-1].line)

    # =========================================================================
    # DERIVED VALUES AND EFFECTS
    # =========================================================================

    def generate_memos(self, memos: List[MemoDeclaration]) -> None:
        for memo in memos:
            value = self._expr.generate(memo.value)
            deps = extract_dependencies(memo.value)
            type_arg = self.type_argument(memo.type)
            self._emit(
                f'const {memo.name} = useMemo{type_arg}(() => {value}, [{", ".join(deps)}]);',
                memo.line,
            )

    def generate_effects(self, effects: List[EffectDeclaration]) -> None:
        for effect in effects:
            self._generate_effect('useEffect', effect)

    def generate_layout_effects(self, effects: List[EffectDeclaration]) -> None:
        for effect in effects:
            self._generate_effect('useLayoutEffect', effect)

    def _generate_effect(self, hook: str, effect: EffectDeclaration) -> None:
        function_name = EFFECT_FUNCTION_ALIASES.get(effect.function_name, effect.function_name)
        args = self._expr.generate_arguments(effect.args)
        deps = extract_dependencies(*effect.args)
        self._emit(f'{hook}(() => {{', effect.line)
        self.indent_level += 1
        self._emit(f'{function_name}({args});', effect.line)
        self.indent_level -= 1
        self._emit(f'}}, [{", ".join(deps)}]);', effect.line)

    def generate_events(self, events: List[EventDeclaration]) -> None:
        for event in events:
            handler = self._expr.generate_event_handler(event.handler, event.line)
            self._emit(f'const {event.name} = {handler};', event.line)

    # =========================================================================
    # MODULE-LEVEL REDUCER FUNCTIONS
    # =========================================================================

    def generate_reducer_function(self, reducer: ReducerDeclaration) -> None:
        """Emit ``function nameReducer(state, action)`` switching on ``action.type``."""
        if self._ctx.typed:
            params = f'{REDUCER_STATE_PARAM}: any, action: {{ type: string }}'
        else:
            params = f'{REDUCER_STATE_PARAM}, action'
        self._emit(f'function {reducer_function_name(reducer.name)}({params}) {{', reducer.line)
        self.indent_level += 1
        self._emit('switch (action.type) {', reducer.line)
        self.indent_level += 1
        for action in reducer.actions:
            body = self._reducer_action_body(reducer, action)
            self._emit(f"case '{action.name}': return {body};", reducer.line)
        self._emit(f'default: return {REDUCER_STATE_PARAM};', reducer.line)
        self.indent_level -= 1
        self._emit('}', reducer.line)
        self.indent_level -= 1
        self._emit('}', reducer.line)

    def _reducer_action_body(self, reducer: ReducerDeclaration, action: ReducerAction) -> str:
        """The handler's body with the value it reads renamed to the reducer state.

        An arrow handler reads its first parameter; any other expression reads
        the reducer's own name, which is not in scope at module level.
        """
        handler = action.handler
        if not isinstance(handler, ArrowFunction):
            return self._expr.generate(rename_identifier(handler, reducer.name, REDUCER_STATE_PARAM))
        body = handler.body
        if handler.params:
            body = rename_identifier(body, handler.params[0], REDUCER_STATE_PARAM)
        return self._expr.generate(body)
