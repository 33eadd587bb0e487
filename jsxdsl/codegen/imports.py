"""
Import generation for DSL to React compilation.

This module builds the import lines of a generated component from the
declaration kinds it actually uses.
"""

from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CodeGenerationContext

from .naming import context_object_name
from ..parser.ast_nodes import Component


# React named imports, in emission order, with the Component list that needs each
REACT_IMPORTS = (
    ('useState', 'states'),
    ('useReducer', 'reducers'),
    ('useTransition', 'transitions'),
    ('useDeferredValue', 'deferreds'),
    ('useOptimistic', 'optimistics'),
    ('useSyncExternalStore', 'syncs'),
    ('useActionState', 'action_states'),
    ('useId', 'ids'),
    ('useContext', 'contexts'),
    ('useCallback', 'callbacks'),
    ('useRef', 'refs'),
    ('useImperativeHandle', 'handles'),
    ('useEffect', 'effects'),
    ('useLayoutEffect', 'layout_effects'),
    ('useMemo', 'memos'),
    ('forwardRef', 'handles'),
)


class ImportGenerator:
    """
    Generates import statements.

    This class emits:
    - the React default import plus the hooks the component uses
    - one import per consumed context object, from a sibling module
    """

    def __init__(self, ctx: 'CodeGenerationContext'):
        """
        Initialize the import generator.

        Args:
            ctx: The code generation context
        """
        self._ctx = ctx

    def generate(self, component: Component) -> None:
        """Emit the import lines for ``component`` followed by a blank line."""
        for line in self.build_import_lines(component):
            self._ctx.add_line(line)
        self._ctx.add_line('')

    def build_import_lines(self, component: Component) -> List[str]:
        lines = []

        hooks = self.used_react_imports(component)
        if hooks:
            lines.append(f"import React, {{ {', '.join(hooks)} }} from 'react';")
        else:
            lines.append("import React from 'react';")

        for context in component.contexts:
            context_object = context_object_name(context.name)
            lines.append(f"import {{ {context_object} }} from './{context_object}';")

        return lines

    def used_react_imports(self, component: Component) -> List[str]:
        """Named React imports needed by ``component``, in the fixed order."""
        return [name for name, attribute in REACT_IMPORTS if getattr(component, attribute)]
