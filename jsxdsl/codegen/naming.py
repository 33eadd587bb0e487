"""
Naming conventions for identifiers the generators derive from declarations.

Generated code, hand-written code that imports it and the DSL's own event
handlers all rely on these names, so they must not change.
"""


def capitalize(name: str) -> str:
    """Uppercase the first character and leave the rest untouched."""
    return name[:1].upper() + name[1:]


def setter_name(name: str) -> str:
    """``count`` -> ``setCount``"""
    return f'set{capitalize(name)}'


def reducer_function_name(name: str) -> str:
    """``count`` -> ``countReducer``"""
    return f'{name}Reducer'


def dispatch_name(name: str) -> str:
    """``count`` -> ``dispatchCount``"""
    return f'dispatch{capitalize(name)}'


def pending_flag_name(name: str) -> str:
    """``submit`` -> ``isPendingSubmit``"""
    return f'isPending{capitalize(name)}'


def transition_starter_name(name: str) -> str:
    """``submit`` -> ``startSubmitTransition``"""
    return f'start{capitalize(name)}Transition'


def optimistic_updater_name(name: str) -> str:
    """``likes`` -> ``addLikes``"""
    return f'add{capitalize(name)}'


def action_name(name: str) -> str:
    """``save`` -> ``saveAction``"""
    return f'{name}Action'


def context_object_name(name: str) -> str:
    """``theme`` -> ``ThemeContext``"""
    return f'{capitalize(name)}Context'


def props_interface_name(component_name: str) -> str:
    return f'{component_name}Props'


def handle_interface_name(component_name: str) -> str:
    return f'{component_name}Handle'
