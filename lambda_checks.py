import inspect
from functools import wraps
from typing import Union, get_args, get_origin


class LambdaTypeError(TypeError):
    pass


class LambdaValueError(ValueError):
    pass


class LambdaLimitError(RuntimeError):
    """Raised when a reducer performs more contractions than its limit."""

    def __init__(self, limit, term):
        super().__init__(
            f"Reduction limit of {limit} steps exceeded")
        self.limit = limit
        self.term = term


_NAMED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def _checked_param(pos, accepts, make_error, error_cls):
    """Build a decorator that validates the ``pos``-th parameter on each call.

    ``accepts(value)`` decides validity; ``make_error(name, value)`` renders
    the message of the ``error_cls`` raised otherwise.
    """
    def decorator(func):
        sig = inspect.signature(func)
        names = [p.name for p in sig.parameters.values() if p.kind in _NAMED_KINDS]
        if pos >= len(names):
            raise error_cls(
                f"{func.__qualname__} has no parameter at index {pos}")
        name = names[pos]

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()
            value = bound.arguments.get(name)
            if not accepts(value):
                raise error_cls(make_error(name, value))
            return func(*args, **kwargs)

        return wrapper
    return decorator


def check_type(value, hint) -> bool:
    """isinstance() that also understands ``Union[...]`` and generic aliases."""
    if get_origin(hint) is Union:
        return any(check_type(value, member) for member in get_args(hint))
    return isinstance(value, get_origin(hint) or hint)


def arg_type(pos: int, expected_type: Union[type, tuple]):
    return _checked_param(
        pos,
        lambda value: check_type(value, expected_type),
        lambda name, value: (f"Parameter '{name}' should be {expected_type}, "
                             f"found {type(value)}"),
        LambdaTypeError,
    )


def arg_value(pos: int, condition, error_msg="The parameter value is invalid."):
    return _checked_param(
        pos,
        condition,
        lambda name, value: f"{error_msg}: '{name}' is {value!r}",
        LambdaValueError,
    )


def is_non_negative(value: int) -> bool:
    return value is None or value >= 0


def is_strategy_valid(value: str) -> bool:
    return value in ("normal", "applicative")
