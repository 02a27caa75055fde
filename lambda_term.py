"""Term model for the untyped lambda calculus.

A term is one of three immutable node types sharing the :class:`Term` base:
``Variable`` ('VAR'), ``Abstraction`` ('LAM') and ``Application`` ('APP').
Variable identity is a :class:`Var` of ``(name, tag)``; the tag is only set
on bound occurrences once a term has been canonicalized.
"""
from collections import namedtuple

from lambda_checks import LambdaTypeError, LambdaValueError, arg_type


class Var(namedtuple("Var", ["name", "tag"], defaults=[None])):
    __slots__ = ()

    def with_tag(self, tag):
        return Var(self.name, tag)

    def same_binding(self, other) -> bool:
        # Untagged variables never denote a binding.
        return (self.tag is not None and other.tag is not None
                and self.tag == other.tag)

    def code(self) -> str:
        if self.tag is None:
            return self.name
        return f"{self.name}{self.tag}"


def _as_var(value):
    if isinstance(value, Var):
        var = value
    elif isinstance(value, str):
        var = Var(value)
    else:
        raise LambdaTypeError(
            f"Variable should be {str} or {Var}, found {type(value)}")
    if not var.name:
        raise LambdaValueError("Variable name cannot be empty")
    if var.tag is not None:
        if not isinstance(var.tag, int) or isinstance(var.tag, bool):
            raise LambdaTypeError(
                f"Tag should be {int}, found {type(var.tag)}")
        if var.tag < 0:
            raise LambdaValueError(f"Tag must be non-negative, got {var.tag}")
    return var


def _as_term(value):
    if not isinstance(value, Term):
        raise LambdaTypeError(f"Expected {Term}, found {type(value)}")
    return value


class Term:
    __slots__ = ("term_type", "value", "left", "right")

    def __init__(self, term_type, value=None, left=None, right=None):
        if term_type not in ('VAR', 'LAM', 'APP'):
            raise LambdaValueError(f"Unknown term type: {term_type}")
        if term_type != 'APP':
            value = _as_var(value)
        if term_type == 'LAM':
            right = _as_term(right)
        elif term_type == 'APP':
            left, right = _as_term(left), _as_term(right)
        object.__setattr__(self, "term_type", term_type)  # 'VAR', 'LAM', 'APP'
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "left", left)
        object.__setattr__(self, "right", right)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __eq__(self, other):
        if not isinstance(other, Term):
            return NotImplemented
        return (self.term_type == other.term_type
                and self.value == other.value
                and self.left == other.left
                and self.right == other.right)

    def __hash__(self):
        return hash((self.term_type, self.value, self.left, self.right))

    def __repr__(self):
        return _serialize(self)


class Variable(Term):
    __slots__ = ()

    def __init__(self, name, tag=None):
        var = _as_var(name)
        if tag is not None:
            var = _as_var(var.with_tag(tag))
        super().__init__('VAR', var)

    @property
    def name(self):
        return self.value.name

    @property
    def tag(self):
        return self.value.tag


class Abstraction(Term):
    __slots__ = ()

    def __init__(self, binder, body):
        super().__init__('LAM', binder, right=body)

    @property
    def binder(self):
        return self.value

    @property
    def body(self):
        return self.right


class Application(Term):
    __slots__ = ()

    def __init__(self, fn, arg):
        super().__init__('APP', left=fn, right=arg)

    @property
    def fn(self):
        return self.left

    @property
    def arg(self):
        return self.right


def _serialize(term):
    if term.term_type == 'VAR':
        return term.value.code()
    elif term.term_type == 'LAM':
        return f"(\\{term.value.code()}. {_serialize(term.right)})"
    return f"({_serialize(term.left)} {_serialize(term.right)})"


@arg_type(0, Term)
def serialize(term) -> str:
    """Render ``term`` with every non-leaf node in its own parentheses.

    ``x``, ``x1`` (tagged), ``(\\x. body)`` and ``(fn arg)``.
    """
    return _serialize(term)


@arg_type(0, Term)
def free_variables(term):
    if term.term_type == 'VAR':
        return set() if term.value.tag is not None else {term.value.name}
    elif term.term_type == 'LAM':
        return free_variables(term.right)
    return free_variables(term.left) | free_variables(term.right)


def occurs(term, var) -> bool:
    """Whether an occurrence bound to the same binder as ``var`` appears."""
    if term.term_type == 'VAR':
        return var.same_binding(term.value)
    elif term.term_type == 'LAM':
        return occurs(term.right, var)
    return occurs(term.left, var) or occurs(term.right, var)


def max_tag(term) -> int:
    if term.term_type == 'VAR':
        return term.value.tag or 0
    elif term.term_type == 'LAM':
        return max(term.value.tag or 0, max_tag(term.right))
    return max(max_tag(term.left), max_tag(term.right))


def size(term) -> int:
    if term.term_type == 'VAR':
        return 1
    elif term.term_type == 'LAM':
        return 1 + size(term.right)
    return 1 + size(term.left) + size(term.right)
