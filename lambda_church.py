from lambda_canon import canonicalize
from lambda_checks import LambdaValueError, arg_type, arg_value, is_non_negative
from lambda_term import Abstraction, Application, Term, Variable


def _apply(fn, *args):
    term = fn
    for arg in args:
        term = Application(term, arg)
    return term


def _lams(names, body):
    for name in reversed(names):
        body = Abstraction(name, body)
    return body


def church_true():
    return _lams(['t', 'f'], Variable('t'))


def church_false():
    return _lams(['t', 'f'], Variable('f'))


def church_not():
    return Abstraction('p', _apply(Variable('p'), church_false(), church_true()))


def church_and():
    return _lams(['a', 'b'],
                 _apply(Variable('a'), Variable('b'), church_false()))


def church_or():
    return _lams(['a', 'b'],
                 _apply(Variable('a'), church_true(), Variable('b')))


def church_zero():
    return church_n(0)


def church_one():
    return church_n(1)


@arg_type(0, int)
@arg_value(0, is_non_negative, "Church numerals are natural numbers")
def church_n(n):
    body = Variable('x')
    for _ in range(n):
        body = Application(Variable('f'), body)
    return _lams(['f', 'x'], body)


def SUCC():
    return _lams(['n', 'f', 'x'],
                 Application(Variable('f'),
                             _apply(Variable('n'), Variable('f'), Variable('x'))))


def ADD():
    return _lams(['m', 'n', 'f', 'x'],
                 _apply(Variable('m'), Variable('f'),
                        _apply(Variable('n'), Variable('f'), Variable('x'))))


def MUL():
    return _lams(['m', 'n', 'f'],
                 Application(Variable('m'),
                             Application(Variable('n'), Variable('f'))))


def PRED():
    # λn.λf.λx. n (λg.λh. h (g f)) (λu. x) (λu. u)
    step = _lams(['g', 'h'],
                 Application(Variable('h'),
                             Application(Variable('g'), Variable('f'))))
    return _lams(['n', 'f', 'x'],
                 _apply(Variable('n'), step,
                        Abstraction('u', Variable('x')),
                        Abstraction('u', Variable('u'))))


def ISZERO():
    return Abstraction('n', _apply(Variable('n'),
                                   Abstraction('_', church_false()),
                                   church_true()))


def CONS():
    return _lams(['a', 'b', 's'],
                 _apply(Variable('s'), Variable('a'), Variable('b')))


def CAR():
    return Abstraction('p', Application(Variable('p'), church_true()))


def CDR():
    return Abstraction('p', Application(Variable('p'), church_false()))


def Y_combinator():
    f = Variable('f')
    g = Variable('g')
    y = Variable('y')
    return Abstraction('f', Application(
        Abstraction('g', Application(f, Application(g, g))),
        Abstraction('g', Application(
            f, Abstraction('y', _apply(g, g, y))))))


def FACT():
    """Factorial through ``Y``; only normalizes under normal order."""
    n = Variable('n')
    condition = Application(ISZERO(), n)
    else_branch = _apply(MUL(), n,
                         Application(Variable('f'), Application(PRED(), n)))
    fact_body = _lams(['f', 'n'],
                      _apply(condition, church_one(), else_branch))
    return Application(Y_combinator(), fact_body)


@arg_type(0, Term)
def church_to_int(term):
    term = canonicalize(term)
    if term.term_type != 'LAM':
        raise LambdaValueError("Not a Church numeral")
    f_var = term.value
    inner = term.right
    if inner.term_type != 'LAM':
        raise LambdaValueError("Not a Church numeral")
    x_var = inner.value

    count = 0
    t = inner.right
    while t.term_type == 'APP':
        if t.left.term_type != 'VAR' or t.left.value != f_var:
            raise LambdaValueError("Malformed Church numeral")
        count += 1
        t = t.right
    if t.term_type != 'VAR' or t.value != x_var:
        raise LambdaValueError("Malformed Church numeral")
    return count


@arg_type(0, Term)
def church_bool_to_int(term):
    term = canonicalize(term)
    if term.term_type != 'LAM':
        raise LambdaValueError("Not a Church boolean")
    inner = term.right
    if inner.term_type != 'LAM' or inner.right.term_type != 'VAR':
        raise LambdaValueError("Not a Church boolean")
    if inner.right.value == term.value:
        return 1
    if inner.right.value == inner.value:
        return 0
    raise LambdaValueError("Not a Church boolean")
