import copy

import pytest
from lambda_checks import LambdaTypeError, LambdaValueError
from lambda_term import (
    Abstraction, Application, Term, Var, Variable,
    free_variables, max_tag, occurs, serialize, size,
)


def test_variable_from_name_is_untagged():
    v = Variable("x")
    assert v.term_type == 'VAR'
    assert v.name == "x" and v.tag is None
    assert v.value == Var("x")


def test_serialize_grammar():
    x = Variable("x")
    assert serialize(x) == "x"
    assert serialize(Variable("x", 3)) == "x3"
    assert serialize(Abstraction("x", x)) == "(\\x. x)"
    assert serialize(Application(Variable("f"), x)) == "(f x)"
    assert serialize(
        Application(Abstraction("x", Variable("x")), Variable("y"))
    ) == "((\\x. x) y)"


def test_serialize_is_fully_parenthesized():
    # λx.λy. x y z
    term = Abstraction("x", Abstraction("y", Application(
        Application(Variable("x"), Variable("y")), Variable("z"))))
    assert serialize(term) == "(\\x. (\\y. ((x y) z)))"
    assert repr(term) == serialize(term)
    assert str(term) == serialize(term)


def test_serialize_tagged_binder():
    term = Abstraction(Var("x", 1), Variable("x", 1))
    assert serialize(term) == "(\\x1. x1)"


def test_structural_equality():
    a = Application(Abstraction("x", Variable("x")), Variable("y"))
    b = Application(Abstraction("x", Variable("x")), Variable("y"))
    assert a == b
    assert hash(a) == hash(b)
    assert a != Application(Abstraction("z", Variable("z")), Variable("y"))
    assert Variable("x") != Variable("x", 1)
    assert Variable("x", 1) == Variable("x", 1)
    assert Variable("x") != "x"


def test_terms_are_immutable():
    term = Application(Variable("f"), Variable("x"))
    with pytest.raises(AttributeError):
        term.left = Variable("g")
    with pytest.raises(AttributeError):
        del term.right
    assert copy.deepcopy(term) is term


def test_constructor_validation():
    with pytest.raises(LambdaTypeError):
        Variable(3)
    with pytest.raises(LambdaValueError):
        Variable("")
    with pytest.raises(LambdaValueError):
        Variable("x", -1)
    with pytest.raises(LambdaTypeError):
        Abstraction("x", "x")
    with pytest.raises(LambdaTypeError):
        Application(Variable("f"), None)
    with pytest.raises(LambdaTypeError):
        serialize("x")


def test_same_binding_needs_both_tags():
    assert Var("x", 1).same_binding(Var("y", 1))
    assert not Var("x").same_binding(Var("x"))
    assert not Var("x", 1).same_binding(Var("x"))
    assert not Var("x", 1).same_binding(Var("x", 2))


def test_structural_queries():
    term = Abstraction(Var("x", 1), Application(
        Application(Variable("x", 1), Variable("y")), Variable("z")))
    assert free_variables(term) == {"y", "z"}
    assert occurs(term, Var("x", 1))
    assert not occurs(term, Var("x"))
    assert max_tag(term) == 1
    assert max_tag(Variable("a")) == 0
    assert size(term) == 6
    assert isinstance(term, Term)


def test_base_term_constructor_builds_valid_nodes():
    assert serialize(Term('VAR', 'x')) == "x"
    assert Term('VAR', 'x') == Variable("x")
    lam = Term('LAM', 'x', right=Variable("x"))
    assert serialize(lam) == "(\\x. x)"
    assert lam == Abstraction("x", Variable("x"))
    assert serialize(Term('APP', left=Variable("f"), right=Variable("x"))) == "(f x)"

    with pytest.raises(LambdaValueError):
        Term('FOO', 'x')
    with pytest.raises(LambdaTypeError):
        Term('VAR', 3)
    with pytest.raises(LambdaTypeError):
        Term('LAM', 'x')
    with pytest.raises(LambdaTypeError):
        Term('APP', left=Variable("f"))
