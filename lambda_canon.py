"""Canonicalization: tag every bound variable with its binder's identity.

Each abstraction gets a tag from a counter that runs in pre-order over the
whole term, so no two binders of one canonical term share a tag. The scope
is keyed by full variable identity, which makes the pass idempotent on terms
that are already canonical.
"""
import itertools
import logging

from lambda_checks import arg_type
from lambda_term import Abstraction, Application, Term, Variable

logger = logging.getLogger("LambdaCanonicalizer")


def _canonicalize(term, scope, counter):
    if term.term_type == 'VAR':
        tag = scope.get(term.value)
        if tag is None:
            return term
        return Variable(term.value.with_tag(tag))

    elif term.term_type == 'LAM':
        tag = next(counter)
        inner = dict(scope)
        inner[term.value] = tag
        body = _canonicalize(term.right, inner, counter)
        return Abstraction(term.value.with_tag(tag), body)

    elif term.term_type == 'APP':
        return Application(_canonicalize(term.left, scope, counter),
                           _canonicalize(term.right, scope, counter))

    raise ValueError(f"Unknown term type: {term.term_type}")


@arg_type(0, Term)
def canonicalize(term):
    result = _canonicalize(term, {}, itertools.count(1))
    logger.debug("canonicalize: %s => %s", term, result)
    return result
