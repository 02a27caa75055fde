import logging
from collections import namedtuple

from lambda_canon import canonicalize
from lambda_checks import (
    LambdaLimitError, arg_type, arg_value,
    is_non_negative, is_strategy_valid,
)
from lambda_term import (
    Abstraction, Application, Term, Var, Variable, max_tag, occurs, size,
)

ReductionEvent = namedtuple(
    "ReductionEvent",
    ["clock", "term", "reduced_term", "rule"]
)


def _refresh(term, fresh, renames):
    """Copy ``term`` giving each binder inside it a new tag from ``fresh``."""
    if term.term_type == 'VAR':
        tag = renames.get(term.value.tag)
        if tag is None:
            return term
        return Variable(term.value.with_tag(tag))
    elif term.term_type == 'LAM':
        if term.value.tag is None:
            return Abstraction(term.value,
                               _refresh(term.right, fresh, renames))
        tag = fresh()
        inner = dict(renames)
        inner[term.value.tag] = tag
        return Abstraction(term.value.with_tag(tag),
                           _refresh(term.right, fresh, inner))
    return Application(_refresh(term.left, fresh, renames),
                       _refresh(term.right, fresh, renames))


def _substitute(term, binder, replacement, fresh):
    if term.term_type == 'VAR':
        if not binder.same_binding(term.value):
            return term
        if fresh is None:
            return replacement
        return _refresh(replacement, fresh, {})
    elif term.term_type == 'LAM':
        return Abstraction(
            term.value, _substitute(term.right, binder, replacement, fresh))
    return Application(_substitute(term.left, binder, replacement, fresh),
                       _substitute(term.right, binder, replacement, fresh))


@arg_type(0, Term)
@arg_type(1, Var)
@arg_type(2, Term)
def substitute(term, binder, replacement, fresh=None):
    """Replace every occurrence bound by ``binder`` with ``replacement``.

    Occurrences match on tag only; untagged (free) variables are never
    replaced. If ``fresh`` is given it must return an unused tag on each call,
    and every inserted copy of ``replacement`` has its binders retagged with
    it so that binder tags stay unique after duplication.
    """
    return _substitute(term, binder, replacement, fresh)


class LambdaReducer:
    """Reduces canonicalized terms to normal form.

    ``applicative`` evaluates both sides of an application before contracting
    and diverges if any argument has no normal form, even a discarded one.
    ``normal`` contracts the leftmost outermost redex first and finds the
    normal form whenever one exists.

    Contractions in tail position run in a loop, so a term without a normal
    form keeps reducing until ``limit`` is hit; with no limit it never
    returns. ``event_history`` holds the steps of the latest ``reduce`` call
    only, and grows with every step of that call.
    """

    @arg_type(1, str)
    @arg_value(1, is_strategy_valid,
               "strategy must be 'normal' or 'applicative'")
    @arg_type(2, bool)
    @arg_type(3, (int, type(None)))
    @arg_value(3, is_non_negative,
               "limit must be a non-negative number or None")
    def __init__(self, strategy="applicative", enable_eta=False, limit=None):
        self.strategy = strategy
        self.enable_eta = enable_eta
        self.limit = limit
        self.event_history = []
        self.counter = 0
        self.clock = 0
        self.logger = logging.getLogger("LambdaReducer")
        self.indent_level = 0

    def _log(self, msg, *args):
        if self.logger.isEnabledFor(logging.DEBUG):
            indent = "  " * self.indent_level
            self.logger.debug(indent + msg, *args)

    def fresh_tag(self):
        self.counter += 1
        return self.counter

    def _record(self, term, reduced_term, rule):
        if self.limit is not None and self.clock >= self.limit:
            self._log("limit of %s steps reached at %s", self.limit, term)
            raise LambdaLimitError(self.limit, term)
        self.event_history.append(
            ReductionEvent(self.clock, term, reduced_term, rule))
        self.clock += 1

    @arg_type(1, Term)
    @arg_type(2, Var)
    @arg_type(3, Term)
    def substitute(self, term, binder, replacement):
        self.counter = max(self.counter, max_tag(term), max_tag(replacement))
        return _substitute(term, binder, replacement, self.fresh_tag)

    def _contract(self, fn, arg):
        redex = Application(fn, arg)
        self._log("Attempt β-reduction: %s", redex)
        reduced = _substitute(fn.right, fn.value, arg, self.fresh_tag)
        self._record(redex, reduced, 'β')
        self._log("β success: %s → %s", fn.value.code(), arg)
        return reduced

    def _reduce_abstraction(self, term, reduce_body):
        body = reduce_body(term.right)
        if (self.enable_eta
                and body.term_type == 'APP'
                and body.right.term_type == 'VAR'
                and term.value.same_binding(body.right.value)
                and not occurs(body.left, term.value)):
            self._record(Abstraction(term.value, body), body.left, 'η')
            self._log("η success: remove redundant λ%s", term.value.code())
            return body.left
        return Abstraction(term.value, body)

    def _reduce_applicative(self, term):
        self.indent_level += 1
        try:
            while term.term_type == 'APP':
                fn = self._reduce_applicative(term.left)
                arg = self._reduce_applicative(term.right)
                if fn.term_type != 'LAM':
                    return Application(fn, arg)
                term = self._contract(fn, arg)
            if term.term_type == 'LAM':
                return self._reduce_abstraction(
                    term, self._reduce_applicative)
            return term
        finally:
            self.indent_level -= 1

    def _weak_head(self, term):
        while term.term_type == 'APP':
            fn = self._weak_head(term.left)
            if fn.term_type != 'LAM':
                return Application(fn, term.right)
            term = self._contract(fn, term.right)
        return term

    def _reduce_normal(self, term):
        self.indent_level += 1
        try:
            term = self._weak_head(term)
            if term.term_type == 'LAM':
                return self._reduce_abstraction(term, self._reduce_normal)
            elif term.term_type == 'APP':
                return Application(self._reduce_normal(term.left),
                                   self._reduce_normal(term.right))
            return term
        finally:
            self.indent_level -= 1

    @arg_type(1, Term)
    def reduce(self, term):
        """Reduce a canonicalized ``term`` to normal form."""
        self.counter = max(self.counter, max_tag(term))
        self.clock = 0
        self.event_history = []
        self._log("reduce input (%s nodes): %s", size(term), term)
        if self.strategy == 'normal':
            result = self._reduce_normal(term)
        else:
            result = self._reduce_applicative(term)
        self._log("normal form after %s steps: %s", self.clock, result)
        return result

    @arg_type(1, Term)
    def evaluate(self, term):
        """Canonicalize, reduce, and return the normal form with canonical tags."""
        return canonicalize(self.reduce(canonicalize(term)))


@arg_type(0, Term)
def reduce(term, strategy="applicative", enable_eta=False, limit=None):
    return LambdaReducer(strategy, enable_eta, limit).reduce(term)


@arg_type(0, Term)
def evaluate(term, strategy="applicative", enable_eta=False, limit=None):
    return LambdaReducer(strategy, enable_eta, limit).evaluate(term)
