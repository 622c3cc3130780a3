"""Substitution-based normal-order reduction, kept apart from the environment-based evaluator.

Substitution is capture-avoiding: before (λy.M)[x := N] descends into M, y is renamed with freshen if it occurs free
in N. The fresh name is chosen outside of every name that could collide with it, so the renamed binder can never
capture a free variable of N.

Source: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from lambdaeval.lang.error import UnknownExpression
from lambdaeval.lang.trace import NULL_TRACER
from lambdaeval.pure.expression import App, Lambda, Var

PRIME = "'"


def freshen(used, candidate):
    """Returns candidate if it isn't in used, otherwise candidate with as many primes appended as needed to make it
    absent from used.
    """
    fresh = candidate
    while fresh in used:
        fresh += PRIME
    return fresh


def free_variables(expression):
    """Set of names occurring free in expression."""
    if isinstance(expression, Var):
        return {expression.name}
    elif isinstance(expression, Lambda):
        return free_variables(expression.body) - {expression.parameter}
    elif isinstance(expression, App):
        return free_variables(expression.function) | free_variables(expression.argument)
    raise UnknownExpression(expression)


def variables(expression):
    """Set of every name in expression, free or bound."""
    if isinstance(expression, Var):
        return {expression.name}
    elif isinstance(expression, Lambda):
        return variables(expression.body) | {expression.parameter}
    elif isinstance(expression, App):
        return variables(expression.function) | variables(expression.argument)
    raise UnknownExpression(expression)


def substitute(expression, name, replacement):
    """Returns expression with every free occurrence of name replaced by replacement."""
    if isinstance(expression, Var):
        return replacement if expression.name == name else expression

    elif isinstance(expression, App):
        return App(substitute(expression.function, name, replacement),
                   substitute(expression.argument, name, replacement))

    elif isinstance(expression, Lambda):
        parameter, body = expression.parameter, expression.body
        if parameter == name or name not in free_variables(body):
            return expression  # name is shadowed or absent: nothing to replace

        if parameter in free_variables(replacement):
            used = free_variables(replacement) | variables(body) | {name}
            fresh = freshen(used, parameter)
            body = substitute(body, parameter, Var(fresh))
            parameter = fresh

        return Lambda(parameter, substitute(body, name, replacement))

    raise UnknownExpression(expression)


def alpha_equals(left, right, bound=()):
    """Whether or not left and right are equal up to renaming of bound variables. bound holds (left name, right name)
    pairs of the enclosing binders, innermost first.
    """
    if isinstance(left, Var) and isinstance(right, Var):
        for left_name, right_name in bound:
            if left.name == left_name or right.name == right_name:
                return left.name == left_name and right.name == right_name
        return left.name == right.name

    elif isinstance(left, Lambda) and isinstance(right, Lambda):
        return alpha_equals(left.body, right.body, ((left.parameter, right.parameter),) + tuple(bound))

    elif isinstance(left, App) and isinstance(right, App):
        return (alpha_equals(left.function, right.function, bound)
                and alpha_equals(left.argument, right.argument, bound))

    return False


def reduce_once(expression):
    """Contracts the leftmost outermost redex of expression. Returns None if expression is in normal form."""
    if isinstance(expression, App):
        function, argument = expression.function, expression.argument
        if isinstance(function, Lambda):
            return substitute(function.body, function.parameter, argument)

        reduced = reduce_once(function)
        if reduced is not None:
            return App(reduced, argument)

        reduced = reduce_once(argument)
        if reduced is not None:
            return App(function, reduced)

    elif isinstance(expression, Lambda):
        reduced = reduce_once(expression.body)
        if reduced is not None:
            return Lambda(expression.parameter, reduced)

    return None


class NormalOrderReducer:
    """Normal-order beta reduction of a single expression, stopping after step_limit contractions."""
    STEP_LIMIT = 1000

    def __init__(self, expression, step_limit=None):
        self.original = expression
        self.term = expression
        self.step_limit = NormalOrderReducer.STEP_LIMIT if step_limit is None else step_limit

        self.steps = 0
        self.reduced = False  # True once self.term is known to be in normal form

    def reduce(self, tracer=NULL_TRACER):
        """Reduces self.term towards its normal form and returns it. If the step limit is reached first, warns through
        tracer and returns the partially reduced term.
        """
        while not self.reduced:
            reduced = reduce_once(self.term)
            if reduced is None:
                self.reduced = True
            elif self.steps >= self.step_limit:
                tracer.warn(f"'{{}}' has no normal form within {self.step_limit} steps", self.original)
                break
            else:
                self.term = reduced
                self.steps += 1
                tracer.step("β", self.term)
        return self.term


def normalise(expression, step_limit=None, tracer=NULL_TRACER):
    """Returns a NormalOrderReducer that has already reduced expression."""
    reducer = NormalOrderReducer(expression, step_limit)
    reducer.reduce(tracer)
    return reducer
