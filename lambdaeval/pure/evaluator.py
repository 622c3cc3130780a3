"""Environment-based evaluation of lambda calculus expressions.

Beta reduction happens by extending a closure's captured environment with its argument, never by rewriting the body,
so the evaluator itself cannot capture variables. Arguments are evaluated before they are applied (call by value).
Definitions are not expressions as far as evaluate is concerned: binding them is the program driver's job.
"""

from lambdaeval.lang.error import NotApplicable, UnknownExpression
from lambdaeval.lang.trace import NULL_TRACER
from lambdaeval.pure.environment import Closure
from lambdaeval.pure.expression import App, Expression, Lambda, Var
from lambdaeval.pure.value import SymbolicValue, render


def evaluate(env, expression, tracer=NULL_TRACER):
    """Returns the value of expression under env."""
    tracer.step("eval", expression)

    if isinstance(expression, Var):
        return env.lookup(expression.name)
    elif isinstance(expression, Lambda):
        return Closure(env, expression.parameter, expression.body)
    elif isinstance(expression, App):
        function = evaluate(env, expression.function, tracer)
        argument = evaluate(env, expression.argument, tracer)
        return apply(function, argument, tracer)
    raise UnknownExpression(expression)


def apply(callee, argument, tracer=NULL_TRACER):
    """Applies callee to argument. Closures are entered, symbolic callees (including syntax bound by a static
    definition) produce a bigger symbolic term, and anything else raises NotApplicable.
    """
    if isinstance(callee, Closure):
        tracer.step("apply", callee)
        return evaluate(callee.env.extend(callee.parameter, argument), callee.body, tracer)
    elif isinstance(callee, (SymbolicValue, Expression)):
        stuck = SymbolicValue(f"({render(callee)} {render(argument)})")
        tracer.step("apply", stuck)
        return stuck
    raise NotApplicable(callee, argument)
