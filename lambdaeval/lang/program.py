"""Program driver: runs top-level statements in order against an environment that grows with every definition.

Definitions only see what was defined before them, so a definition can neither refer to itself nor to a later one.
Before a plain expression is evaluated, its normal form is computed and reported to the tracer; a term too deep
to normalise only produces a warning. Evaluation always runs on the expression as written, not on its normal form.
"""

from lambdaeval.lang.trace import NULL_TRACER
from lambdaeval.pure.environment import Environment
from lambdaeval.pure.evaluator import evaluate
from lambdaeval.pure.expression import Define, StaticDefine
from lambdaeval.pure import normal
from lambdaeval.pure.value import render


class Program:
    """Governs a run of top-level statements, with control over the accumulated environment."""

    def __init__(self, env=None, tracer=NULL_TRACER, normalise=True, step_limit=None):
        self.env = env if env is not None else Environment()
        self.tracer = tracer
        self.normalise = normalise      # whether or not to compute normal forms before evaluating
        self.step_limit = step_limit    # normaliser step limit (None for the default)

    def execute(self, expression):
        """Runs a single statement. Returns the rendered value of a plain expression, None for a definition."""
        if isinstance(expression, Define):
            value = evaluate(self.env, expression.definition, self.tracer)
            self.tracer.step("define", expression.variable)
            self.env = self.env.extend(expression.variable, value)
            return None

        elif isinstance(expression, StaticDefine):
            self.tracer.step("define", expression.variable)
            self.env = self.env.extend(expression.variable, expression.definition)
            return None

        if self.normalise:
            try:
                reducer = normal.normalise(expression, self.step_limit, self.tracer)
            except RecursionError:
                self.tracer.warn("'{}' is too deep to normalise", expression)
            else:
                self.tracer.step("normal", reducer.term)

        return render(evaluate(self.env, expression, self.tracer))

    def run(self, expressions):
        """Yields the rendering of every plain expression in expressions, in order. An evaluation error stops the run,
        but everything yielded before it stands.
        """
        for expression in expressions:
            result = self.execute(expression)
            if result is not None:
                yield result


def run_program(env, expressions, tracer=NULL_TRACER, normalise=True, step_limit=None):
    """Runs expressions from env and returns the list of rendered results of the plain expressions."""
    return list(Program(env, tracer, normalise, step_limit).run(expressions))
