"""Untyped lambda calculus evaluator.

For reference:
- "pure": the lambda calculus core (syntax tree, environments, evaluation, normal-order reduction)
- "lang": everything around it (program driver, reader, tracing, error handling)

Basic program flow:
    1. Reader: turns source text into Var/Lambda/App/Define/StaticDefine trees (lang/reader.py)
    2. Program: runs statements in order, binding definitions into a persistent environment (lang/program.py)
    3. Evaluator: reduces each plain expression to a closure, symbolic value or literal (pure/evaluator.py)
"""

from lambdaeval.lang.error import NotApplicable, UnboundVariable, UnknownExpression
from lambdaeval.lang.program import Program, run_program
from lambdaeval.pure.environment import Closure, Environment
from lambdaeval.pure.evaluator import apply, evaluate
from lambdaeval.pure.expression import App, Define, Lambda, StaticDefine, Var
from lambdaeval.pure.normal import freshen, normalise
from lambdaeval.pure.value import SymbolicValue
