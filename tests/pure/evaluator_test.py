import unittest

from lambdaeval.lang.error import NotApplicable, UnboundVariable, UnknownExpression
from lambdaeval.lang.trace import Tracer
from lambdaeval.pure.environment import Closure, Environment
from lambdaeval.pure.evaluator import apply, evaluate
from lambdaeval.pure.expression import App, Define, Lambda, StaticDefine, Var
from lambdaeval.pure.value import SymbolicValue, render

I = Lambda("x", Var("x"))
K = Lambda("x", Lambda("y", Var("x")))


class Unrenderable:

    def __str__(self):
        raise ValueError("no rendering")


class RecordingTracer(Tracer):

    def __init__(self):
        self.steps = []

    def step(self, kind, subject):
        self.steps.append((kind, subject))


class EvaluateTestCase(unittest.TestCase):

    def test_var(self):
        env = Environment().extend("one", 1)
        self.assertEqual(1, evaluate(env, Var("one")))
        self.assertRaises(UnboundVariable, evaluate, env, Var("two"))

    def test_lambda(self):
        env = Environment().extend("one", 1)
        closure = evaluate(env, Lambda("x", Var("undefined")))  # body isn't evaluated

        self.assertIsInstance(closure, Closure)
        self.assertIs(env, closure.env)
        self.assertEqual("x", closure.parameter)
        self.assertEqual(Var("undefined"), closure.body)

    def test_identity_composition(self):
        env = Environment.from_bindings({"one": 1, "s": SymbolicValue("s")})
        cases = [Var("one"), Var("s"), I, App(K, Var("one"))]
        for case in cases:
            composed = App(I, App(Lambda("y", Var("y")), case))
            expected = evaluate(env, case)
            result = evaluate(env, composed)
            if isinstance(expected, Closure):
                self.assertEqual(str(expected), str(result), case)
            else:
                self.assertEqual(expected, result, case)

    def test_application(self):
        env = Environment.from_bindings({"one": 1, "two": 2})
        cases = {
            App(App(K, Var("one")), Var("two")): 1,
            App(App(Lambda("x", Lambda("y", Var("y"))), Var("one")), Var("two")): 2,
            App(App(App(Lambda("f", Lambda("x", App(Var("f"), Var("x")))), K), Var("one")), Var("two")): 1,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, evaluate(env, case), str(case))

    def test_closures_capture_lexically(self):
        env0 = Environment()
        env = env0.extend("x", 1)
        closure = evaluate(env, Lambda("y", Var("x")))

        env0.extend("x", 2)                 # other chains don't matter
        env.extend("x", 3)
        self.assertEqual(1, apply(closure, "anything"))
        self.assertEqual(1, apply(closure, closure))

    def test_inner_binding_shadows(self):
        env = Environment().extend("x", 1)
        term = App(Lambda("x", Var("x")), Var("y"))
        self.assertEqual(2, evaluate(env.extend("y", 2), term))
        self.assertEqual(1, evaluate(env, Var("x")))

    def test_unbound_in_body(self):
        term = App(Lambda("x", Var("z")), Lambda("y", Var("y")))
        with self.assertRaises(UnboundVariable) as context:
            evaluate(Environment(), term)
        self.assertEqual("z", context.exception.name)

    def test_unknown_expression(self):
        should_raise = [Define("a", I), StaticDefine("a", I), "x", None, 42]
        for case in should_raise:
            self.assertRaises(UnknownExpression, evaluate, Environment(), case)

        self.assertRaises(UnknownExpression, evaluate, Environment(), App(I, Define("a", I)))

    def test_tracer(self):
        tracer = RecordingTracer()
        evaluate(Environment(), App(I, I), tracer)

        kinds = [kind for kind, __ in tracer.steps]
        self.assertEqual(["eval", "eval", "eval", "apply", "eval"], kinds)


class ApplyTestCase(unittest.TestCase):

    def test_symbolic(self):
        cases = {
            (SymbolicValue("f"), SymbolicValue("a")): "(f a)",
            (SymbolicValue("f"), 1): "(f 1)",
            (SymbolicValue("(f a)"), SymbolicValue("b")): "((f a) b)",
            (SymbolicValue("f"), Closure(Environment(), "x", Var("x"))): "(f λx.x)",
        }
        for (callee, argument), expected in cases.items():
            self.assertEqual(SymbolicValue(expected), apply(callee, argument))

    def test_symbolic_through_evaluate(self):
        env = Environment.from_bindings({"f": SymbolicValue("f"), "a": SymbolicValue("a")})
        term = App(App(Var("f"), Var("a")), App(I, Var("a")))
        self.assertEqual(SymbolicValue("((f a) a)"), evaluate(env, term))

    def test_symbolic_unrenderable_argument(self):
        value = Unrenderable()
        self.assertEqual(SymbolicValue(f"(f {object.__repr__(value)})"), apply(SymbolicValue("f"), value))
        self.assertEqual(object.__repr__(value), render(value))
        self.assertEqual("1", render(1))

    def test_static_syntax(self):
        self.assertEqual(SymbolicValue("((g b) a)"), apply(App(Var("g"), Var("b")), SymbolicValue("a")))

    def test_not_applicable(self):
        should_raise = [1, "f", None, 2.5]
        for case in should_raise:
            with self.assertRaises(NotApplicable, msg=repr(case)) as context:
                apply(case, SymbolicValue("a"))
            self.assertEqual(case, context.exception.callee)
            self.assertEqual(SymbolicValue("a"), context.exception.argument)

        env = Environment().extend("one", 1)
        self.assertRaises(NotApplicable, evaluate, env, App(Var("one"), Var("one")))


if __name__ == '__main__':
    unittest.main()
