"""Persistent variable bindings and closures.

An Environment is a singly-linked chain of one-binding frames. extend never touches the receiver, so a Closure that
captured an environment keeps seeing exactly the bindings that existed when it was created.
"""

from dataclasses import dataclass

from lambdaeval.lang.error import UnboundVariable
from lambdaeval.pure.expression import Expression, Lambda


EMPTY = object()  # name of the frame that ends every chain


class Environment:
    """Chain of name -> value frames, most recent first. Environment() is the empty environment."""

    def __init__(self, name=EMPTY, value=None, parent=None):
        """A frame given without a parent sits on top of a fresh empty environment."""
        if name is not EMPTY and parent is None:
            parent = Environment()
        self.name = name
        self.value = value
        self.parent = parent

    @classmethod
    def from_bindings(cls, bindings):
        """Returns an environment binding each (name, value) of bindings, later items shadowing earlier ones."""
        env = cls()
        for name, value in dict(bindings).items():
            env = env.extend(name, value)
        return env

    @property
    def is_empty(self):
        return self.name is EMPTY

    def extend(self, name, value):
        """Returns a new environment whose first frame binds name to value and whose parent is self."""
        return Environment(name, value, self)

    def lookup(self, name):
        """Returns the value of the most recent frame binding name. Raises UnboundVariable if there is none."""
        env = self
        while not env.is_empty:
            if env.name == name:
                return env.value
            env = env.parent
        raise UnboundVariable(name)

    def names(self):
        """Yields every visible name once, most recently bound first."""
        seen = set()
        env = self
        while not env.is_empty:
            if env.name not in seen:
                seen.add(env.name)
                yield env.name
            env = env.parent

    def __contains__(self, name):
        env = self
        while not env.is_empty:
            if env.name == name:
                return True
            env = env.parent
        return False

    def __repr__(self):
        return f"Environment({', '.join(self.names())})"


@dataclass(frozen=True)
class Closure:
    """A lambda's parameter and body together with the environment in effect where the lambda was evaluated."""
    env: Environment
    parameter: str
    body: Expression

    @property
    def term(self):
        """The abstraction this closure was made from."""
        return Lambda(self.parameter, self.body)

    def __str__(self):
        return str(self.term)
