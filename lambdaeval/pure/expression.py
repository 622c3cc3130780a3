"""Untyped lambda calculus syntax tree.

```
<expression> ::= <name>                       ; "variable"
               | "λ" <name> "." <expression>  ; "abstraction" (single parameter)
               | <expression> <expression>    ; "application", associating by left
<statement>  ::= <name> ":=" <expression>     ; "definition", evaluated before it is bound
               | <name> "::=" <expression>    ; "static definition", bound as unevaluated syntax
               | <expression>
```

Nodes are frozen and never hold back-references, so subtrees can be shared freely between terms.
"""

from dataclasses import dataclass


class Expression:
    """Superclass of every syntax tree node."""

    def __str__(self):
        return repr(self)


@dataclass(frozen=True)
class Var(Expression):
    """Reference to a bound or free identifier."""
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Lambda(Expression):
    """Single-argument abstraction. parameter shadows same-named bindings inside body."""
    parameter: str
    body: Expression

    def __str__(self):
        return f"λ{self.parameter}.{self.body}"


@dataclass(frozen=True)
class App(Expression):
    """Application of function to argument."""
    function: Expression
    argument: Expression

    def __str__(self):
        if isinstance(self.function, Lambda):
            return f"(({self.function}) {self.argument})"  # abstraction bodies are greedy
        return f"({self.function} {self.argument})"


@dataclass(frozen=True)
class Define(Expression):
    """Top-level binding whose definition is evaluated before it is stored."""
    variable: str
    definition: Expression

    def __str__(self):
        return f"{self.variable} := {self.definition}"


@dataclass(frozen=True)
class StaticDefine(Expression):
    """Top-level binding whose definition is stored as raw syntax."""
    variable: str
    definition: Expression

    def __str__(self):
        return f"{self.variable} ::= {self.definition}"


DEFINITIONS = (Define, StaticDefine)
