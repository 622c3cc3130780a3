"""Runtime values. Evaluation only ever produces:
    - Closure (see environment.py)
    - SymbolicValue, for applications that cannot reduce any further
    - Expression syntax, bound by a static definition
    - host literals passed in through the initial environment
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SymbolicValue:
    """Placeholder for a stuck term, kept as text."""
    text: str

    def __str__(self):
        return self.text


def render(value):
    """Returns the printable form of value, falling back to its raw representation if it can't be rendered."""
    try:
        return str(value)
    except Exception:  # host literals can fail to render in any way
        return object.__repr__(value)
