"""Trace sinks for evaluation and reduction steps. The evaluator takes a Tracer and never prints on its own."""

import sys

from termcolor import colored


class Tracer:
    """Sink that ignores every step and warning."""

    def step(self, kind, subject):
        """Called once per evaluation/reduction step. kind is a short tag, subject is what the step acted on."""

    def warn(self, msg, subject):
        """Called with a GenericException-style message template and the offending subject."""


NULL_TRACER = Tracer()


class ConsoleTracer(Tracer):
    """Prints every step to stream (unless steps is False), tagged by kind. Warnings are routed to error_handler when
    one is given.
    """
    COLORS = {"eval": "blue", "apply": "cyan", "β": "green", "normal": "yellow", "define": "magenta"}

    def __init__(self, error_handler=None, stream=None, steps=True):
        self.error_handler = error_handler
        self.steps = steps
        self.stream = stream if stream is not None else sys.stdout

    def step(self, kind, subject):
        if not self.steps:
            return
        tag = colored(f"{kind:>6}", ConsoleTracer.COLORS.get(kind, "white"), attrs=["bold"])
        print(f"{tag} {subject}", file=self.stream)

    def warn(self, msg, subject):
        if self.error_handler is not None:
            self.error_handler.warn(msg, str(subject), diagnosis=False)
        else:
            print(colored("warning: ", "magenta", attrs=["bold"]) + msg.format(subject), file=self.stream)
