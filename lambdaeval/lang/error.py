"""Error handling for lambdaeval. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every message is reported as

```
[Traceback: File '<path>', line <n>: <source>]     ; throw only, once per registered line
<path>:<n>: error|warning: <message>
    <label>: <value>                               ; one line per detail of a LambdaError
  <source with the offending span highlighted>    ; when the error carries a diagnosis
  ^~~~
```
"""

import sys

from termcolor import colored

from lambdaeval.pure.value import render


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a lambdaeval error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """exprs fill the {} of msg in order and are bolded; exprs[0] is the offending expr that caused the error.
        start and end delimit the part of exprs[0] to highlight.
        """
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]
        exprs = [render(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        self.expr = exprs[0]
        self.start = start
        self.end = end if end != -1 else len(self.expr)

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def details(self):
        """(label, value) pairs printed below the message."""
        return []


class LambdaError(GenericException):
    """Raised by the evaluator. Never caught below the program driver."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, diagnosis=False)


class UnboundVariable(LambdaError):
    """Lookup exhausted every frame of an environment."""

    def __init__(self, name):
        super().__init__("unbound variable '{}'", name)
        self.name = name

    def details(self):
        return [("name", self.name)]


class NotApplicable(LambdaError):
    """Application of a value that is neither a closure nor symbolic."""

    def __init__(self, callee, argument):
        super().__init__("'{}' is not a function", render(callee))
        self.callee = callee
        self.argument = argument

    def details(self):
        return [("callee", f"{render(self.callee)} ({type(self.callee).__name__})"),
                ("argument", render(self.argument))]


class UnknownExpression(LambdaError):
    """The evaluator was handed something it does not evaluate, e.g. a definition."""

    def __init__(self, expression):
        super().__init__("cannot evaluate '{}'", render(expression))
        self.expression = expression

    def details(self):
        return [("type", type(self.expression).__name__)]


class ReaderError(GenericException):
    """Malformed source text. start and end delimit the offending span of expr."""


class ErrorHandler:
    """Context manager reporting lambdaeval errors/warnings in place of Python tracebacks. Keeps track of which line
    of which file is running, so reports can point at it.
    """
    ERROR = "red"
    WARNING = "magenta"
    DETAIL = "cyan"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}  # path: (line, line_num), in registration order

    def register_file(self, path):
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Should be called before a statement is executed."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Should be called after a statement ran successfully."""
        self.traceback[path] = (None, None)

    def running(self):
        """Returns [(path, line, line_num)] of every registered line."""
        return [(path, line, line_num) for path, (line, line_num) in self.traceback.items() if line is not None]

    @staticmethod
    def diagnose(error, color):
        """Returns error.expr with the offending span highlighted, and a caret line under it."""
        end = max(error.end, error.start + 1)
        highlighted = colored(error.expr[error.start:end], color, attrs=["bold"])
        caret = colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])
        return f"  {error.expr[:error.start]}{highlighted}{error.expr[end:]}\n  {' ' * error.start}{caret}"

    def report(self, error, warning=False):
        """Prints error (or warning) with its location, details and diagnosis."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        running = self.running()

        header = ""
        if running:
            path, __, line_num = running[-1]
            header = colored(f"{path}:{line_num}: ", attrs=["bold"])
        if error.internal:
            header += colored("[internal] ", color, attrs=["bold"])
        header += colored("warning: " if warning else "error: ", color, attrs=["bold"])
        print(header + error.msg)

        for label, value in error.details():
            print(f"    {colored(label, ErrorHandler.DETAIL)}: {value}")

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, color))

    def warn(self, *args, **kwargs):
        """Builds a GenericException from args and reports it as a warning."""
        self.report(GenericException(*args, **kwargs), warning=True)

    def throw(self, error):
        """Reports error, preceded by a traceback of every running line. Exits with status 1 if fatal."""
        running = self.running()
        if len(running) > 1:
            print("Traceback:")
            for path, line, line_num in running:
                print(f"  File '{path}', line {line_num}:\n    {line}")

        self.report(error)

        if self.fatal:
            sys.exit(1)
        self.traceback = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False
        elif exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded (term might not terminate)"))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            return False  # internal errors keep their Python traceback
        return True
