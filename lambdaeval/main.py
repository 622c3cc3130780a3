"""Runs lambdaeval on a file of statements (or stdin) and prints the value of every plain expression. Called from the
lambdaeval executable script.
"""

import argparse
import sys

from lambdaeval.lang.error import ErrorHandler, GenericException
from lambdaeval.lang.program import Program
from lambdaeval.lang.reader import read_program
from lambdaeval.lang.trace import ConsoleTracer
from lambdaeval.pure.normal import NormalOrderReducer

STDIN = "-"


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="lambdaeval", description="Untyped lambda calculus evaluator.")
    parser.add_argument("file", help=f"file to interpret and run ('{STDIN}' reads standard input)")
    parser.add_argument("--trace", action="store_true", help="print every evaluation and reduction step")
    parser.add_argument("--no-normalise", dest="normalise", action="store_false",
                        help="don't compute normal forms before evaluating")
    parser.add_argument("--step-limit", type=int, default=NormalOrderReducer.STEP_LIMIT,
                        help="maximum number of β-reductions when computing a normal form (default: %(default)s)")
    return parser.parse_args(argv)


def read_source(path):
    """Returns the text of path, or of standard input if path is '-'."""
    if path == STDIN:
        return sys.stdin.read()
    try:
        with open(path, "r", encoding="utf-8") as file:
            return file.read()
    except OSError:
        raise GenericException("'{}' could not be opened", path, diagnosis=False)


def main(argv=None):
    """Runs lambdaeval. Called from lambdaeval executable script."""
    with ErrorHandler() as error_handler:
        args = parse_args(argv)
        path = "<stdin>" if args.file == STDIN else args.file
        error_handler.register_file(path)

        tracer = ConsoleTracer(error_handler, steps=args.trace)
        program = Program(tracer=tracer, normalise=args.normalise, step_limit=args.step_limit)

        for line_num, line, statement in read_program(read_source(args.file)):
            error_handler.register_line(path, line, line_num)  # in case error is raised

            result = program.execute(statement)
            if result is not None:
                print(result)

            error_handler.remove_line(path)


if __name__ == "__main__":
    main()
