#!/usr/bin/env python

"""
Main entry point for the polynomial calculator. Run with --help for options.
"""

import sys
import argparse

from polycalc import common
from polycalc import library
from polycalc import opts
from polycalc.evaluation import Session, EvaluationError
from polycalc.library import ArgumentError, UndefinedOperation
from polycalc.parse import ParseError
from polycalc.polynomials import PolynomialError

VERSION = "0.1"

show_banner = opts.Option("banner", bool, True, description="Print the version banner when starting an interactive session")

# Errors caused by bad input.  They are reported and the session goes on.
INPUT_ERRORS = (ParseError, EvaluationError, PolynomialError, ArgumentError, UndefinedOperation)

def banner():
    return "polycalc {} -- polynomials with rational coefficients\nType 'help()' to list operations and 'quit()' to quit.\n".format(VERSION)

def prompted(stdin, out, prompt):
    """Yield lines from stdin, writing `prompt` to `out` before each one."""
    while True:
        out.write(prompt)
        out.flush()
        line = stdin.readline()
        if not line:
            out.write("\n")
            return
        yield line

def execute_lines(session, lines, out, stop_on_error=False):
    """Execute lines of input one at a time, printing results to `out`.

    Returns the number of lines that failed.
    """
    failures = 0
    for line in lines:
        try:
            res = session.run(line)
        except common.StopException:
            print("Bye.", file=out)
            break
        except INPUT_ERRORS as e:
            print("error: {}".format(e), file=out)
            failures += 1
            if stop_on_error:
                break
            continue
        if res is not None:
            print(res, file=out)
    return failures

def run(argv=None, stdin=None, stdout=None):
    """Entry point for the polycalc executable.

    This procedure reads the command line (sys.argv unless `argv` is given)
    and executes the requested input.  Returns the exit status.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    parser = argparse.ArgumentParser(description='Calculator for multivariate polynomials with rational coefficients.')
    parser.add_argument("-e", "--eval", metavar="EXPR", action="append", default=None, help="Evaluate EXPR and exit; may be repeated")
    parser.add_argument("--list-operations", action="store_true", help="List the built-in operations and exit")

    internal_opts = parser.add_argument_group("Internal parameters")
    opts.setup(internal_opts)

    parser.add_argument("file", nargs="?", default=None, help="Script to execute, one expression per line ('-' for stdin)")
    args = parser.parse_args(argv)
    opts.read(args)

    session = Session()

    if args.list_operations:
        for name in library.names():
            print("{:12} {}".format(name, library.OPERATIONS[name].doc), file=stdout)
        return 0

    if args.eval is not None:
        failures = execute_lines(session, args.eval, stdout, stop_on_error=True)
        return 1 if failures else 0

    if args.file is not None:
        if args.file == "-":
            failures = execute_lines(session, stdin, stdout, stop_on_error=True)
        else:
            with open(args.file, "r") as f:
                failures = execute_lines(session, f, stdout, stop_on_error=True)
        return 1 if failures else 0

    if show_banner.value:
        print(banner(), file=stdout)
    execute_lines(session, prompted(stdin, stdout, "> "), stdout)
    return 0

def main():
    sys.exit(run())

if __name__ == "__main__":
    main()
