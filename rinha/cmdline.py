"""
This is an interpreter for syntax trees of the Rinha language.

{0}

For example:

    rinha fib.json

will evaluate the program in fib.json, or else try to explain why not.

    rinha -h

will explain all the arguments.
"""
import sys, argparse

from .diagnostics import Report, TooManyIssues
from .front_end import load_file
from .evaluator import run_program
from .syntax import Error

DEFAULT_RECURSION_LIMIT = 20000

parser = argparse.ArgumentParser(
	prog="rinha",
	description="Tree-walking interpreter for Rinha syntax trees.",
)
parser.add_argument("program", nargs="*", help="the JSON syntax tree to run; try examples/fib.json for example.")
parser.add_argument('-v', "--verbose", action="count", help="Describe what's going on, and illustrate errors in the source text if it can be found.")
parser.add_argument("--recursion-limit", type=int, default=DEFAULT_RECURSION_LIMIT, help="How deep the host may recurse before giving up (default %(default)s).")

def run(args) -> int:
	if len(args.program) != 1:
		print(__doc__.strip().format(parser.format_usage()), file=sys.stderr)
		return 0
	report = Report(verbose=args.verbose)
	# Reading a deeply nested tree recurses as much as evaluating it.
	prior = sys.getrecursionlimit()
	sys.setrecursionlimit(args.recursion_limit)
	try: result = _load_and_evaluate(args.program[0], args.recursion_limit, report)
	except TooManyIssues: result = None
	finally: sys.setrecursionlimit(prior)
	if report.sick():
		report.complain_to_console()
		return 1
	report.info("Result:", result)
	return 0

def _load_and_evaluate(path, recursion_limit:int, report:Report):
	program = load_file(path, report)
	if program is None: return None
	report.info("Evaluating", program.name)
	try: result = run_program(program)
	except RecursionError:
		report.stack_overflow(recursion_limit)
		return None
	if isinstance(result, Error):
		report.runtime_error(result)
	return result

def main(argv=None):
	sys.exit(run(parser.parse_args(argv)))
