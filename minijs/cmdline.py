"""
This is a type checker for a small subset of JavaScript.

{0}

For example:

    minijs program.js

will check program.js, or else try to explain why it does not type-check.

    minijs -t program.js

will also print the type of each top-level constant.

    minijs -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="minijs",
	description="Type checker for a small subset of JavaScript.",
)
parser.add_argument("program", help="a source file, e.g. examples/polymorphism.js")
parser.add_argument('-t', "--types", action="store_true", help="Print the inferred type of each top-level constant.")
parser.add_argument('-v', "--verbose", action="count", help="Narrate the passes on stderr as they happen.")
parser.add_argument("--max-issues", type=int, default=None, metavar="N", help="Give up after N issues.")

def run(args):
	from boozetools.support.failureprone import SourceText
	from .diagnostics import Report, TooManyIssues
	from .front_end import parse_source
	from .resolution import resolve_names
	from .type_inference import infer_types
	from .algebra import type_to_string
	from . import syntax

	path = Path.cwd() / args.program
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as ex:
		print("Cannot read %s: %s"%(path, ex.strerror), file=sys.stderr)
		return 1
	report = Report(verbose=args.verbose, max_issues=args.max_issues, source=SourceText(text, filename=str(path)))
	try:
		report.info("Parsing", path)
		program = parse_source(text, report)
		if report.ok():
			report.info("Resolving names")
			resolve_names(program, report)
		if report.ok():
			report.info("Inferring types")
			result = infer_types(program, report)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after %d issues."%len(report.issues), file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	if args.types:
		for statement in program.body:
			if isinstance(statement, syntax.ConstDeclaration):
				print("%s : %s"%(statement.id.name, type_to_string(statement.inferred_type)))
		print("program : %s"%type_to_string(result))
	report.info("Looks plausible to me.")
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
