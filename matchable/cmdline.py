"""
This compares JSON documents by shape.

{0}

For example:

    matchable expected.json actual.json

succeeds if actual.json has exactly the same keys and array lengths
as expected.json, at every depth, or else says which ones differ.

    matchable -h

will explain all the arguments.
"""
import sys, json, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="matchable",
	description="Structural matching of JSON documents.",
)
parser.add_argument("reference", help="the document that sets the shape.")
parser.add_argument("others", nargs="+", help="documents to compare against the reference.")
parser.add_argument('-e', "--equal", action="store_true", help="Also require the leaves to be equal.")
parser.add_argument('-z', "--zip", action="store_true", help="Print each matched pair of documents, zipped together, as JSON.")
parser.add_argument('-v', "--verbose", action="count", help="Explain the mismatches.")

def _load(path:Path, report):
	from .documents import from_json
	try: text = path.read_text(encoding="utf-8")
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	except OSError as ex:
		report.unreadable_file(path, ex.strerror or str(ex))
		return None
	except UnicodeDecodeError as ex:
		report.unreadable_file(path, "byte %d is not UTF-8" % ex.start)
		return None
	try: return from_json(json.loads(text))
	except json.JSONDecodeError as ex:
		report.broken_document(path, text, ex.pos, ex.msg)
		return None

def run(args):
	from .diagnostics import Report, TooManyIssues, explain, explain_inequality
	from .capability import zip_match, lift_eq_default
	from .documents import to_json, same_leaf
	report = Report(verbose=args.verbose)
	try:
		reference_path = Path(args.reference)
		reference = _load(reference_path, report)
		if reference is None:
			report.complain_to_console()
			return 1
		for other in args.others:
			path = Path(other)
			doc = _load(path, report)
			if doc is None: continue
			zipped = zip_match(reference, doc)
			if zipped is None:
				report.mismatch(reference_path, path, explain(reference, doc))
			elif args.equal and not lift_eq_default(same_leaf, reference, doc):
				report.unequal(reference_path, path, explain_inequality(reference, doc, same_leaf))
			else:
				report.info("%s matches %s" % (path, reference_path))
				if args.zip: print(json.dumps(to_json(zipped), indent=2))
	except TooManyIssues:
		report.complain_to_console()
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
