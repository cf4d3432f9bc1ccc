import sys, operator
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration
from .ontology import Mismatch, pair
from . import capability

class TooManyIssues(Exception):
	pass

def explain(ta, tb) -> Optional[str]:
	"""
	Why do these not match? Returns None if they do.
	The reason is meant for people; nothing should parse it.
	"""
	try: capability.match_with(pair, ta, tb)
	except Mismatch as ex: return ex.reason
	else: return None

def explain_inequality(ta, tb, eq=operator.eq) -> Optional[str]:
	""" Same idea, but the elements must also agree. """
	try: capability.match_with(capability.agreement(eq), ta, tb)
	except Mismatch as ex: return ex.reason
	else: return None

class Report:
	""" Collects the problems found along the way, and complains about them at the end. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(message)

	# Methods the command line calls:

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called %s" % path))

	def unreadable_file(self, path:Path, why:str):
		self.issue(Pic("I could not read %s: %s" % (path, why)))

	def broken_document(self, path:Path, text:str, offset:int, why:str):
		intro = "Something went pear-shaped while trying to read %s" % path
		source = SourceText(text, filename=str(path))
		row, col = source.find_row_col(min(offset, max(len(text)-1, 0)))
		single_line = source.line_of_text(row)
		picture = illustration(single_line, col, 1, prefix='% 6d |' % row, caption=why)
		self.issue(Pic(intro, [picture]))

	def mismatch(self, reference:Path, other:Path, reason:Optional[str]):
		intro = "%s does not have the same shape as %s" % (other, reference)
		footer = [reason] if reason and self._verbose else []
		self.issue(Pic(intro, footer))

	def unequal(self, reference:Path, other:Path, reason:Optional[str]):
		intro = "%s has the same shape as %s, but different contents" % (other, reference)
		footer = [reason] if reason and self._verbose else []
		self.issue(Pic(intro, footer))

class Pic:
	def __init__(self, intro:str, lines:Sequence[str]=()):
		self._intro, self._lines = intro, list(lines)
	def as_text(self):
		return '\n'.join([self._intro, *self._lines])

def _bemoan(issues):
	if issues:
		print("*"*60, file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
