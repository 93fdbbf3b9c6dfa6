import sys
from typing import NamedTuple, Optional, Iterable
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Phrase

class TooManyIssues(Exception):
	pass

class Issue(NamedTuple):
	description: str
	node: Optional[Phrase] = None

	@property
	def position(self) -> Optional[int]:
		if isinstance(self.node, Phrase):
			return self.node.offset()

	@property
	def location(self) -> str:
		position = self.position
		return "unknown position" if position is None else "position %d"%position

	@property
	def message(self) -> str:
		return "%s at %s"%(self.description, self.location)

	def __str__(self): return self.message

class Report:
	"""
	Collects issues from every pass, in the order they are found.
	Nothing is ever deduplicated.
	"""
	issues : list[Issue]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None, source:Optional[SourceText]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._max_issues = max_issues
		self._source = source
		self.issues = []

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	def issue(self, it:Issue):
		self.issues.append(it)
		if self._max_issues is not None and len(self.issues) >= self._max_issues:
			raise TooManyIssues(self)

	def error(self, guilty:Optional[Phrase], msg:str):
		""" Actually make an entry of an issue """
		assert guilty is None or isinstance(guilty, Phrase), guilty
		self.issue(Issue(msg, guilty))

	def extend(self, issues:Iterable[Issue]):
		for it in issues:
			self.issue(it)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		if self.issues:
			print("*"*60, file=sys.stderr)
			plural = "" if len(self.issues) == 1 else "s"
			print("Found %d issue%s:"%(len(self.issues), plural), file=sys.stderr)
		for it in self.issues:
			print("  -"*20, file=sys.stderr)
			print(self.illustrate(it), file=sys.stderr)
		sys.stderr.flush()

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self.issues:
			self.complain_to_console()
			raise AssertionError(message)

	def illustrate(self, it:Issue) -> str:
		position = it.position
		if self._source is None or position is None:
			return it.message
		row, col = self._source.find_row_col(position)
		single_line = self._source.line_of_text(row)
		picture = illustration(single_line, col, it.node.width(), prefix='% 6d |'%row, caption="")
		return "%s\n%s"%(it.message, picture)
