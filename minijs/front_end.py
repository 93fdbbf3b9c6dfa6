"""
Scanner and parser for the little expression language.
The grammar lives in MiniJS.md, next to this file; boozetools builds the tables.

The one trick is telling an arrow function `(a, b) => ...` apart from a
parenthesized expression `(a)`. The grammar reads either one as a `group`,
and the parse actions sort out which it was once they see whether an arrow follows.
"""
import re
from pathlib import Path
from typing import NamedTuple, Optional

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from boozetools.parsing.interface import ParseError
from . import syntax
from .diagnostics import Report
from .ontology import Phrase

class MiniParseError(ParseError):
	""" args are (message, position) """
	@property
	def position(self) -> int: return self.args[1]

class Mark(NamedTuple):
	""" The semantic value of keywords and punctuation """
	text: str
	position: int

class Group(NamedTuple):
	""" A parenthesized list, before we know whether it's a parameter list. """
	mark: Mark
	items: list

_tables = make_tables(Path(__file__).parent/"MiniJS.md")
END = "<END>"
KEYWORDS = frozenset(["const", "return", "true", "false"])
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}

def _unescape(body:str) -> str:
	return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)

def _mark(yy: IterableScanner) -> Mark:
	return Mark(yy.match(), yy.slice().start)

def _as_parameter(item) -> syntax.Parameter:
	if isinstance(item, syntax.Parameter):
		return item
	if isinstance(item, syntax.Identifier):
		return syntax.Parameter(item.name, None, item.position)
	raise MiniParseError("Expected a parameter name", item.offset())

class MiniParser(TypicalApplication):
	"""
	The scanner tracks bracket depth and the depths of pending `?` marks,
	so that it can tell a ternary's colon from an annotation's colon.
	"""

	def parse(self, text, **kwargs):
		self._length = len(text)
		self._depth = 0
		self._questions = []
		return super().parse(text, **kwargs)

	def scan_ignore(self, yy: IterableScanner): pass

	@staticmethod
	def scan_punctuation(yy: IterableScanner):
		yy.token(yy.match(), _mark(yy))

	def scan_open(self, yy: IterableScanner):
		self._depth += 1
		self.scan_punctuation(yy)

	def scan_close(self, yy: IterableScanner):
		self._depth -= 1
		self.scan_punctuation(yy)

	def scan_query(self, yy: IterableScanner):
		self._questions.append(self._depth)
		self.scan_punctuation(yy)

	def scan_colon(self, yy: IterableScanner):
		if self._questions and self._questions[-1] == self._depth:
			self._questions.pop()
			yy.token("ELSE", _mark(yy))
		else:
			self.scan_punctuation(yy)

	@staticmethod
	def scan_integer(yy: IterableScanner): yy.token("number", syntax.NumericLiteral(int(yy.match()), yy.slice().start))

	@staticmethod
	def scan_real(yy: IterableScanner): yy.token("number", syntax.NumericLiteral(float(yy.match()), yy.slice().start))

	@staticmethod
	def scan_string(yy: IterableScanner):
		yy.token("string", syntax.StringLiteral(_unescape(yy.match()[1:-1]), yy.slice().start))

	@staticmethod
	def scan_word(yy: IterableScanner):
		word = yy.match()
		if word in KEYWORDS: yy.token(word.upper(), _mark(yy))
		else: yy.token("name", syntax.Identifier(word, yy.slice().start))

	@staticmethod
	def scan_stray(yy: IterableScanner):
		raise MiniParseError("Unexpected character %r"%yy.match(), yy.slice().start)

	@staticmethod
	def parse_nothing(): return None
	@staticmethod
	def parse_empty(): return []
	@staticmethod
	def parse_no_statements(semicolon): return []
	@staticmethod
	def parse_first(item): return [item]
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some

	@staticmethod
	def parse_program(statements): return syntax.Program(statements, 0)

	@staticmethod
	def parse_const_declaration(mark, ident, annotation, init):
		return syntax.ConstDeclaration(ident, init, annotation, mark.position)

	@staticmethod
	def parse_return_statement(mark, argument=None):
		return syntax.ReturnStatement(argument, mark.position)

	@staticmethod
	def parse_true(mark): return syntax.BooleanLiteral(True, mark.position)
	@staticmethod
	def parse_false(mark): return syntax.BooleanLiteral(False, mark.position)

	@staticmethod
	def parse_array(mark, elements=()): return syntax.ArrayLiteral(elements, mark.position)

	@staticmethod
	def parse_call(callee, arguments=()): return syntax.CallExpression(callee, arguments, callee.position)

	@staticmethod
	def parse_index(obj, index): return syntax.MemberExpression(obj, index, obj.position)

	@staticmethod
	def parse_binary(left, op, right): return syntax.BinaryExpression(op.text, left, right, op.position)

	@staticmethod
	def parse_ternary(test, consequent, alternate):
		return syntax.ConditionalExpression(test, consequent, alternate, test.position)

	@staticmethod
	def parse_group(mark, items=()): return Group(mark, list(items))

	@staticmethod
	def parse_parenthesized(group:Group):
		if len(group.items) == 1 and isinstance(group.items[0], syntax.ValueExpression):
			return group.items[0]
		raise MiniParseError("Expected '=>' after a parameter list", group.mark.position)

	@staticmethod
	def parse_arrow(group:Group, return_type, body):
		params = [_as_parameter(item) for item in group.items]
		return syntax.ArrowFunctionExpression(params, body, return_type, group.mark.position)

	@staticmethod
	def parse_bare_arrow(ident, body):
		param = syntax.Parameter(ident.name, None, ident.position)
		return syntax.ArrowFunctionExpression([param], body, None, ident.position)

	@staticmethod
	def parse_typed(ident, annotation): return syntax.Parameter(ident.name, annotation, ident.position)

	@staticmethod
	def parse_simple_type(ident): return syntax.TypeAnnotation(ident.name, ident.position)

	@staticmethod
	def parse_generic_type(ident, argument):
		if ident.name != "Array":
			raise MiniParseError("Unknown generic type %r"%ident.name, ident.position)
		return syntax.ArrayTypeAnnotation(argument, ident.position)

	@staticmethod
	def parse_array_type(element): return syntax.ArrayTypeAnnotation(element, element.position)

	@staticmethod
	def parse_nullary_function_type(mark, return_type):
		return syntax.FunctionTypeAnnotation((), return_type, mark.position)

	@staticmethod
	def parse_function_type(mark, params, return_type):
		return syntax.FunctionTypeAnnotation(params, return_type, mark.position)

	def unexpected_token(self, kind, semantic, pds):
		if kind == END:
			raise MiniParseError("Unexpected end of input", self._length)
		raise MiniParseError("Unexpected %r"%self.yy.match(), self.yy.slice().start)

mini_parser = MiniParser(_tables)

def parse_text(text:str) -> syntax.Program:
	""" Raises MiniParseError on trouble """
	return mini_parser.parse(text, filename="<text>")

def parse_source(text:str, report:Report) -> Optional[syntax.Program]:
	""" Submit text to parser; on trouble, file an issue and return None """
	try:
		return parse_text(text)
	except MiniParseError as ex:
		message, position = ex.args
		report.error(_Spot(position), message)

class _Spot(Phrase):
	def __init__(self, position:int): self.position = position
