"""
The set of parse-nodes in simple form.
The parser calls these constructors as it recognizes each phrase.
External parsers may instead hand over ESTree-style dictionaries,
which `from_dict` turns into the very same nodes.
"""
from typing import Optional, Sequence, Union
from .ontology import Node, Phrase, ValueExpression, Statement, TypeExpression

class Identifier(ValueExpression):
	def __init__(self, name:str, position:Optional[int]=None):
		assert isinstance(name, str)
		self.name, self.position = name, position
	def __repr__(self): return "<ref:%s>"%self.name
	def width(self): return len(self.name)

class NumericLiteral(ValueExpression):
	def __init__(self, value:Union[int, float], position:Optional[int]=None):
		self.value, self.position = value, position
	def __repr__(self): return "<num:%r>"%self.value

class StringLiteral(ValueExpression):
	def __init__(self, value:str, position:Optional[int]=None):
		self.value, self.position = value, position
	def __repr__(self): return "<str:%r>"%self.value
	def width(self): return len(self.value) + 2

class BooleanLiteral(ValueExpression):
	def __init__(self, value:bool, position:Optional[int]=None):
		self.value, self.position = value, position
	def __repr__(self): return "<bool:%r>"%self.value

class BinaryExpression(ValueExpression):
	def __init__(self, operator:str, left:ValueExpression, right:ValueExpression, position:Optional[int]=None):
		self.operator, self.left, self.right = operator, left, right
		self.position = position
	def __repr__(self): return "(%r %s %r)"%(self.left, self.operator, self.right)
	def width(self): return len(self.operator)

class ConditionalExpression(ValueExpression):
	def __init__(self, test:ValueExpression, consequent:ValueExpression, alternate:ValueExpression, position:Optional[int]=None):
		self.test, self.consequent, self.alternate = test, consequent, alternate
		self.position = position

class CallExpression(ValueExpression):
	def __init__(self, callee:ValueExpression, arguments:Sequence[ValueExpression], position:Optional[int]=None):
		self.callee, self.arguments = callee, list(arguments)
		self.position = position
	def __repr__(self): return "%r(%s)"%(self.callee, ", ".join(map(repr, self.arguments)))

class ArrayLiteral(ValueExpression):
	def __init__(self, elements:Sequence[ValueExpression], position:Optional[int]=None):
		self.elements, self.position = list(elements), position
	def __repr__(self): return "[%s]"%", ".join(map(repr, self.elements))

class MemberExpression(ValueExpression):
	""" Array indexing, as in `xs[i]` """
	def __init__(self, obj:ValueExpression, index:ValueExpression, position:Optional[int]=None):
		self.object, self.index, self.position = obj, index, position
	def __repr__(self): return "%r[%r]"%(self.object, self.index)

class Parameter(Phrase):
	def __init__(self, name:str, type_annotation:Optional[TypeExpression]=None, position:Optional[int]=None):
		self.name, self.type_annotation, self.position = name, type_annotation, position
	def __repr__(self): return "<:%s:%s>"%(self.name, self.type_annotation)
	def width(self): return len(self.name)

Body = Union[list[Statement], ValueExpression]

class ArrowFunctionExpression(ValueExpression):
	"""
	The body is either a list of statements (a block)
	or else a single expression, as in `(x) => x + 1`.
	"""
	def __init__(self, params:Sequence[Parameter], body:Body, return_type:Optional[TypeExpression]=None, position:Optional[int]=None):
		self.params = list(params)
		self.body = body
		self.return_type = return_type
		self.position = position
	@property
	def expression(self) -> bool:
		return not isinstance(self.body, list)
	def __repr__(self): return "<arrow/%d>"%len(self.params)

class ConstDeclaration(Statement):
	def __init__(self, ident:Identifier, init:ValueExpression, type_annotation:Optional[TypeExpression]=None, position:Optional[int]=None):
		self.id, self.init = ident, init
		self.type_annotation = type_annotation
		self.position = position
	def offset(self):
		return self.id.position if self.position is None else self.position
	def __repr__(self): return "<const %s>"%self.id.name

class ReturnStatement(Statement):
	def __init__(self, argument:Optional[ValueExpression]=None, position:Optional[int]=None):
		self.argument, self.position = argument, position

class ExpressionStatement(Statement):
	def __init__(self, expression:ValueExpression, position:Optional[int]=None):
		self.expression, self.position = expression, position
	def offset(self):
		return self.expression.offset() if self.position is None else self.position

class Program(Node):
	def __init__(self, body:Sequence[Node], position:Optional[int]=None):
		self.body, self.position = list(body), position
	def __repr__(self): return "<program/%d>"%len(self.body)

class Unrecognized(Node):
	""" Stands in for a node kind the rest of the system has never heard of. """
	def __init__(self, kind:str, position:Optional[int]=None):
		self._kind, self.position = kind, position
	@property
	def kind(self) -> str: return self._kind

#######################################################################
# Type annotations

class TypeAnnotation(TypeExpression):
	""" A plain type name, like `number` or `string` """
	def __init__(self, value_type:str, position:Optional[int]=None):
		self.value_type, self.position = value_type, position
	def __repr__(self): return self.value_type
	def width(self): return len(self.value_type)

class ArrayTypeAnnotation(TypeExpression):
	def __init__(self, element_type:TypeExpression, position:Optional[int]=None):
		self.element_type, self.position = element_type, position
	def __repr__(self): return "%r[]"%self.element_type

class FunctionTypeAnnotation(TypeExpression):
	def __init__(self, params:Sequence[Parameter], return_type:TypeExpression, position:Optional[int]=None):
		self.params, self.return_type, self.position = list(params), return_type, position
	def __repr__(self): return "(%s) => %r"%(", ".join(repr(p.type_annotation) for p in self.params), self.return_type)

#######################################################################
# Building trees from ESTree-style dictionaries

def from_dict(data:dict) -> Node:
	"""
	Build a tree of nodes from nested dictionaries, each with a "type" key.
	Unknown node kinds become `Unrecognized` placeholders, for the inference
	engine to complain about. A missing required field raises KeyError.
	"""
	if isinstance(data, list):
		return Program([from_dict(d) for d in data])
	kind = data["type"]
	builder = _BUILDERS.get(kind)
	if builder is None:
		return Unrecognized(kind, data.get("position"))
	return builder(data)

def _maybe(data:Optional[dict], build):
	return None if data is None else build(data)

def _identifier(data:dict) -> Identifier:
	if data.get("type", "Identifier") != "Identifier":
		raise ValueError("Expected an Identifier, got %r"%data["type"])
	return Identifier(data["name"], data.get("position"))

def _parameter(data:dict) -> Parameter:
	return Parameter(data["name"], _maybe(data.get("typeAnnotation"), _annotation), data.get("position"))

def _body(data) -> Body:
	if isinstance(data, list):
		return [from_dict(d) for d in data]
	return from_dict(data)

def _annotation(data:dict) -> TypeExpression:
	kind = data["type"]
	if kind == "TypeAnnotation":
		return TypeAnnotation(data["valueType"], data.get("position"))
	if kind == "ArrayTypeAnnotation":
		return ArrayTypeAnnotation(_annotation(data["elementType"]), data.get("position"))
	if kind == "FunctionTypeAnnotation":
		params = [_parameter(p) for p in data["paramTypes"]]
		return FunctionTypeAnnotation(params, _annotation(data["returnType"]), data.get("position"))
	raise ValueError("Unknown type annotation kind %r"%kind)

_BUILDERS = {
	"Program": lambda d: Program([from_dict(s) for s in d["body"]], d.get("position")),
	"ConstDeclaration": lambda d: ConstDeclaration(
		_identifier(d["id"]), from_dict(d["init"]),
		_maybe(d.get("typeAnnotation"), _annotation), d.get("position"),
	),
	"ArrowFunctionExpression": lambda d: ArrowFunctionExpression(
		[_parameter(p) for p in d["params"]], _body(d["body"]),
		_maybe(d.get("returnTypeAnnotation"), _annotation), d.get("position"),
	),
	"Identifier": _identifier,
	"BinaryExpression": lambda d: BinaryExpression(d["operator"], from_dict(d["left"]), from_dict(d["right"]), d.get("position")),
	"ConditionalExpression": lambda d: ConditionalExpression(
		from_dict(d["test"]), from_dict(d["consequent"]), from_dict(d["alternate"]), d.get("position"),
	),
	"CallExpression": lambda d: CallExpression(from_dict(d["callee"]), [from_dict(a) for a in d["arguments"]], d.get("position")),
	"ArrayLiteral": lambda d: ArrayLiteral([from_dict(e) for e in d["elements"]], d.get("position")),
	"MemberExpression": lambda d: MemberExpression(from_dict(d["object"]), from_dict(d["index"]), d.get("position")),
	"ReturnStatement": lambda d: ReturnStatement(_maybe(d.get("argument"), from_dict), d.get("position")),
	"ExpressionStatement": lambda d: ExpressionStatement(from_dict(d["expression"]), d.get("position")),
	"NumericLiteral": lambda d: NumericLiteral(d["value"], d.get("position")),
	"StringLiteral": lambda d: StringLiteral(d["value"], d.get("position")),
	"BooleanLiteral": lambda d: BooleanLiteral(d["value"], d.get("position")),
}
