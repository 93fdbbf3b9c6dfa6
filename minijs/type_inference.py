"""
Hindley-Milner type inference, in one recursive walk over the syntax tree.

Visiting a node yields its type and records that type on the node as `inferred_type`.
Problems go to the report and the walk carries on with a best-effort type,
so that the complaints stay about the code that is actually wrong.

No let-rec and no mutual recursion means a single top-down pass suffices.
"""
from typing import NamedTuple, Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .algebra import (
	Type, TypeVariable, Primitive, Function, ArrayOf, Supply, compress, type_to_string,
	NUMBER, FLOAT, BOOL, STRING, VOID,
)
from .diagnostics import Report, Issue
from .environment import TypeEnvironment
from .ontology import Node, Phrase
from .space import AlreadyExists
from .unification import Unifier

ARITHMETIC = frozenset(["-", "*", "/"])
COMPARISON = frozenset([">", "<", ">=", "<="])
EQUALITY = frozenset(["==", "!="])

ANNOTATED_PRIMITIVES = {
	"number": NUMBER,
	"float": FLOAT,
	"string": STRING,
	"boolean": BOOL,
	"void": VOID,
}

class TypeCheck(NamedTuple):
	errors: Sequence[Issue]
	tree: Optional[Node]

def check_types(tree, name_errors:Sequence[Issue]=()) -> TypeCheck:
	"""
	The entry point. If name resolution already failed, hand back its
	complaints untouched and infer nothing: the bindings can't be trusted.
	A bare list of statements is taken to be a program.
	"""
	if name_errors:
		return TypeCheck(name_errors, tree)
	if isinstance(tree, list):
		tree = syntax.Program(tree)
	report = Report()
	infer_types(tree, report)
	return TypeCheck(report.issues, tree)

def infer_types(tree:Node, report:Report) -> Type:
	""" Each call gets its own engine, and thus its own variables and scopes. """
	return DeductionEngine(report).infer(tree)


class AnnotationConverter(Visitor):
	""" Turn declared type-expressions into types. Unknown names become fresh variables. """
	def __init__(self, supply:Supply):
		self._supply = supply

	def convert(self, annotation:Optional[syntax.TypeExpression]) -> Type:
		if annotation is None:
			return self._supply()
		return self.visit(annotation)

	def visit_TypeAnnotation(self, it:syntax.TypeAnnotation):
		try: return ANNOTATED_PRIMITIVES[it.value_type]
		except KeyError: return self._supply()

	def visit_ArrayTypeAnnotation(self, it:syntax.ArrayTypeAnnotation):
		return ArrayOf(self.convert(it.element_type))

	def visit_FunctionTypeAnnotation(self, it:syntax.FunctionTypeAnnotation):
		params = [self.convert(p.type_annotation) for p in it.params]
		return Function(params, self.convert(it.return_type))


class DeductionEngine(Visitor):
	"""
	One inference session. The supply of type variables, the environment,
	and the unifier all belong to this object and die with it.
	"""
	def __init__(self, report:Report):
		self._report = report
		self._supply = Supply()
		self._env = TypeEnvironment(self._supply)
		self._unifier = Unifier(report)
		self._annotation = AnnotationConverter(self._supply)

	def infer(self, node) -> Type:
		if hasattr(self, "visit_"+type(node).__name__):
			typ = self.visit(node)
		else:
			kind = node.kind if isinstance(node, Node) else type(node).__name__
			guilty = node if isinstance(node, Phrase) else None
			self._report.error(guilty, "Unknown node type: %s"%kind)
			typ = self._supply()
		if isinstance(node, Node):
			node.inferred_type = typ
		return typ

	def _unify(self, t1:Type, t2:Type, node:Phrase, context:str):
		self._unifier.unify(t1, t2, node, context)

	def _bind(self, name:str, typ:Type, phrase:Phrase):
		try: self._env.bind(name, typ, phrase)
		except AlreadyExists:
			self._report.error(phrase, "'%s' is already bound in this scope"%name)

	def visit_Program(self, program:syntax.Program):
		typ = VOID
		for statement in program.body:
			typ = self.infer(statement)
		return typ

	def visit_ConstDeclaration(self, decl:syntax.ConstDeclaration):
		init_type = self.infer(decl.init)
		if decl.type_annotation is None:
			typ = init_type
		else:
			# Bind the declared type, so a half-inferred initializer doesn't leak into later uses.
			typ = self._annotation.convert(decl.type_annotation)
			self._unify(init_type, typ, decl, "the initializer must match the declared type")
		self._bind(decl.id.name, typ, decl.id)
		decl.id.inferred_type = typ
		self._report.info("%s%s : %s"%("  "*self._env.depth(), decl.id.name, type_to_string(typ)))
		return typ

	def visit_ReturnStatement(self, stmt:syntax.ReturnStatement):
		if stmt.argument is None:
			return VOID
		return self.infer(stmt.argument)

	def visit_ExpressionStatement(self, stmt:syntax.ExpressionStatement):
		return self.infer(stmt.expression)

	def visit_NumericLiteral(self, expr:syntax.NumericLiteral):
		integral = isinstance(expr.value, int) or float(expr.value).is_integer()
		return NUMBER if integral else FLOAT

	def visit_StringLiteral(self, expr:syntax.StringLiteral):
		return STRING

	def visit_BooleanLiteral(self, expr:syntax.BooleanLiteral):
		return BOOL

	def visit_Identifier(self, expr:syntax.Identifier):
		typ = self._env.lookup(expr.name)
		if typ is None:
			self._report.error(expr, "Unbound identifier '%s'"%expr.name)
			return self._supply()
		return typ

	def visit_BinaryExpression(self, expr:syntax.BinaryExpression):
		left, right = self.infer(expr.left), self.infer(expr.right)
		op = expr.operator
		if op == "+":
			return self._plus(expr, left, right)
		elif op in ARITHMETIC:
			self._numeric(expr, left, right, "arithmetic operands must be Numbers")
			return NUMBER
		elif op in COMPARISON:
			self._numeric(expr, left, right, "comparison operands must be Numbers")
			return BOOL
		elif op in EQUALITY:
			self._unify(left, right, expr, "equality operands must have the same type")
			return BOOL
		else:
			self._report.error(expr, "Unsupported binary operator: %s"%op)
			return self._supply()

	def _plus(self, expr:syntax.BinaryExpression, left:Type, right:Type):
		left_is_string, right_is_string = _is_string(left), _is_string(right)
		if left_is_string and right_is_string:
			return STRING
		elif left_is_string or right_is_string:
			self._report.error(expr, "Cannot concatenate string with non-string value")
			return STRING
		else:
			# Type variables are taken to be numbers here.
			self._numeric(expr, left, right, "arithmetic operands must be Numbers")
			return NUMBER

	def _numeric(self, expr:syntax.BinaryExpression, left:Type, right:Type, context:str):
		self._unify(left, NUMBER, expr.left, context)
		self._unify(right, NUMBER, expr.right, context)

	def visit_ConditionalExpression(self, expr:syntax.ConditionalExpression):
		self._unify(self.infer(expr.test), BOOL, expr.test, "the ternary condition must be Bool")
		then_type = self.infer(expr.consequent)
		else_type = self.infer(expr.alternate)
		# Each branch meets a shared result variable, not each other.
		result = self._supply()
		self._unify(then_type, result, expr.consequent, "ternary branches must have the same type")
		self._unify(else_type, result, expr.alternate, "ternary branches must have the same type")
		return result

	def visit_ArrowFunctionExpression(self, fn:syntax.ArrowFunctionExpression):
		param_types = [self._annotation.convert(p.type_annotation) for p in fn.params]
		with self._env.function_scope(param_types):
			for param, typ in zip(fn.params, param_types):
				self._bind(param.name, typ, param)
			result = self._function_body(fn)
			if fn.return_type is not None:
				declared = self._annotation.convert(fn.return_type)
				self._unify(result, declared, fn, "the return value must match the declared return type")
				result = declared
		return Function(param_types, result)

	def _function_body(self, fn:syntax.ArrowFunctionExpression) -> Type:
		if fn.expression:
			return self.infer(fn.body)
		result = VOID
		# Source order, not return-first: the return may use constants declared above it.
		for statement in fn.body:
			typ = self.infer(statement)
			if isinstance(statement, syntax.ReturnStatement):
				result = typ
		return result

	def visit_CallExpression(self, expr:syntax.CallExpression):
		callee = compress(self.infer(expr.callee))
		if isinstance(callee, TypeVariable):
			# Not yet known to be a function; now it is.
			arg_types = [self.infer(a) for a in expr.arguments]
			result = self._supply()
			self._unify(callee, Function(arg_types, result), expr, "the called value must accept these arguments")
			return result
		elif isinstance(callee, Function):
			need, got = len(callee.params), len(expr.arguments)
			if need != got:
				plural = '' if need == 1 else 's'
				self._report.error(expr, "Expected %d argument%s but got %d"%(need, plural, got))
				self._infer_each(expr.arguments)
				return callee.result
			for arg, param in zip(expr.arguments, callee.params):
				self._unify(self.infer(arg), param, arg, "the argument must match the parameter type")
			return callee.result
		else:
			self._report.error(expr, "Called value is not a function: %s"%type_to_string(callee))
			self._infer_each(expr.arguments)
			return self._supply()

	def _infer_each(self, nodes):
		for node in nodes:
			self.infer(node)

	def visit_ArrayLiteral(self, expr:syntax.ArrayLiteral):
		if not expr.elements:
			return ArrayOf(self._supply())
		first, *rest = expr.elements
		element = self.infer(first)
		for item in rest:
			self._unify(element, self.infer(item), item, "array elements must all have the same type")
		return ArrayOf(element)

	def visit_MemberExpression(self, expr:syntax.MemberExpression):
		subject = compress(self.infer(expr.object))
		self._unify(self.infer(expr.index), NUMBER, expr.index, "an array index must be a Number")
		if isinstance(subject, ArrayOf):
			return subject.element
		element = self._supply()
		self._unify(subject, ArrayOf(element), expr.object, "the indexed value must be an array")
		return element

def _is_string(typ:Type) -> bool:
	typ = compress(typ)
	return isinstance(typ, Primitive) and typ.name == STRING.name
