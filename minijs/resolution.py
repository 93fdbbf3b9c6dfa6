"""
The name resolution pass. It runs before type inference, which only
runs at all if this pass finds nothing wrong.

By the time this pass is finished, we know:
	every name is declared before it is used,
	no scope declares the same name twice,
	and each function body has at most one return, which comes last.
"""
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report, Issue
from .space import Space, Layer, AlreadyExists

def resolve_names(program:syntax.Program, report:Report) -> list[Issue]:
	""" Returns just the issues this pass found. """
	before = len(report.issues)
	NameResolver(report).visit(program)
	return report.issues[before:]

class NameResolver(Visitor):
	"""
	Each visit gets the current scope, and whether we are within a function.
	The things in scope are the declaring phrases, for the sake of error messages.
	"""
	def __init__(self, report:Report):
		self._report = report

	def visit_Program(self, program:syntax.Program):
		scope = Layer()
		for statement in program.body:
			self.visit(statement, scope, False)

	def _declare(self, scope:Space, phrase, name:str, pattern:str):
		try: scope.mount(name, phrase, phrase)
		except AlreadyExists:
			first = scope.locate(name)
			where = "" if first is None or first.offset() is None else " (first declared at position %d)"%first.offset()
			self._report.error(phrase, pattern%name + where)

	def visit_ConstDeclaration(self, decl:syntax.ConstDeclaration, scope:Space, in_function:bool):
		# The initializer cannot see the name it initializes.
		self.visit(decl.init, scope, in_function)
		self._declare(scope, decl.id, decl.id.name, "'%s' is already declared in this scope")

	def visit_ReturnStatement(self, stmt:syntax.ReturnStatement, scope:Space, in_function:bool):
		if not in_function:
			self._report.error(stmt, "Return statement outside of a function")
		if stmt.argument is not None:
			self.visit(stmt.argument, scope, in_function)

	def visit_ExpressionStatement(self, stmt:syntax.ExpressionStatement, scope:Space, in_function:bool):
		self.visit(stmt.expression, scope, in_function)

	def visit_ArrowFunctionExpression(self, fn:syntax.ArrowFunctionExpression, scope:Space, in_function:bool):
		inner = scope.child()
		for param in fn.params:
			self._declare(inner, param, param.name, "Duplicate parameter '%s'")
		if fn.expression:
			self.visit(fn.body, inner, True)
			return
		returns = [s for s in fn.body if isinstance(s, syntax.ReturnStatement)]
		if len(returns) > 1:
			self._report.error(returns[1], "Only one return statement is allowed in a function body")
		elif returns and returns[0] is not fn.body[-1]:
			self._report.error(returns[0], "Return statement must be the last statement in a function body")
		for statement in fn.body:
			self.visit(statement, inner, True)

	def visit_Identifier(self, expr:syntax.Identifier, scope:Space, in_function:bool):
		if expr.name not in scope:
			self._report.error(expr, "'%s' is used before it is declared"%expr.name)

	def visit_BinaryExpression(self, expr:syntax.BinaryExpression, scope:Space, in_function:bool):
		self.visit(expr.left, scope, in_function)
		self.visit(expr.right, scope, in_function)

	def visit_ConditionalExpression(self, expr:syntax.ConditionalExpression, scope:Space, in_function:bool):
		self.visit(expr.test, scope, in_function)
		self.visit(expr.consequent, scope, in_function)
		self.visit(expr.alternate, scope, in_function)

	def visit_CallExpression(self, expr:syntax.CallExpression, scope:Space, in_function:bool):
		self.visit(expr.callee, scope, in_function)
		for arg in expr.arguments:
			self.visit(arg, scope, in_function)

	def visit_ArrayLiteral(self, expr:syntax.ArrayLiteral, scope:Space, in_function:bool):
		for item in expr.elements:
			self.visit(item, scope, in_function)

	def visit_MemberExpression(self, expr:syntax.MemberExpression, scope:Space, in_function:bool):
		self.visit(expr.object, scope, in_function)
		self.visit(expr.index, scope, in_function)

	def visit_NumericLiteral(self, expr, scope, in_function): pass
	def visit_StringLiteral(self, expr, scope, in_function): pass
	def visit_BooleanLiteral(self, expr, scope, in_function): pass
	def visit_Unrecognized(self, node, scope, in_function): pass
