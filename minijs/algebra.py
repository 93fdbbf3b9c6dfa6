"""
The value domain the type checker reasons over.

There are exactly four shapes of type:
	type variables, primitives, function types, and array types.

A type variable is a mutable slot: unification fills in `resolved`,
and `compress` shortens chains of resolved variables as it follows them.
That's the union-find half of the algorithm; the rest is in `unification`.

Design Note:
-------------
Variables are numbered by a `Supply` which belongs to one inference session.
There is no module-level counter, so repeated runs come out numbered alike.
"""
from itertools import count
from typing import Optional, Sequence

class Type:
	def visit(self, visitor): raise NotImplementedError(type(self))
	def __str__(self): return type_to_string(self)

class TypeVariable(Type):
	resolved: Optional[Type]
	def __init__(self, nr:int, name:Optional[str]=None):
		self.nr = nr
		self.name = name or "t%d"%nr
		self.resolved = None
	def __repr__(self): return "<%s>"%self.name
	def visit(self, visitor): return visitor.on_variable(self)

class Primitive(Type):
	""" Primitives are immutable, so one instance of each serves everywhere. """
	def __init__(self, name:str): self.name = name
	def __repr__(self): return self.name
	def visit(self, visitor): return visitor.on_primitive(self)

NUMBER = Primitive("Number")
FLOAT = Primitive("Float")
BOOL = Primitive("Bool")
STRING = Primitive("String")
VOID = Primitive("Void")

class Function(Type):
	def __init__(self, params:Sequence[Type], result:Type):
		self.params, self.result = tuple(params), result
	def __repr__(self): return "(%s) -> %r"%(", ".join(map(repr, self.params)), self.result)
	def visit(self, visitor): return visitor.on_function(self)

class ArrayOf(Type):
	def __init__(self, element:Type): self.element = element
	def __repr__(self): return "Array<%r>"%self.element
	def visit(self, visitor): return visitor.on_array(self)

class Supply:
	""" Hands out fresh type variables, numbered from zero. One per inference session. """
	def __init__(self):
		self._counter = count()
	def __call__(self, name:Optional[str]=None) -> TypeVariable:
		return TypeVariable(next(self._counter), name)

#########################

def compress(typ:Type) -> Type:
	"""
	Follow the chain of resolved variables to the most specific type known,
	pointing every variable along the way straight at the answer.
	"""
	if isinstance(typ, TypeVariable) and typ.resolved is not None:
		typ.resolved = compress(typ.resolved)
		return typ.resolved
	return typ

def occurs_in(variable:TypeVariable, typ:Type) -> bool:
	typ = compress(typ)
	if typ is variable:
		return True
	if isinstance(typ, Function):
		return any(occurs_in(variable, p) for p in typ.params) or occurs_in(variable, typ.result)
	if isinstance(typ, ArrayOf):
		return occurs_in(variable, typ.element)
	return False

#########################

class TypeVisitor:
	def on_variable(self, v:TypeVariable): pass
	def on_primitive(self, p:Primitive): pass
	def on_function(self, f:Function): pass
	def on_array(self, a:ArrayOf): pass

class Render(TypeVisitor):
	""" Return a string representation of the term. """
	def on_variable(self, v: TypeVariable):
		return v.name
	def on_primitive(self, p: Primitive):
		return p.name
	def on_function(self, f: Function):
		params = ", ".join(self._param(p) for p in f.params)
		return "(%s) -> %s"%(params, compress(f.result).visit(self))
	def _param(self, typ:Type):
		typ = compress(typ)
		text = typ.visit(self)
		return "(%s)"%text if isinstance(typ, Function) else text
	def on_array(self, a: ArrayOf):
		return "Array<%s>"%compress(a.element).visit(self)

def type_to_string(typ:Type) -> str:
	return compress(typ).visit(Render())

class Freshen(TypeVisitor):
	"""
	Copy the structure of a type, replacing each unbound variable
	with a brand-new one. The same variable always maps to the same
	replacement within one instantiation.
	"""
	def __init__(self, supply:Supply):
		self._supply = supply
		self._gamma = {}
	def on_variable(self, v: TypeVariable):
		if v not in self._gamma:
			self._gamma[v] = self._supply()
		return self._gamma[v]
	def on_primitive(self, p: Primitive):
		return p
	def on_function(self, f: Function):
		return Function([compress(p).visit(self) for p in f.params], compress(f.result).visit(self))
	def on_array(self, a: ArrayOf):
		return ArrayOf(compress(a.element).visit(self))

def fresh(typ:Type, supply:Supply) -> Type:
	""" This is where let-polymorphism comes from. """
	return compress(typ).visit(Freshen(supply))
