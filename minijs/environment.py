"""
The typing environment: which type goes with which name, at this point in the walk.

Entering a function body pushes a frame; leaving it pops exactly that frame.
Each frame pairs a scope (a layer atop the enclosing scope) with the set of
non-generic types: the parameters of the functions we are currently inside.
Those must not be instantiated afresh when looked up, or else a function
could use its own parameter at two different types.
"""
from contextlib import contextmanager
from typing import Optional, Sequence
from .algebra import Type, Supply, fresh
from .ontology import Phrase
from .space import Space, Layer

class TypeEnvironment:
	_scope: Space[Type]
	_non_generic: frozenset[Type]
	_stack: list[tuple[Space[Type], frozenset[Type]]]

	def __init__(self, supply:Supply):
		self._supply = supply
		self._scope = Layer()
		self._non_generic = frozenset()
		self._stack = []

	def depth(self) -> int:
		return len(self._stack)

	def push_scope(self):
		self._stack.append((self._scope, self._non_generic))
		self._scope = self._scope.child()

	def pop_scope(self):
		if not self._stack:
			raise RuntimeError("pop_scope() without a matching push_scope()")
		self._scope, self._non_generic = self._stack.pop()

	@contextmanager
	def function_scope(self, param_types:Sequence[Type]=()):
		""" A fresh scope in which these parameter types are non-generic """
		self.push_scope()
		for typ in param_types:
			self.mark_non_generic(typ)
		try:
			yield self
		finally:
			self.pop_scope()

	def mark_non_generic(self, typ:Type):
		# Copy, never mutate: the enclosing frame still holds the old set.
		self._non_generic = self._non_generic | {typ}

	def is_non_generic(self, typ:Type) -> bool:
		return typ in self._non_generic

	def bind(self, name:str, typ:Type, phrase:Optional[Phrase]=None) -> Type:
		""" Into the current scope only. Raises space.AlreadyExists on a duplicate. """
		return self._scope.mount(name, phrase, typ)

	def lookup(self, name:str) -> Optional[Type]:
		"""
		Parameters in scope come back as-is: that's monomorphic use.
		Anything else gets a fresh instance, which is let-polymorphism.
		Returns None for a name nobody bound.
		"""
		if name not in self._scope:
			return None
		typ = self._scope.value(name)
		if self.is_non_generic(typ):
			return typ
		return fresh(typ, self._supply)
