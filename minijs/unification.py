"""
The unification approach to type-inference.

`Unifier.unify` constrains two types to be equal.
When that cannot happen, it files an issue with the session report
and carries on: inference always continues with best-effort types,
so one mistake does not snowball into a pile of unrelated complaints.
"""
from typing import Optional
from .algebra import Type, TypeVariable, Primitive, Function, ArrayOf, compress, occurs_in, type_to_string
from .diagnostics import Report
from .ontology import Phrase

class Unifier:
	def __init__(self, report:Report):
		self._report = report

	def unify(self, t1:Type, t2:Type, node:Optional[Phrase], context:Optional[str]=None):
		"""
		The optional context says what the two types belong to,
		as in "the ternary condition must be Bool",
		and gets folded into any complaint.
		"""
		t1, t2 = compress(t1), compress(t2)
		if t1 is t2:
			return
		elif isinstance(t1, TypeVariable):
			self._bind(t1, t2, node, context)
		elif isinstance(t2, TypeVariable):
			self._bind(t2, t1, node, context)
		elif isinstance(t1, Function) and isinstance(t2, Function):
			if len(t1.params) != len(t2.params):
				self._gripe(node, context, "Function parameter count mismatch: %s vs %s", t1, t2)
				return
			for p1, p2 in zip(t1.params, t2.params):
				self.unify(p1, p2, node, context)
			self.unify(t1.result, t2.result, node, context)
		elif isinstance(t1, ArrayOf) and isinstance(t2, ArrayOf):
			self.unify(t1.element, t2.element, node, context)
		elif isinstance(t1, Primitive) and isinstance(t2, Primitive):
			if t1.name != t2.name:
				self._gripe(node, context, "Type mismatch: %s is not compatible with %s", t1, t2)
		else:
			self._gripe(node, context, "Cannot unify %s with %s", t1, t2)

	def _bind(self, variable:TypeVariable, typ:Type, node, context):
		# A variable cannot stand for something which contains it.
		if occurs_in(variable, typ):
			self._gripe(node, context, "Infinite unification: cannot unify %s with %s", variable, typ)
		else:
			variable.resolved = typ

	def _gripe(self, node, context, pattern, t1, t2):
		message = pattern%(type_to_string(t1), type_to_string(t2))
		if context:
			message = "%s (%s)"%(message, context)
		self._report.error(node, message)
