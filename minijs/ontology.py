"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest so that the type algebra, the diagnostics,
and the passes can all refer to them without circular imports.

Every node may carry a source position, which is just the integer
offset of its first character in the source text. Trees built by
some other parser may omit positions, and everything downstream
must cope with that.
"""
from typing import Optional

class Phrase:
	""" Anything an issue can point at. """
	position: Optional[int] = None

	def offset(self) -> Optional[int]:
		""" Return the offset of the leftmost character of this phrase, if known """
		return self.position

	def width(self) -> int:
		""" How many characters to underline when illustrating an issue """
		return 1

class Node(Phrase):
	"""
	Base class for all the parse-nodes.
	The class name is the node kind; the inference engine dispatches on it.
	Class-level annotations make peace with the IDE wherever later passes add fields.
	"""
	inferred_type: "Type"  # The inference engine fills this in.

	@property
	def kind(self) -> str:
		return type(self).__name__

class ValueExpression(Node): pass

class Statement(Node): pass

class TypeExpression(Phrase): pass
