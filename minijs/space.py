"""
Name-spaces with support for nested scopes.

A `Layer` holds the names declared at one level of nesting.
A `Chain` puts a layer atop its enclosing space: lookups fall through,
but new names only ever go into the top layer, so the parent is never disturbed.
Both the name resolver and the type environment are built on these.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar
from .ontology import Phrase

class AlreadyExists(KeyError): pass

T = TypeVar("T")

class Space(ABC, Generic[T]):
	@abstractmethod
	def __contains__(self, key: str) -> bool: pass

	@abstractmethod
	def value(self, key: str) -> T: pass

	@abstractmethod
	def locate(self, key: str) -> Optional[Phrase]: pass

	@abstractmethod
	def mount(self, key:str, phrase:Optional[Phrase], value:T) -> T: pass

	def child(self) -> "Chain[T]":
		return Chain(Layer(), self)


class Layer(Space[T]):
	""" Lightly enhanced dictionary: It does not like duplicate keys. """
	_locate: dict[str, Optional[Phrase]]
	_value: dict[str, T]

	def __init__(self):
		self._locate, self._value = {}, {}

	def __contains__(self, key: str) -> bool:
		return key in self._value

	def value(self, key: str) -> T:
		return self._value[key]

	def locate(self, key: str) -> Optional[Phrase]:
		return self._locate[key]

	def mount(self, key:str, phrase:Optional[Phrase], value:T) -> T:
		if key in self._value:
			raise AlreadyExists(key)
		else:
			self._locate[key] = phrase
			self._value[key] = value
			return value


class Chain(Space[T]):
	def __init__(self, top:Layer[T], rest:Space[T]):
		self.top = top
		self._rest = rest

	def __contains__(self, key: str) -> bool:
		return key in self.top or key in self._rest

	def value(self, key: str) -> T:
		if key in self.top: return self.top.value(key)
		else: return self._rest.value(key)

	def locate(self, key: str) -> Optional[Phrase]:
		if key in self.top: return self.top.locate(key)
		else: return self._rest.locate(key)

	def mount(self, key:str, phrase:Optional[Phrase], value:T) -> T:
		return self.top.mount(key, phrase, value)
