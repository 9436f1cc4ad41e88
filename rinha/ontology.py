"""
The most-fundamental classes in the syntax class hierarchy live here,
separate from the concrete node types. Every node knows its location,
and every node compares structurally, location included.

That structural comparison is what Python's == does on terms.
It is NOT what the language's own == does; for that see values.same_value.
"""
from typing import Iterator
from .location import Location, NOWHERE

class Phrase:
	""" Anything with a location in some source file. """
	location: Location
	def span(self) -> tuple[int, int]: return self.location.start, self.location.end
	def path(self) -> str: return self.location.filename

class Term(Phrase):
	"""
	Both syntax and run-time value share this representation.
	Subclasses list their payload in _fields, in wire order.
	"""
	_fields: tuple[str, ...] = ()
	
	def children(self) -> Iterator[tuple[str, object]]:
		for name in self._fields: yield name, getattr(self, name)
	
	def __eq__(self, other):
		if type(self) is not type(other): return NotImplemented
		return self.location == other.location and all(
			getattr(self, name) == getattr(other, name) for name in self._fields
		)
	
	__hash__ = None
	
	def __repr__(self):
		inside = ", ".join("%s=%r"%pair for pair in self.children())
		return "%s(%s)"%(type(self).__name__, inside)

def located(location) -> Location:
	return NOWHERE if location is None else location
