"""
The scope chain, as an arena of frames.

Each frame is addressed by an integer handle and holds its own bindings
plus the handle of its parent. Lookup is the canonical list-structured search.
An Environment is just a handle into some arena, so it may be freely shared:
every sub-evaluation of one call body sees (and writes to) the same frame.
"""
from typing import Optional
from .ontology import Term

class Arena:
	"""
	Frames live in parallel lists. A released frame's slot goes on a free list
	for reuse, and free slots at the top of the lists are dropped altogether.
	len() counts the frames still in use.
	"""
	def __init__(self):
		self._bindings: list[dict[str, Term]] = []
		self._parents: list[Optional[int]] = []
		self._free: set[int] = set()
	
	def __len__(self): return len(self._bindings) - len(self._free)
	
	def allocate(self, parent:Optional[int]) -> int:
		if self._free:
			handle = self._free.pop()
			self._parents[handle] = parent
			return handle
		handle = len(self._bindings)
		self._bindings.append({})
		self._parents.append(parent)
		return handle
	
	def release(self, handle:int):
		""" Nothing may refer to this frame afterwards, including any child frame. """
		self._bindings[handle].clear()
		self._parents[handle] = None
		self._free.add(handle)
		while self._bindings and len(self._bindings) - 1 in self._free:
			self._free.remove(len(self._bindings) - 1)
			self._bindings.pop()
			self._parents.pop()
	
	def parent(self, handle:int) -> Optional[int]: return self._parents[handle]
	def local(self, handle:int) -> dict[str, Term]: return self._bindings[handle]
	
	def search(self, handle:Optional[int], name:str) -> Optional[Term]:
		while handle is not None:
			try: return self._bindings[handle][name]
			except KeyError: handle = self._parents[handle]
		return None

class Environment:
	"""
	One level of the variable-scope chain.
	
	Binding is first-write-wins within a frame: assigning a name that
	the local frame already holds leaves the earlier binding in place.
	Nothing ever writes into a parent frame.
	"""
	__slots__ = ("arena", "handle")
	
	def __init__(self, arena:Arena, handle:int):
		self.arena = arena
		self.handle = handle
	
	@staticmethod
	def fresh() -> "Environment":
		arena = Arena()
		return Environment(arena, arena.allocate(None))
	
	def extend(self) -> "Environment":
		return Environment(self.arena, self.arena.allocate(self.handle))
	
	def release(self):
		self.arena.release(self.handle)
	
	def parent(self) -> Optional["Environment"]:
		handle = self.arena.parent(self.handle)
		return None if handle is None else Environment(self.arena, handle)
	
	def holds(self, name:str) -> bool: return name in self.arena.local(self.handle)
	
	def get(self, name:str) -> Optional[Term]:
		return self.arena.search(self.handle, name)
	
	def set(self, name:str, term:Term) -> Term:
		return self.arena.local(self.handle).setdefault(name, term)
	
	def __eq__(self, other):
		return isinstance(other, Environment) and self.arena is other.arena and self.handle == other.handle
	
	def __hash__(self): return hash((id(self.arena), self.handle))
	
	def __repr__(self): return "<Environment #%d of %d>"%(self.handle, len(self.arena))
