"""
Points and spans within the source text, as the parser reported them.
The parser worked in character offsets, so that's what we carry around.
"""
from typing import NamedTuple

class Location(NamedTuple):
	""" Aimed at whatever prints error messages """
	start: int = 0
	end: int = 0
	filename: str = ""
	
	def merge(self, other:"Location") -> "Location":
		assert self.filename == other.filename, (self.filename, other.filename)
		return Location(self.start, other.end, self.filename)
	
	def __str__(self):
		return "%s:%d:%d"%(self.filename, self.start, self.end)

NOWHERE = Location()
