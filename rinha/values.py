"""
What the run-time needs to know about values, apart from evaluating them:
how to name their kind, how to print them, and when two of them are the same.
"""
from .ontology import Term
from . import syntax

def kind_of(term:Term) -> str:
	return type(term).__name__

def same_value(a:Term, b:Term) -> bool:
	"""
	The language's own equality: kind and payload, recursively.
	Unlike Python's == on terms, source locations do not participate,
	so the same value produced at two different places compares equal.
	"""
	if type(a) is not type(b): return False
	for (_, x), (_, y) in zip(a.children(), b.children()):
		if not _same_part(x, y): return False
	return True

def _same_part(x, y) -> bool:
	if isinstance(x, Term): return isinstance(y, Term) and same_value(x, y)
	if isinstance(x, tuple):
		return isinstance(y, tuple) and len(x) == len(y) and all(map(_same_part, x, y))
	return type(x) is type(y) and x == y

def render(term:Term) -> str:
	""" The text that print writes, for the kinds print can write. """
	if isinstance(term, syntax.Bool): return "true" if term.value else "false"
	if isinstance(term, syntax.Int): return str(term.value)
	if isinstance(term, syntax.Str): return term.value
	if isinstance(term, syntax.Function): return "<function>"
	raise TypeError(kind_of(term))

PRINTABLE = (syntax.Int, syntax.Str, syntax.Bool, syntax.Function)
