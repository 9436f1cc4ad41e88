"""
The parser proper lives elsewhere and hands us its tree as a JSON document.
This module turns that document into syntax nodes, checking the shape as it goes,
and can also write a tree back out in the same shape.
"""
import json
from pathlib import Path
from typing import Any, Optional, Union
from .location import Location
from .ontology import Term
from . import syntax
from .diagnostics import Report

INT32_MIN, INT32_MAX = -(1 << 31), (1 << 31) - 1

class MalformedDocument(ValueError):
	""" The document is valid JSON, but not a valid tree. """
	def __init__(self, trail:str, problem:str):
		super().__init__("$%s: %s"%(trail, problem))
		self.trail, self.problem = trail, problem

class _Reader:
	""" Walks the document, remembering the path to where it is for the sake of error messages. """
	
	def __init__(self, trail:str=""):
		self.trail = trail
	
	def fail(self, problem:str):
		raise MalformedDocument(self.trail, problem)
	
	def field(self, data:dict, name:str):
		try: return data[name]
		except KeyError: self.fail("missing field %r"%name)
	
	def into(self, key) -> "_Reader":
		step = "[%d]"%key if isinstance(key, int) else "."+key
		return _Reader(self.trail + step)
	
	def object(self, data) -> dict:
		if not isinstance(data, dict): self.fail("expected an object, got %s"%type(data).__name__)
		return data
	
	def string(self, data:dict, name:str) -> str:
		value = self.field(data, name)
		if not isinstance(value, str): self.into(name).fail("expected a string")
		return value
	
	def location(self, data:dict) -> Location:
		sub = self.into("location")
		loc = sub.object(self.field(data, "location"))
		for key in ("start", "end"):
			value = sub.field(loc, key)
			if not isinstance(value, int) or isinstance(value, bool) or value < 0:
				sub.into(key).fail("expected a non-negative integer")
		return Location(loc["start"], loc["end"], sub.string(loc, "filename"))
	
	def term(self, data) -> Term:
		data = self.object(data)
		kind = self.string(data, "kind")
		try: method = getattr(self, "read_"+kind)
		except AttributeError: self.into("kind").fail("unknown kind %r"%kind)
		return method(data, self.location(data))
	
	def child(self, data:dict, name:str) -> Term:
		return self.into(name).term(self.field(data, name))
	
	def var(self, data) -> syntax.Var:
		data = self.object(data)
		if data.get("kind", "Var") != "Var": self.fail("expected a Var")
		return syntax.Var(self.string(data, "text"), self.location(data))
	
	def read_Error(self, data, loc): return syntax.Error(self.string(data, "message"), self.string(data, "full_text"), loc)
	
	def read_Int(self, data, loc):
		value = self.field(data, "value")
		if not isinstance(value, int) or isinstance(value, bool):
			self.into("value").fail("expected an integer")
		if not INT32_MIN <= value <= INT32_MAX:
			self.into("value").fail("%d does not fit in 32 bits"%value)
		return syntax.Int(value, loc)
	
	def read_Str(self, data, loc): return syntax.Str(self.string(data, "value"), loc)
	
	def read_Bool(self, data, loc):
		value = self.field(data, "value")
		if not isinstance(value, bool): self.into("value").fail("expected a boolean")
		return syntax.Bool(value, loc)
	
	def read_Var(self, data, loc): return syntax.Var(self.string(data, "text"), loc)
	
	def read_Function(self, data, loc):
		params = self.field(data, "parameters")
		if not isinstance(params, list): self.into("parameters").fail("expected a list")
		sub = self.into("parameters")
		parameters = [sub.into(i).var(p) for i, p in enumerate(params)]
		return syntax.Function(parameters, self.child(data, "value"), loc)
	
	def read_Call(self, data, loc):
		args = self.field(data, "arguments")
		if not isinstance(args, list): self.into("arguments").fail("expected a list")
		sub = self.into("arguments")
		arguments = [sub.into(i).term(a) for i, a in enumerate(args)]
		return syntax.Call(self.child(data, "callee"), arguments, loc)
	
	def read_Binary(self, data, loc):
		tag = self.field(data, "op")
		try: op = syntax.BinaryOp(tag)
		except ValueError: self.into("op").fail("unknown operator %r"%(tag,))
		return syntax.Binary(self.child(data, "lhs"), op, self.child(data, "rhs"), loc)
	
	def read_Let(self, data, loc):
		name = self.into("name").var(self.field(data, "name"))
		return syntax.Let(name, self.child(data, "value"), self.child(data, "next"), loc)
	
	def read_If(self, data, loc):
		return syntax.If(self.child(data, "condition"), self.child(data, "then"), self.child(data, "otherwise"), loc)
	
	def read_Print(self, data, loc): return syntax.Print(self.child(data, "value"), loc)
	def read_First(self, data, loc): return syntax.First(self.child(data, "value"), loc)
	def read_Second(self, data, loc): return syntax.Second(self.child(data, "value"), loc)
	
	def read_Tuple(self, data, loc):
		return syntax.Tuple(self.child(data, "first"), self.child(data, "second"), loc)

def parse_term(data:Any) -> Term:
	return _Reader().term(data)

def parse_document(data:Any) -> syntax.File:
	reader = _Reader()
	data = reader.object(data)
	name = reader.string(data, "name")
	expression = reader.into("expression").term(reader.field(data, "expression"))
	return syntax.File(name, expression, reader.location(data))

def parse_text(text:str) -> syntax.File:
	""" Raises json.JSONDecodeError or MalformedDocument if the text is not a proper document. """
	return parse_document(json.loads(text))

def load_file(path:Union[str, Path], report:Report) -> Optional[syntax.File]:
	""" Read and convert a document, or else file a complaint with the report. """
	path = Path(path)
	report.info("Loading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh: text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	except OSError as ex:
		report.broken_file(path, str(ex))
		return None
	try: return parse_text(text)
	except json.JSONDecodeError as ex:
		report.broken_file(path, "Not valid JSON: %s"%ex)
	except MalformedDocument as ex:
		report.broken_file(path, "Not a valid syntax tree at %s"%ex)
	except RecursionError:
		report.broken_file(path, "The syntax tree is nested too deeply to read; try a larger --recursion-limit.")
	return None

###############################################################################

def as_document(term:Term) -> dict:
	""" The inverse of parse_term: a tree in wire shape, ready for json.dumps """
	doc = {"kind": type(term).__name__}
	for name, value in term.children():
		doc[_WIRE_NAMES.get(name, name)] = _as_wire(value)
	doc["location"] = _as_wire(term.location)
	return doc

def _as_wire(value):
	if isinstance(value, Term): return as_document(value)
	if isinstance(value, Location): return value._asdict()
	if isinstance(value, syntax.BinaryOp): return value.value
	if isinstance(value, tuple): return [_as_wire(v) for v in value]
	return value

_WIRE_NAMES = {"body": "value"}
