"""
The set of tree-nodes, in simple form.
The front-end builds these from the wire document; the evaluator consumes them.
Values are just the self-evaluating subset of the same nodes.
"""
from enum import Enum
from typing import Sequence
from .location import Location
from .ontology import Term, located

class BinaryOp(Enum):
	ADD = "Add"
	SUB = "Sub"
	MUL = "Mul"
	DIV = "Div"
	REM = "Rem"
	EQ = "Eq"
	NEQ = "Neq"
	LT = "Lt"
	GT = "Gt"
	LTE = "Lte"
	GTE = "Gte"
	AND = "And"
	OR = "Or"

class Error(Term):
	_fields = ("message", "full_text")
	def __init__(self, message:str, full_text:str, location:Location=None):
		self.message, self.full_text = message, full_text
		self.location = located(location)

class Int(Term):
	_fields = ("value",)
	def __init__(self, value:int, location:Location=None):
		assert isinstance(value, int) and not isinstance(value, bool), value
		self.value = value
		self.location = located(location)

class Str(Term):
	_fields = ("value",)
	def __init__(self, value:str, location:Location=None):
		assert isinstance(value, str), value
		self.value = value
		self.location = located(location)

class Bool(Term):
	_fields = ("value",)
	def __init__(self, value:bool, location:Location=None):
		assert isinstance(value, bool), value
		self.value = value
		self.location = located(location)

class Var(Term):
	_fields = ("text",)
	def __init__(self, text:str, location:Location=None):
		assert isinstance(text, str), text
		self.text = text
		self.location = located(location)

class Function(Term):
	_fields = ("parameters", "body")
	def __init__(self, parameters:Sequence[Var], body:Term, location:Location=None):
		assert all(isinstance(p, Var) for p in parameters), parameters
		self.parameters = tuple(parameters)
		self.body = body
		self.location = located(location)
	def arity(self): return len(self.parameters)

class Call(Term):
	_fields = ("callee", "arguments")
	def __init__(self, callee:Term, arguments:Sequence[Term], location:Location=None):
		self.callee = callee
		self.arguments = tuple(arguments)
		self.location = located(location)

class Binary(Term):
	_fields = ("lhs", "op", "rhs")
	def __init__(self, lhs:Term, op:BinaryOp, rhs:Term, location:Location=None):
		assert isinstance(op, BinaryOp), op
		self.lhs, self.op, self.rhs = lhs, op, rhs
		self.location = located(location)

class Let(Term):
	_fields = ("name", "value", "next")
	def __init__(self, name:Var, value:Term, next:Term, location:Location=None):
		assert isinstance(name, Var), name
		self.name, self.value, self.next = name, value, next
		self.location = located(location)

class If(Term):
	_fields = ("condition", "then", "otherwise")
	def __init__(self, condition:Term, then:Term, otherwise:Term, location:Location=None):
		self.condition, self.then, self.otherwise = condition, then, otherwise
		self.location = located(location)

class Print(Term):
	_fields = ("value",)
	def __init__(self, value:Term, location:Location=None):
		self.value = value
		self.location = located(location)

class First(Term):
	_fields = ("value",)
	def __init__(self, value:Term, location:Location=None):
		self.value = value
		self.location = located(location)

class Second(Term):
	_fields = ("value",)
	def __init__(self, value:Term, location:Location=None):
		self.value = value
		self.location = located(location)

class Tuple(Term):
	_fields = ("first", "second")
	def __init__(self, first:Term, second:Term, location:Location=None):
		self.first, self.second = first, second
		self.location = located(location)

class File:
	""" The root of a document: a name and the one expression it holds. """
	def __init__(self, name:str, expression:Term, location:Location=None):
		self.name = name
		self.expression = expression
		self.location = located(location)
	def __repr__(self): return "<File %r>"%self.name

