"""
Direct interpretation: one recursive walk over the tree, threading the environment.

Failures in the evaluated program are ordinary results: Error terms.
Each consumer checks what it received. Only the binary operators
short-circuit on an upstream error; everything else wraps what it got
with `error`, which leaves an Error alone.

Function calls extend the environment of the call site, not the one where
the function literal appeared. Free variables in a body therefore resolve
dynamically, against whatever is in scope where the call happens.
"""
import operator
from typing import Callable, NamedTuple, Optional
from boozetools.support.foundation import Visitor
from .ontology import Term
from .environment import Environment
from .syntax import (
	Error, Int, Str, Bool, Var, Function, Call, Binary, BinaryOp,
	Let, If, Print, First, Second, Tuple, File,
)
from .values import same_value, render, PRINTABLE

DISCARD = "_"

OUTPUT = Callable[[str], None]

def error(term:Term, message:str, full_text:str) -> Term:
	""" Rewrite a term as an Error at the same place. An Error passes through as-is. """
	if isinstance(term, Error): return term
	return Error(message, full_text, term.location)

###############################################################################

_MODULUS = 1 << 32
_HALF = 1 << 31

def _wrap(n:int) -> int:
	""" Two's-complement 32-bit wrap-around """
	return (n + _HALF) % _MODULUS - _HALF

def _quotient(a:int, b:int) -> int:
	# Truncates toward zero. Raises ZeroDivisionError when b == 0.
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

def _div(a:int, b:int) -> int: return _wrap(_quotient(a, b))
def _rem(a:int, b:int) -> int: return _wrap(a - b * _quotient(a, b))

class Operator(NamedTuple):
	lhs: Optional[type]  # None accepts any kind, and compares whole terms.
	rhs: Optional[type]
	result: type
	compute: Callable
	
	def payload(self, kind:Optional[type], term:Term):
		return term if kind is None else term.value

OPERATORS: dict[BinaryOp, Operator] = {
	BinaryOp.ADD: Operator(Int, Int, Int, lambda a, b: _wrap(a + b)),
	BinaryOp.SUB: Operator(Int, Int, Int, lambda a, b: _wrap(a - b)),
	BinaryOp.MUL: Operator(Int, Int, Int, lambda a, b: _wrap(a * b)),
	BinaryOp.DIV: Operator(Int, Int, Int, _div),
	BinaryOp.REM: Operator(Int, Int, Int, _rem),
	BinaryOp.EQ: Operator(None, None, Bool, same_value),
	BinaryOp.NEQ: Operator(None, None, Bool, lambda a, b: not same_value(a, b)),
	BinaryOp.LT: Operator(Int, Int, Bool, operator.lt),
	BinaryOp.GT: Operator(Int, Int, Bool, operator.gt),
	BinaryOp.LTE: Operator(Int, Int, Bool, operator.le),
	BinaryOp.GTE: Operator(Int, Int, Bool, operator.ge),
	BinaryOp.AND: Operator(Bool, Bool, Bool, operator.and_),
	BinaryOp.OR: Operator(Bool, Bool, Bool, operator.or_),
}

_BY_ZERO = {
	BinaryOp.DIV: "divide",
	BinaryOp.REM: "take the remainder of",
}

def _expected_operand(kind:type) -> str:
	return 'Expected operand of type "%s"'%kind.__name__

###############################################################################

class Evaluator(Visitor):
	"""
	Evaluation is total: every term reduces to some term, perhaps an Error.
	Print writes through the output sink given at construction,
	one call per line, without the line terminator.
	"""
	
	def __init__(self, output:OUTPUT=print):
		self._output = output
	
	def evaluate(self, term:Term, env:Environment) -> Term:
		return self.visit(term, env)
	
	@staticmethod
	def visit_Int(term:Term, env:Environment): return term
	visit_Str = visit_Bool = visit_Function = visit_Error = visit_Int
	
	def visit_Var(self, term:Var, env:Environment):
		found = env.get(term.text)
		if found is None:
			return error(term, "Undefined variable", 'Undefined variable "%s"'%term.text)
		return self.visit(found, env)
	
	def visit_Let(self, term:Let, env:Environment):
		value = self.visit(term.value, env)
		if term.name.text != DISCARD:
			env.set(term.name.text, value)
		return self.visit(term.next, env)
	
	def visit_If(self, term:If, env:Environment):
		condition = self.visit(term.condition, env)
		if isinstance(condition, Bool):
			return self.visit(term.then if condition.value else term.otherwise, env)
		return error(condition, "Unexpected term", 'Expected condition of type "Bool"')
	
	def visit_Call(self, term:Call, env:Environment):
		callee = self.visit(term.callee, env)
		if not isinstance(callee, Function):
			return error(callee, "Unexpected term", "Expected function body or reference")
		expected, found = callee.arity(), len(term.arguments)
		if expected != found:
			site = Call(callee, term.arguments, term.location)
			return error(site, "Argument count mismatch", "Expected %d arguments, found %d"%(expected, found))
		# Results never refer to frames, so the call frame dies with the call.
		inner = env.extend()
		try:
			# Each argument is evaluated in the new frame as its parameter is bound.
			for param, arg in zip(callee.parameters, term.arguments):
				inner.set(param.text, self.visit(arg, inner))
			return self.visit(callee.body, inner)
		finally: inner.release()
	
	def visit_Binary(self, term:Binary, env:Environment):
		rule = OPERATORS[term.op]
		lhs = self.visit(term.lhs, env)
		if isinstance(lhs, Error): return lhs
		if rule.lhs is not None and not isinstance(lhs, rule.lhs):
			return error(lhs, "Unexpected left operand", _expected_operand(rule.lhs))
		rhs = self.visit(term.rhs, env)
		if isinstance(rhs, Error): return rhs
		if rule.rhs is not None and not isinstance(rhs, rule.rhs):
			return error(rhs, "Unexpected right operand", _expected_operand(rule.rhs))
		a, b = rule.payload(rule.lhs, lhs), rule.payload(rule.rhs, rhs)
		try: value = rule.compute(a, b)
		except ZeroDivisionError:
			full_text = "Attempted to %s %d by zero"%(_BY_ZERO[term.op], a)
			return Error("Division by zero", full_text, term.location)
		return rule.result(value, term.location)
	
	def visit_Print(self, term:Print, env:Environment):
		value = self.visit(term.value, env)
		if isinstance(value, Error): return value
		if isinstance(value, PRINTABLE):
			self._output(render(value))
			return value
		return error(value, "Unexpected term", "The term is not a first class value")
	
	def visit_First(self, term:First, env:Environment):
		value = self.visit(term.value, env)
		if isinstance(value, Tuple): return self.visit(value.first, env)
		return error(value, "Unexpected term", "The first function expects a tuple")
	
	def visit_Second(self, term:Second, env:Environment):
		value = self.visit(term.value, env)
		if isinstance(value, Tuple): return self.visit(value.second, env)
		return error(value, "Unexpected term", "The second function expects a tuple")
	
	def visit_Tuple(self, term:Tuple, env:Environment):
		first = self.visit(term.first, env)
		second = self.visit(term.second, env)
		return Tuple(first, second, term.location)

def run_program(program, output:OUTPUT=print) -> Term:
	""" Evaluate a whole document (or a bare term) in a fresh root environment. """
	expression = program.expression if isinstance(program, File) else program
	return Evaluator(output).evaluate(expression, Environment.fresh())
