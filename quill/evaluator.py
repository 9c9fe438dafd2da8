"""
The expression evaluator: reduce a phrase to a value, type-checking every operator on the way.

Operands always evaluate left first, then right, and only then get checked.
So a type error can come after the side effects of both operands have happened.
There is no undo.
"""
import math
import operator
from boozetools.support.foundation import Visitor

from . import syntax, primitive
from .syntax import Op
from .values import VALUE, ValueType, tag_of
from .environment import Environment
from .diagnostics import Fault, Report, TypeMismatch, BadAssignmentTarget, DivisionByZero


def _is_odd_integer(x: float) -> bool:
	return x.is_integer() and x % 2 == 1

def ieee_pow(base: float, exponent: float) -> float:
	""" Exponentiation the way C's pow() behaves: infinities and NaNs instead of exceptions. """
	try: return math.pow(base, exponent)
	except OverflowError:
		return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
	except ValueError:
		# Zero to a negative power, or a negative number to a fractional power.
		if base == 0:
			return math.copysign(math.inf, base) if _is_odd_integer(exponent) else math.inf
		return math.nan

EQUALITY = {Op.EQ: operator.eq, Op.NE: operator.ne}
COMPARABLE = {ValueType.NUM, ValueType.BOOL, ValueType.STR}

ORDERING = {
	Op.GT: operator.gt,
	Op.GE: operator.ge,
	Op.LT: operator.lt,
	Op.LE: operator.le,
}

ARITHMETIC = {
	Op.ADD: operator.add,
	Op.SUB: operator.sub,
	Op.MUL: operator.mul,
	Op.DIV: operator.truediv,
	Op.POW: ieee_pow,
}

# The compound-update family. `x ++ 3` adds three to x. It is not an increment.
UPDATE = {
	Op.ADD_ASSIGN: operator.add,
	Op.SUB_ASSIGN: operator.sub,
	Op.MUL_ASSIGN: operator.mul,
	Op.DIV_ASSIGN: operator.truediv,
}

class Evaluator(Visitor):
	"""
	Built-ins get a reference to this object so they can evaluate their own arguments,
	and so they can find the report when they need to complain out loud.
	"""
	def __init__(self, environment: Environment, report: Report = None):
		self.environment = environment
		self.report = report or Report()

	def evaluate(self, expr: syntax.ValueExpression) -> VALUE:
		try: return self.visit(expr)
		except Fault as fault:
			fault.locate(expr.where)
			raise

	def visit_Literal(self, expr: syntax.Literal) -> VALUE:
		return expr.value

	def visit_Lookup(self, expr: syntax.Lookup) -> VALUE:
		return self.environment.lookup(expr.name).value

	def visit_Call(self, expr: syntax.Call) -> VALUE:
		builtin = primitive.lookup(expr.name)
		return builtin(self, expr)

	def visit_BinExp(self, expr: syntax.BinExp) -> VALUE:
		op = expr.op
		if op is Op.ASSIGN: return self._assign(expr)
		if op in UPDATE: return self._update(expr)
		lhs = self.evaluate(expr.lhs)
		rhs = self.evaluate(expr.rhs)
		if op in EQUALITY: return self._equality(op, lhs, rhs)
		if op in ORDERING: return self._ordering(op, lhs, rhs)
		return self._arithmetic(op, lhs, rhs)

	@staticmethod
	def _equality(op: Op, lhs: VALUE, rhs: VALUE) -> bool:
		tag = tag_of(lhs)
		if tag_of(rhs) is not tag:
			raise TypeMismatch(tag, "right side of '%s' operation, expected same as left side" % op)
		if tag not in COMPARABLE:
			raise TypeMismatch(tag, "left side of '%s' operation" % op)
		return EQUALITY[op](lhs, rhs)

	@staticmethod
	def _ordering(op: Op, lhs: VALUE, rhs: VALUE) -> bool:
		tag = tag_of(lhs)
		if tag_of(rhs) is not tag:
			raise TypeMismatch(tag, "right side of '%s' operation, expected same as left side" % op)
		if tag is not ValueType.NUM:
			raise TypeMismatch(tag, "left side of '%s' operation" % op)
		return ORDERING[op](lhs, rhs)

	@staticmethod
	def _arithmetic(op: Op, lhs: VALUE, rhs: VALUE) -> float:
		if tag_of(lhs) is not ValueType.NUM:
			raise TypeMismatch(tag_of(lhs), "left side of '%s' operation" % op)
		if tag_of(rhs) is not ValueType.NUM:
			raise TypeMismatch(tag_of(rhs), "right side of '%s' operation, expected same as left side" % op)
		if op is Op.DIV and rhs == 0:
			raise DivisionByZero()
		return ARITHMETIC[op](lhs, rhs)

	@staticmethod
	def _target(expr: syntax.BinExp) -> str:
		if not isinstance(expr.lhs, syntax.Lookup):
			raise BadAssignmentTarget(str(expr.op))
		return expr.lhs.name

	def _assign(self, expr: syntax.BinExp) -> VALUE:
		name = self._target(expr)
		value = self.evaluate(expr.rhs)
		return self.environment.assign(name, value)

	def _update(self, expr: syntax.BinExp) -> VALUE:
		""" Combine the right side into the variable. The result is the right side, not the new total. """
		op = expr.op
		name = self._target(expr)
		value = self.evaluate(expr.rhs)
		variable = self.environment.lookup(name)
		tag = tag_of(value)
		if tag is not tag_of(variable.value):
			raise TypeMismatch(tag, "'%s' assignment" % op)
		if tag is not ValueType.NUM:
			raise TypeMismatch(tag, "left side of '%s' assignment" % op)
		if op is Op.DIV_ASSIGN and value == 0:
			raise DivisionByZero()
		variable.value = UPDATE[op](variable.value, value)
		return value
