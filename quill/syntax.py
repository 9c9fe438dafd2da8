"""
The set of parse-nodes in simple form.
An external parser builds these bottom-up and tags each one with its location.
The run-time assumes the tree is structurally sound: conditions are never missing, and so forth.
"""
from enum import Enum
from typing import Any, Optional, Sequence
from .location import Where, NOWHERE
from .ontology import ValueExpression, Statement


class Op(Enum):
	""" Binary operators, by glyph. Mind the compound-update family: `++` is add-assign, not increment. """
	EQ = "=="
	NE = "!="
	GT = ">"
	GE = ">="
	LT = "<"
	LE = "<="

	ASSIGN = "="
	ADD_ASSIGN = "++"
	SUB_ASSIGN = "--"
	MUL_ASSIGN = "**"
	DIV_ASSIGN = "//"

	ADD = "+"
	SUB = "-"
	MUL = "*"
	DIV = "/"
	POW = "^"

	def __str__(self): return self.value

###############################################################################

class Literal(ValueExpression):
	def __init__(self, value: Any, where: Where = NOWHERE):
		super().__init__(where)
		# Numbers are doubles at run-time, whatever the parser hands over.
		if type(value) is int: value = float(value)
		self.value = value
	def __str__(self): return "<Literal %r>" % self.value

class Lookup(ValueExpression):
	""" A bare identifier in value context. Also the only acceptable target of assignment. """
	def __init__(self, name: str, where: Where = NOWHERE):
		super().__init__(where)
		self.name = name
	def __str__(self): return "<ref:%s>" % self.name

class Call(ValueExpression):
	def __init__(self, name: str, args: Sequence[ValueExpression], where: Where = NOWHERE):
		super().__init__(where)
		self.name, self.args = name, tuple(args)
	def __str__(self):
		return "%s(%s)" % (self.name, ', '.join(map(str, self.args)))

class BinExp(ValueExpression):
	def __init__(self, op: Op, lhs: ValueExpression, rhs: ValueExpression, where: Where = NOWHERE):
		super().__init__(where)
		assert isinstance(op, Op), op
		self.op, self.lhs, self.rhs = op, lhs, rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op, self.rhs)

###############################################################################

class ExprStmt(Statement):
	def __init__(self, expr: ValueExpression, where: Where = NOWHERE):
		super().__init__(where)
		self.expr = expr

class Let(Statement):
	def __init__(self, name: str, expr: ValueExpression, where: Where = NOWHERE):
		super().__init__(where)
		self.name, self.expr = name, expr

class If(Statement):
	"""
	An else-if chain hangs off `alternative`, which is another If.
	The last link in the chain carries the final else-body in `otherwise`, which may be empty.
	"""
	def __init__(
			self,
			cond: ValueExpression,
			body: Sequence[Statement],
			alternative: Optional["If"] = None,
			otherwise: Sequence[Statement] = (),
			where: Where = NOWHERE,
	):
		super().__init__(where)
		assert alternative is None or isinstance(alternative, If), alternative
		self.cond = cond
		self.body = tuple(body)
		self.alternative = alternative
		self.otherwise = tuple(otherwise)

class While(Statement):
	def __init__(self, cond: ValueExpression, body: Sequence[Statement], where: Where = NOWHERE):
		super().__init__(where)
		self.cond, self.body = cond, tuple(body)

class For(Statement):
	def __init__(
			self,
			init: Statement,
			cond: ValueExpression,
			step: Statement,
			body: Sequence[Statement],
			where: Where = NOWHERE,
	):
		super().__init__(where)
		self.init, self.cond, self.step = init, cond, step
		self.body = tuple(body)

PROGRAM = Sequence[Statement]
