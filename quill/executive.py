"""
This is the overall control for the run-time: the statement executor,
and `run_program`, which is where a fault finally turns into an exit status.
"""
import sys
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor

from . import syntax
from .values import ValueType, tag_of
from .environment import Environment
from .evaluator import Evaluator
from .diagnostics import Fault, Report, TypeMismatch, EXIT_FAILURE

class Executive(Visitor):
	""" Walks statements. No statement produces a value; every effect goes through the environment or the console. """
	def __init__(self, environment: Environment, report: Report = None):
		self.report = report or Report()
		self.environment = environment
		self.evaluator = Evaluator(environment, self.report)

	def run(self, statements: Sequence[syntax.Statement]):
		for stmt in statements:
			self.execute(stmt)

	def execute(self, stmt: syntax.Statement):
		self.report.trace(stmt.where, type(stmt).__name__)
		try: self.visit(stmt)
		except Fault as fault:
			fault.locate(stmt.where)
			raise

	def _test(self, stmt: syntax.Statement, kind: str) -> bool:
		value = self.evaluator.evaluate(stmt.cond)
		if tag_of(value) is not ValueType.BOOL:
			raise TypeMismatch(tag_of(value), "%s statement condition" % kind, stmt.where)
		return value

	def visit_ExprStmt(self, stmt: syntax.ExprStmt):
		self.evaluator.evaluate(stmt.expr)

	def visit_Let(self, stmt: syntax.Let):
		value = self.evaluator.evaluate(stmt.expr)
		self.environment.declare(stmt.name, value)

	def visit_If(self, stmt: syntax.If):
		if self._test(stmt, "if"): self.run(stmt.body)
		elif stmt.alternative is not None: self.visit_If(stmt.alternative)
		else: self.run(stmt.otherwise)

	def visit_While(self, stmt: syntax.While):
		while self._test(stmt, "while"):
			self.run(stmt.body)

	def visit_For(self, stmt: syntax.For):
		self.execute(stmt.init)
		while self._test(stmt, "for"):
			self.run(stmt.body)
			self.execute(stmt.step)

def run_program(
		program: syntax.PROGRAM,
		*,
		environment: Optional[Environment] = None,
		report: Optional[Report] = None,
) -> Environment:
	"""
	Run a whole program and hand back the environment it leaves behind.
	Any fault is reported and ends the run with a failing exit status;
	a panic() has already said its piece and simply passes through.
	"""
	if environment is None: environment = Environment()
	report = report or Report()
	try:
		Executive(environment, report).run(program)
	except Fault as fault:
		sys.stdout.flush()
		report.fault(fault)
		raise SystemExit(EXIT_FAILURE) from fault
	report.info("Finished with %d variable(s) declared." % len(environment))
	return environment
