"""
Tests that assert about failure modes: what lands on stderr, what the exit status is,
and that nothing runs after the first fault.
"""
import io
import os
import tempfile
import unittest
from unittest import mock

from quill import run_program, Report
from quill.location import Where, NOWHERE
from quill.environment import Environment
from quill.syntax import Op, Literal, Lookup, Call, BinExp, ExprStmt, Let, If, While
from quill.diagnostics import (
	Fault, ExplicitPanic, UnknownFunction, RedeclaredVariable, VariableCapacityExceeded,
	TypeMismatch, DivisionByZero, BadAssignmentTarget, WrongArgCount, EXIT_FAILURE,
)

def at(row, col=1): return Where("zoo.q", row, col)
def lit(value, where=None): return Literal(value, where or at(99))
def say(text): return ExprStmt(Call("println", [lit(text)], at(99)), at(99))

@mock.patch("sys.stdout", new_callable=io.StringIO)
@mock.patch("sys.stderr", new_callable=io.StringIO)
class ZooOfFail(unittest.TestCase):
	""" Every fault ends the run with status 1 and a location-prefixed message. """

	def expect(self, program, kind, **kwargs):
		with self.assertRaises(SystemExit) as cm:
			run_program(program, **kwargs)
		self.assertEqual(EXIT_FAILURE, cm.exception.code)
		self.assertIsInstance(cm.exception.__cause__, kind)
		return cm.exception.__cause__

	def test_unknown_function(self, stderr, stdout):
		program = [say("before"), ExprStmt(Call("undefined_fn", [], at(2, 5)), at(2, 5)), say("after")]
		self.expect(program, UnknownFunction)
		self.assertEqual("zoo.q:2:5: error: Unknown function 'undefined_fn'\n", stderr.getvalue())
		self.assertEqual("before\n", stdout.getvalue())

	def test_redeclared(self, stderr, stdout):
		program = [Let("x", lit(1), at(1)), Let("x", lit(2, at(2, 9)), at(2)), say("after")]
		self.expect(program, RedeclaredVariable)
		self.assertEqual("zoo.q:2:1: error: Variable 'x' redeclared\n", stderr.getvalue())
		self.assertEqual("", stdout.getvalue())

	def test_capacity(self, stderr, stdout):
		program = [Let("v%d" % i, lit(i), at(i + 1)) for i in range(4)]
		self.expect(program, VariableCapacityExceeded, environment=Environment(capacity=3))
		self.assertEqual("zoo.q:4:1: error: Reached max limit of 3 variables\n", stderr.getvalue())

	def test_type_mismatch(self, stderr, stdout):
		program = [ExprStmt(BinExp(Op.ADD, lit("a"), lit(1), at(3, 4)), at(3))]
		self.expect(program, TypeMismatch)
		self.assertEqual("zoo.q:3:4: error: Unexpected str in left side of '+' operation\n", stderr.getvalue())

	def test_condition(self, stderr, stdout):
		self.expect([While(lit(1), [], at(7))], TypeMismatch)
		self.assertEqual("zoo.q:7:1: error: Unexpected num in while statement condition\n", stderr.getvalue())

	def test_nil_equality(self, stderr, stdout):
		program = [If(BinExp(Op.NE, lit(None), lit(None), at(1, 5)), [], where=at(1))]
		self.expect(program, TypeMismatch)
		self.assertIn("zoo.q:1:5: error:", stderr.getvalue())

	def test_division_by_zero(self, stderr, stdout):
		program = [Let("x", lit(1)), ExprStmt(BinExp(Op.DIV_ASSIGN, Lookup("x"), lit(0), at(5, 3)), at(5))]
		self.expect(program, DivisionByZero)
		self.assertEqual("zoo.q:5:3: error: division by zero\n", stderr.getvalue())

	def test_bad_target(self, stderr, stdout):
		program = [ExprStmt(BinExp(Op.ASSIGN, lit(1), lit(2), at(6, 2)), at(6))]
		self.expect(program, BadAssignmentTarget)
		self.assertEqual("zoo.q:6:2: error: left side of '=' expected variable\n", stderr.getvalue())

	def test_wrong_arg_count(self, stderr, stdout):
		program = [ExprStmt(Call("len", [lit("a"), lit("b")], at(8, 8)), at(8))]
		self.expect(program, WrongArgCount)
		self.assertEqual("zoo.q:8:8: error: 'len' takes 1 argument, but got 2 instead\n", stderr.getvalue())

	def test_side_effects_before_the_fault_stay(self, stderr, stdout):
		printing = Call("print", [lit("kept")], at(9, 1))
		program = [ExprStmt(BinExp(Op.SUB, printing, lit(1), at(9, 3)), at(9))]
		self.expect(program, TypeMismatch)
		self.assertEqual("kept", stdout.getvalue())
		self.assertIn("Unexpected nil", stderr.getvalue())

	def test_color_on_request(self, stderr, stdout):
		program = [ExprStmt(Call("nope", [], at(1)), at(1))]
		self.expect(program, UnknownFunction, report=Report(color=True))
		self.assertIn("\033[1m", stderr.getvalue())
		self.assertIn("error:", stderr.getvalue())

	def test_offending_line_is_pictured(self, stderr, stdout):
		folder = tempfile.TemporaryDirectory()
		self.addCleanup(folder.cleanup)
		path = os.path.join(folder.name, "script.q")
		with open(path, "w", encoding="utf-8") as fh:
			fh.write("println(1);\nx = undefined_fn();\n")
		here = Where(path, 2, 5)
		self.expect([ExprStmt(Call("undefined_fn", [], here), Where(path, 2, 1))], UnknownFunction)
		expected = [
			"%s:2:5: error: Unknown function 'undefined_fn'" % path,
			"     2 |x = undefined_fn();",
			"            ^ near here",
		]
		self.assertEqual(expected, stderr.getvalue().splitlines())

	def test_no_picture_past_the_end_of_the_file(self, stderr, stdout):
		folder = tempfile.TemporaryDirectory()
		self.addCleanup(folder.cleanup)
		path = os.path.join(folder.name, "short.q")
		with open(path, "w", encoding="utf-8") as fh:
			fh.write("nope();\n")
		self.expect([ExprStmt(Call("nope", [], Where(path, 7, 1)), Where(path, 7, 1))], UnknownFunction)
		self.assertEqual("%s:7:1: error: Unknown function 'nope'\n" % path, stderr.getvalue())

	def test_panic_is_not_a_fault(self, stderr, stdout):
		program = [say("first"), ExprStmt(Call("panic", [lit("oh no"), lit(3)], at(4, 2)), at(4)), say("never")]
		with self.assertRaises(ExplicitPanic) as cm:
			run_program(program)
		self.assertEqual(EXIT_FAILURE, cm.exception.code)
		self.assertNotIsInstance(cm.exception, Fault)
		self.assertEqual("first\n", stdout.getvalue())
		self.assertEqual("zoo.q:4:2: panic(): oh no 3\n", stderr.getvalue())

class FaultTests(unittest.TestCase):
	def test_innermost_location_wins(self):
		fault = Fault("trouble")
		self.assertEqual("trouble", str(fault))
		fault.locate(at(1, 2)).locate(at(3, 4))
		self.assertEqual(at(1, 2), fault.where)
		self.assertEqual("zoo.q:1:2: trouble", str(fault))

	def test_hand_built_nodes_defer_to_located_ones(self):
		fault = Fault("trouble").locate(NOWHERE).locate(at(5))
		self.assertEqual(at(5), fault.where)

	@mock.patch("sys.stderr", new_callable=io.StringIO)
	def test_info_only_when_verbose(self, stderr):
		Report().info("hidden")
		Report(verbose=1).info("shown", 1)
		self.assertEqual("shown 1\n", stderr.getvalue())

	def test_unlocated_fault_still_prints(self):
		stream = io.StringIO()
		Report(stream=stream).fault(Fault("lost"))
		self.assertEqual("<unknown>:0:0: error: lost\n", stream.getvalue())

	def test_located_fault_prints_its_location_once(self):
		stream = io.StringIO()
		Report(stream=stream).fault(Fault("lost", at(2, 6)))
		self.assertEqual("zoo.q:2:6: error: lost\n", stream.getvalue())


if __name__ == '__main__':
	unittest.main()
