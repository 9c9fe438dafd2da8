"""
Everything that can go wrong while a Quill program runs, and how it gets told to the console.

Every fault is fatal. Inside the run-time they travel as exceptions,
so the evaluator never needs to know how the process ends.
Whoever sits at the top (normally `executive.run_program`) hands the fault to a Report,
which prints it with its source location, and then the run is over.
"""
import sys
from functools import lru_cache
from typing import Optional, TextIO
from boozetools.support.failureprone import SourceText, illustration

from .location import Where, NOWHERE
from .values import ValueType

EXIT_FAILURE = 1

class Fault(Exception):
	""" Root of every run-time error. """
	where: Optional[Where]

	def __init__(self, message: str, where: Optional[Where] = None):
		super().__init__(message)
		self.message = message
		self.where = where

	def locate(self, where: Where) -> "Fault":
		""" The innermost phrase with a real location gets the blame. """
		if self.where is None or self.where == NOWHERE: self.where = where
		return self

	def __str__(self):
		if self.where is None: return self.message
		return "%s: %s" % (self.where, self.message)

class UndefinedVariable(Fault):
	def __init__(self, name: str, where: Optional[Where] = None):
		super().__init__("Undefined variable '%s'" % name, where)
		self.name = name

class RedeclaredVariable(Fault):
	def __init__(self, name: str, where: Optional[Where] = None):
		super().__init__("Variable '%s' redeclared" % name, where)
		self.name = name

class VariableCapacityExceeded(Fault):
	def __init__(self, capacity: int, where: Optional[Where] = None):
		super().__init__("Reached max limit of %d variables" % capacity, where)
		self.capacity = capacity

class TypeMismatch(Fault):
	def __init__(self, got: ValueType, context: str, where: Optional[Where] = None):
		super().__init__("Unexpected %s in %s" % (got, context), where)
		self.got = got

class BadAssignmentTarget(Fault):
	""" The left side of an assignment has to be a bare variable name. """
	def __init__(self, glyph: str, where: Optional[Where] = None):
		super().__init__("left side of '%s' expected variable" % glyph, where)

class UnknownFunction(Fault):
	def __init__(self, name: str, where: Optional[Where] = None):
		super().__init__("Unknown function '%s'" % name, where)
		self.name = name

class WrongArgCount(Fault):
	def __init__(self, name: str, got: int, need: int, where: Optional[Where] = None):
		plural = '' if need == 1 else 's'
		pattern = "'%s' takes %d argument%s, but got %d instead"
		super().__init__(pattern % (name, need, plural, got), where)
		self.got, self.need = got, need

class DivisionByZero(Fault):
	def __init__(self, where: Optional[Where] = None):
		super().__init__("division by zero", where)

class ExplicitPanic(SystemExit):
	"""
	The program called panic(). By the time this is raised, the message is already on stderr.
	It is a SystemExit rather than a Fault so that nothing on the way up mistakes it for one.
	"""
	def __init__(self):
		super().__init__(EXIT_FAILURE)

###############################################################################

BOLD = "\033[1m"
BRIGHT_RED = "\033[91m"
RESET = "\033[0m"

class Report:
	"""
	The run-time's voice on standard error.
	`verbose` at 1 lets `info` through; at 2 the executive also traces each statement.
	`color` of None means to use color exactly when the stream is a terminal.
	"""
	def __init__(self, *, verbose: int = 0, color: Optional[bool] = None, stream: Optional[TextIO] = None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._color = color
		self._stream = stream

	@property
	def stream(self) -> TextIO:
		# Looked up late, so that redirecting sys.stderr works as expected.
		return self._stream or sys.stderr

	def uses_color(self) -> bool:
		if self._color is not None: return self._color
		isatty = getattr(self.stream, "isatty", None)
		return bool(isatty and isatty())

	def _paint(self, text: str, *codes: str) -> str:
		if self.uses_color(): return ''.join(codes) + text + RESET
		return text

	def info(self, *args):
		if self._verbose:
			print(*args, file=self.stream)

	def trace(self, where: Where, text: str):
		if self._verbose >= 2:
			print("%s: %s" % (where, text), file=self.stream)

	def fault(self, fault: Fault):
		""" Tell the user what went wrong and where. """
		where = fault.where or NOWHERE
		head = self._paint("%s: " % (where,), BOLD) + self._paint("error:", BOLD, BRIGHT_RED)
		print(head, fault.message, file=self.stream)
		picture = illustrate(where)
		if picture:
			print(picture, file=self.stream)
		self.stream.flush()

	def panic_header(self, where: Where):
		""" What panic() writes before it gets around to its arguments. """
		self.stream.write(self._paint("%s: " % (where,), BOLD) + self._paint("panic():", BOLD, BRIGHT_RED))

def illustrate(where: Where) -> Optional[str]:
	""" A picture of the offending line, if the source file is still around to look at. """
	fetched = _fetch(where.path)
	if fetched is None: return None
	line_count, source = fetched
	if not 1 <= where.row <= line_count: return None
	single_line = source.line_of_text(where.row)
	return illustration(single_line, max(where.col - 1, 0), 1, prefix='% 6d |' % where.row)

@lru_cache(5)
def _fetch(path: str):
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except (OSError, UnicodeDecodeError):
		return None
	source = SourceText(text, filename=path)
	# find_row_col builds the line table that line_of_text reads.
	line_count, _ = source.find_row_col(len(text))
	return line_count, source
