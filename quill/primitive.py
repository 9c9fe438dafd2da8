"""
Build the primitive namespace: the built-in functions a Quill program can call.

Every built-in receives the evaluator and its own Call node, argument expressions unevaluated.
That way each one decides when (and whether) to evaluate its arguments,
which matters to panic(): it has already started complaining before it looks at them.

Console streams are looked up on `sys` at call time, so that hosts (and tests) can redirect them.
"""
import re
import sys
from typing import Callable, TextIO
from boozetools.support.symtab import NameSpace, NoSuchSymbol

from . import syntax
from .values import VALUE, ValueType, tag_of, render
from .diagnostics import UnknownFunction, WrongArgCount, TypeMismatch, ExplicitPanic

BUILTIN = Callable[["Evaluator", syntax.Call], VALUE]

root_namespace = NameSpace(place="primitive")

def _built_in(name: str):
	def register(fn: BUILTIN) -> BUILTIN:
		root_namespace[name] = fn
		return fn
	return register

def lookup(name: str) -> BUILTIN:
	try: return root_namespace[name]
	except NoSuchSymbol: raise UnknownFunction(name) from None

def names() -> list[str]:
	return list(root_namespace.local)

###############################################################################

def _write_args(evaluator, call: syntax.Call, stream: TextIO):
	""" Space-separated, each argument evaluated just before it is written. """
	for i, arg in enumerate(call.args):
		if i: stream.write(' ')
		stream.write(render(evaluator.evaluate(arg)))

def _prompt(evaluator, call: syntax.Call):
	_write_args(evaluator, call, sys.stdout)
	sys.stdout.write(' ')
	sys.stdout.flush()

@_built_in("println")
def _println(evaluator, call: syntax.Call) -> VALUE:
	_write_args(evaluator, call, sys.stdout)
	sys.stdout.write('\n')
	return None

@_built_in("print")
def _print(evaluator, call: syntax.Call) -> VALUE:
	_write_args(evaluator, call, sys.stdout)
	return None

@_built_in("len")
def _len(evaluator, call: syntax.Call) -> VALUE:
	if len(call.args) != 1:
		raise WrongArgCount(call.name, len(call.args), 1)
	value = evaluator.evaluate(call.args[0])
	if tag_of(value) is not ValueType.STR:
		raise TypeMismatch(tag_of(value), "'len' function")
	return float(len(value))

# A leading number, the way scanf("%lf") would see it. Anything else reads as zero.
_NUMBER = re.compile(r"\s*([-+]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?))", re.IGNORECASE)

@_built_in("readnum")
def _readnum(evaluator, call: syntax.Call) -> VALUE:
	_prompt(evaluator, call)
	match = _NUMBER.match(sys.stdin.readline())
	return float(match.group(1)) if match else 0.0

@_built_in("readstr")
def _readstr(evaluator, call: syntax.Call) -> VALUE:
	_prompt(evaluator, call)
	line = sys.stdin.readline()
	if line.endswith('\n'): line = line[:-1]
	return line

@_built_in("panic")
def _panic(evaluator, call: syntax.Call) -> VALUE:
	sys.stdout.flush()
	report = evaluator.report
	report.panic_header(call.where)
	stream = report.stream
	for arg in call.args:
		stream.write(' ')
		stream.write(render(evaluator.evaluate(arg)))
	stream.write('\n')
	stream.flush()
	raise ExplicitPanic()
