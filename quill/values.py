"""
This module defines the run-time value model.
Primitive values play themselves: None is nil, and then bool, float, and str.
The tag of a value is determined entirely by its Python type,
and nothing in the run-time ever converts between tags implicitly.
"""
import math
from enum import Enum
from typing import Union

VALUE = Union[None, bool, float, str]

class ValueType(Enum):
	NIL = "nil"
	BOOL = "bool"
	NUM = "num"
	STR = "str"

	def __str__(self): return self.value

def tag_of(value: VALUE) -> ValueType:
	if value is None: return ValueType.NIL
	# bool before float: Python would happily treat True as a number.
	if isinstance(value, bool): return ValueType.BOOL
	if isinstance(value, float): return ValueType.NUM
	if isinstance(value, str): return ValueType.STR
	raise TypeError("Not a run-time value: %r" % (value,))

def render(value: VALUE) -> str:
	"""
	The one true textual form of a value, as every console-facing built-in shows it.
	Strings come out raw, without quotes or escapes.
	"""
	tag = tag_of(value)
	if tag is ValueType.NIL: return "(nil)"
	if tag is ValueType.BOOL: return "true" if value else "false"
	if tag is ValueType.NUM: return _render_number(value)
	return value

def _render_number(x: float) -> str:
	if math.isnan(x): return "nan"
	if math.isinf(x): return "inf" if x > 0 else "-inf"
	if x.is_integer() and abs(x) < 1e16: return str(int(x))
	return repr(x)
