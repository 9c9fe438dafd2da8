"""
The one flat table of variables for a whole program run.

There is no nesting: `let` anywhere declares into the same table,
and nothing ever leaves it. The name-space refuses duplicate keys,
which is exactly the declare-once rule.
"""
from typing import Iterator, Optional
from boozetools.support.symtab import NameSpace, NoSuchSymbol, SymbolAlreadyExists

from .values import VALUE, tag_of
from .diagnostics import UndefinedVariable, RedeclaredVariable, VariableCapacityExceeded, TypeMismatch

DEFAULT_CAPACITY = 128

class Variable:
	""" A slot. The value may change, but never its tag. """
	def __init__(self, name: str, value: VALUE):
		self.name, self.value = name, value
	def __repr__(self): return "<var %s=%r>" % (self.name, self.value)

class Environment:
	def __init__(self, capacity: Optional[int] = DEFAULT_CAPACITY):
		assert capacity is None or capacity >= 0, capacity
		self.capacity = capacity
		self._space = NameSpace(place=self)

	def __len__(self): return len(self._space.local)
	def __contains__(self, name: str) -> bool: return name in self._space.local
	def __iter__(self) -> Iterator[Variable]: return iter(self._space.local.values())

	def is_full(self) -> bool:
		return self.capacity is not None and len(self) >= self.capacity

	def declare(self, name: str, value: VALUE) -> Variable:
		if self.is_full():
			# A redeclaration is still a redeclaration, even in a full table.
			if name in self: raise RedeclaredVariable(name)
			raise VariableCapacityExceeded(self.capacity)
		variable = Variable(name, value)
		try: self._space[name] = variable
		except SymbolAlreadyExists: raise RedeclaredVariable(name) from None
		return variable

	def lookup(self, name: str) -> Variable:
		try: return self._space[name]
		except NoSuchSymbol: raise UndefinedVariable(name) from None

	def assign(self, name: str, value: VALUE) -> VALUE:
		variable = self.lookup(name)
		if tag_of(value) is not tag_of(variable.value):
			raise TypeMismatch(tag_of(value), "assignment")
		variable.value = value
		return value

	def snapshot(self) -> dict:
		""" Name-to-value, in declaration order. Handy for hosts and tests. """
		return {v.name: v.value for v in self}
