"""
I want a simple, light-weight way to pass-around and print points within a collection of files.
The parser tags every node with one of these. Rows and columns count from one.
"""
from typing import NamedTuple

class Where(NamedTuple):
	""" Aimed at whatever prints error messages """
	path: str
	row: int
	col: int

	def __str__(self):
		return "%s:%d:%d" % (self.path, self.row, self.col)

# For nodes built by hand, such as in tests or by a host application.
NOWHERE = Where("<unknown>", 0, 0)
