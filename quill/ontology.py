"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. The run-time only ever dispatches on the concrete
classes in `syntax`, but the abstract bases let the evaluator
and the executive say which side of the fence a node lives on.
"""
from .location import Where, NOWHERE

class Phrase:
	""" Anything the parser produced. It knows where it came from. """
	where: Where
	def __init__(self, where: Where = NOWHERE):
		assert isinstance(where, Where), type(where)
		self.where = where

class ValueExpression(Phrase):
	""" Evaluates to a value. """

class Statement(Phrase):
	""" Executes for effect; never produces a value. """
