"""
Quill: the run-time for a small imperative scripting language.
A parser (not included) builds the tree out of `quill.syntax`; `run_program` brings it to life.
"""
from .executive import run_program, Executive
from .environment import Environment
from .diagnostics import Report, Fault
