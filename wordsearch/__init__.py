"""Word search solver and generator.

This package exposes the public API surface via:

- ``wordsearch.engine.solver.solve``: find every vocabulary word in a grid.
- ``wordsearch.engine.generator.PuzzleGenerator``: lay a vocabulary into a new grid.
- ``wordsearch.engine.automaton.PatternAutomaton``: the multi-pattern matcher
  shared by the solver.
"""

from .engine.automaton import PatternAutomaton, build_automaton
from .engine.generator import GenerationResult, GeneratorConfig, PuzzleGenerator, generate
from .engine.solver import WordSearchSolver, solve

__all__ = [
    "PatternAutomaton",
    "build_automaton",
    "GenerationResult",
    "GeneratorConfig",
    "PuzzleGenerator",
    "generate",
    "WordSearchSolver",
    "solve",
]

__version__ = "0.1.0"
