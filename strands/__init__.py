"""Strands puzzle grid generator.

This package exposes the public API surface via:

- ``strands.engine.generator.StrandsGenerator``: validates a word list and
  packs it into a fully covered 8x6 letter grid.
- ``strands.engine.generator.generate``: one-call helper around the generator.
- ``strands.data.validation.validate_input``: the live letter-count and
  spangram checks on their own.
"""

from .core.models import GenerateInput, GenerateResult
from .data.validation import validate_input
from .engine.generator import GeneratorConfig, StrandsGenerator, generate

__all__ = [
    "GenerateInput",
    "GenerateResult",
    "GeneratorConfig",
    "StrandsGenerator",
    "generate",
    "validate_input",
]

__version__ = "0.1.0"
