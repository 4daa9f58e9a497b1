"""Reference transport adapters."""

from parley.adapters.console import ConsoleAdapter
from parley.adapters.memory import MemoryAdapter
from parley.adapters.utils import default_reference

__all__ = [
    "ConsoleAdapter",
    "MemoryAdapter",
    "default_reference",
]
