"""
Identity generation for paths and nodes.

Ids are opaque strings. The generator is injectable so that callers that
need reproducible ids (tests, deterministic replays) can swap the default
uuid4-based strategy for a counter.
"""

from typing import Protocol
from uuid import uuid4
import itertools


class IdGenerator(Protocol):
    def __call__(self) -> str:
        ...


class UuidIdGenerator:
    """Random uuid4 ids (default)."""
    
    def __call__(self) -> str:
        return str(uuid4())


class CounterIdGenerator:
    """Deterministic ids of the form "<prefix>-<n>", counting from start."""
    
    def __init__(self, prefix: str = "id", start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)
    
    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


_generator: IdGenerator = UuidIdGenerator()


def get_id_generator() -> IdGenerator:
    return _generator


def set_id_generator(generator: IdGenerator) -> IdGenerator:
    """
    Install the generator used by new_id().
    
    Returns:
        The previously installed generator, so callers can restore it
    """
    global _generator
    previous = _generator
    _generator = generator
    return previous


def new_id() -> str:
    return _generator()
