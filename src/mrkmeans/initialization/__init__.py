"""Initialization strategies for the clustering loop."""

from .random import RandomInit
from .from_previous import FromPreviousInit

__all__ = [
    'RandomInit',
    'FromPreviousInit'
]
