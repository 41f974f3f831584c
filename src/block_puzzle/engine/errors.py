"""Exceptions raised by the rule engine.

A rejected player move is not an error: the session reports it through a
``MoveOutcome`` and a notice. These exceptions cover programming and content
mistakes only.
"""


class BlockPuzzleError(Exception):
    """Base class for rule engine errors."""


class PreconditionError(BlockPuzzleError):
    """A board operation was called with its precondition violated."""


class CatalogError(BlockPuzzleError):
    """Malformed shape content or configuration."""
