"""Exceptions raised by the graph engine and its collaborators."""

from __future__ import annotations


class TodoGraphError(Exception):
    """Base class for every error raised by ``todo_graph``."""


class DataIntegrityError(TodoGraphError, ValueError):
    """The task batch references ids it does not contain, or repeats an id."""


class DependencyCycleError(TodoGraphError, ValueError):
    """The dependency relation of a task batch is not acyclic.

    Attributes:
        cycle: Task ids along one offending cycle, first id repeated at the end.
    """

    def __init__(self, cycle: list[int]):
        self.cycle = list(cycle)
        super().__init__(f"Circular dependency detected: {' -> '.join(str(i) for i in self.cycle)}")


class UnknownTaskError(TodoGraphError, KeyError):
    """A task id was looked up in a graph that does not contain it."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown task"


class MalformedPayloadError(TodoGraphError, TypeError):
    """An input record or interaction payload has the wrong shape."""
