"""Error hierarchy for sccdag."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence


class SccDagError(Exception):
    """Base exception for sccdag failures."""

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.user_message = message if user_message is None else user_message
        self.context = dict(context) if context else {}

    def log_message(self) -> str:
        if not self.context:
            return str(self)
        return f"{self}: {self.context}"

    def __reduce__(self):
        # keyword-only fields travel as instance state
        return (type(self), self.args, self.__dict__)


class MalformedGraphError(SccDagError, ValueError):
    """Vertex count, edge endpoint or source outside the valid range."""


class GraphFormatError(SccDagError):
    """Graph descriptor file does not have the expected shape."""


class CyclicGraphError(SccDagError):
    """Raised when a topological order cannot cover every vertex.

    `remaining` lists the vertices that were never emitted, i.e. the ones
    on or behind a cycle.
    """

    def __init__(self, remaining: Sequence[int], n: int) -> None:
        self.remaining: List[int] = list(remaining)
        self.n = n
        super().__init__(
            f"Graph is not acyclic: {len(self.remaining)} of {n} vertices "
            f"could not be ordered",
            context={"remaining": self.remaining[:20]},
        )

    def __reduce__(self):
        return (type(self), (self.remaining, self.n), self.__dict__)
