"""Value objects returned by sources lookups."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Tuple


@dataclass(frozen=True)
class Reference:
    """A single citation attached to a bot reply."""

    link: str
    title: str

    def to_payload(self) -> Dict[str, str]:
        return {"link": self.link, "title": self.title}


@dataclass(frozen=True)
class SourceSet:
    """Search engine, query and ordered references behind one reply."""

    search_engine: str
    search_query: str
    references: Tuple[Reference, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable but store an immutable tuple in the given order.
        if not isinstance(self.references, tuple):
            object.__setattr__(self, "references", tuple(self.references))

    def __len__(self) -> int:
        return len(self.references)

    def __iter__(self) -> Iterator[Reference]:
        return iter(self.references)

    @classmethod
    def from_references(
        cls,
        search_engine: str,
        search_query: str,
        references: Iterable[Reference],
    ) -> "SourceSet":
        return cls(search_engine=search_engine, search_query=search_query, references=tuple(references))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "search_engine": self.search_engine,
            "search_query": self.search_query,
            "references": [reference.to_payload() for reference in self.references],
        }


__all__ = ["Reference", "SourceSet"]
