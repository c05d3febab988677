"""Domain value objects for the passage search application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Protocol


class FilterablePassage(Protocol):
    """Anything carrying the categorical fields a filter can constrain."""

    type: str | None
    author: str | None
    section_id: int


def _as_tuple(values: Iterable | None) -> tuple:
    """Normalize an optional iterable into a de-duplicated tuple (first occurrence order)."""
    if values is None:
        return ()
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class SearchFilters:
    """Value object for passage filters.

    Three independent optional lists combined with AND across categories and
    OR within a category. An empty list places no constraint on that
    dimension. Lists are stored as de-duplicated tuples so instances are
    hashable and safe to share between requests.
    """

    types: tuple[str, ...] = field(default_factory=tuple)
    authors: tuple[str, ...] = field(default_factory=tuple)
    section_ids: tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "types", _as_tuple(self.types))
        object.__setattr__(self, "authors", _as_tuple(self.authors))
        object.__setattr__(self, "section_ids", _as_tuple(self.section_ids))

    @classmethod
    def of(
        cls,
        types: Iterable[str] | None = None,
        authors: Iterable[str] | None = None,
        section_ids: Iterable[int] | None = None,
    ) -> "SearchFilters":
        """Build filters from optional iterables (None means no constraint)."""
        return cls(
            types=_as_tuple(types),
            authors=_as_tuple(authors),
            section_ids=_as_tuple(section_ids),
        )

    @property
    def is_empty(self) -> bool:
        """Return True when no dimension is constrained."""
        return not (self.types or self.authors or self.section_ids)

    @property
    def count(self) -> int:
        """Total number of filter values across all dimensions."""
        return len(self.types) + len(self.authors) + len(self.section_ids)

    def matches(self, passage: FilterablePassage) -> bool:
        """Return whether passage satisfies every constrained dimension."""
        if self.types and passage.type not in self.types:
            return False
        if self.authors and passage.author not in self.authors:
            return False
        if self.section_ids and passage.section_id not in self.section_ids:
            return False
        return True


def build_filter_predicate(
    filters: SearchFilters,
) -> Callable[[FilterablePassage], bool]:
    """Return a pure predicate accepting exactly the passages filters allows.

    Membership tests only (no prefix or substring matching). With all three
    lists empty the predicate accepts every passage.
    """
    if filters.is_empty:
        return lambda _passage: True
    return filters.matches
