"""
Weighted skill dictionary.

Maps a normalized skill keyword to the integer weight it contributes to an
applicant's score. Built once from an ordered seed, then frozen; every
lookup after that is read-only and safe to share across threads.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .normalize import normalize_keyword
from .schema import validate_seed_entry

SeedEntry = Tuple[str, int]

DEFAULT_SEED: Tuple[SeedEntry, ...] = (
    ("c programming", 15),
    ("dsa", 10),
    ("hash table", 8),
    ("algorithms", 8),
    ("python", 7),
    ("django", 6),
    ("linux", 5),
    ("data structures", 5),
    ("cgi", 3),
    ("mysql", 2),
)


class ShortlistError(Exception):
    """Base class for shortlist errors."""
    pass


class ConstructionFailure(ShortlistError):
    """Raised when the dictionary cannot be built. Scoring must not proceed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class DuplicateKeywordError(ConstructionFailure):
    """Raised when a keyword is inserted twice (after normalization)."""
    pass


class DictionaryFrozenError(ShortlistError):
    """Raised on insert after the dictionary has been built."""
    pass


class WeightedDictionary:
    """
    Case-insensitive keyword -> weight lookup.

    Duplicate keywords are rejected rather than shadowed or overwritten,
    so the weight of a keyword never depends on seed order.
    """

    def __init__(self):
        self._weights: Dict[str, int] = {}
        self._frozen = False

    @classmethod
    def build(cls, seed: Iterable[SeedEntry]) -> "WeightedDictionary":
        """
        Build a frozen dictionary from (keyword, weight) pairs.

        Args:
            seed: Ordered (keyword, weight) pairs

        Returns:
            Frozen WeightedDictionary

        Raises:
            ConstructionFailure: If any entry is invalid
            DuplicateKeywordError: If two keywords normalize to the same key
        """
        try:
            entries = list(seed)
        except MemoryError as e:
            raise ConstructionFailure("Out of memory reading seed") from e

        errors = [
            f"Entry {i}: {e}"
            for i, entry in enumerate(entries)
            for e in validate_seed_entry(entry)
        ]
        if errors:
            raise ConstructionFailure(
                f"Invalid seed ({len(errors)} error(s)): {errors[0]}", errors
            )

        dictionary = cls()
        try:
            for keyword, weight in entries:
                dictionary.insert(keyword, weight)
        except MemoryError as e:
            raise ConstructionFailure("Out of memory building dictionary") from e
        dictionary.freeze()
        return dictionary

    def insert(self, keyword: str, weight: int) -> None:
        if self._frozen:
            raise DictionaryFrozenError(f"Cannot insert '{keyword}': dictionary is frozen")
        key = normalize_keyword(keyword)
        if key in self._weights:
            raise DuplicateKeywordError(f"Duplicate keyword: '{key}'")
        self._weights[key] = weight

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, keyword: str) -> Optional[int]:
        """Return the weight for keyword, or None if it is not a known skill."""
        return self._weights.get(normalize_keyword(keyword))

    def lookup(self, keyword: str) -> int:
        """Return the weight for keyword, or 0 if it is not a known skill."""
        weight = self.get(keyword)
        return 0 if weight is None else weight

    @property
    def entries(self) -> MappingProxyType:
        return MappingProxyType(self._weights)

    def ranked(self) -> List[SeedEntry]:
        """Entries sorted by weight (desc), then keyword."""
        return sorted(self._weights.items(), key=lambda kv: (-kv[1], kv[0]))

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and normalize_keyword(keyword) in self._weights

    def __len__(self) -> int:
        return len(self._weights)

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)

    def __repr__(self) -> str:
        return f"WeightedDictionary({len(self)} keywords, frozen={self._frozen})"


def default_dictionary(seed: Optional[Sequence[SeedEntry]] = None) -> WeightedDictionary:
    """Build the dictionary from seed, or from DEFAULT_SEED when none is given."""
    return WeightedDictionary.build(DEFAULT_SEED if seed is None else seed)
