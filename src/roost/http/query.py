"""Query string parameters.

Kept as the ordered list of decoded ``(name, value)`` pairs so repeated
keys survive; lookups go through the list, like ``Headers``.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Immutable, ordered query string parameters.

    ``params["q"]`` is the first value for ``q``; ``get_list("q")`` all of them.
    """

    __slots__ = ("_pairs", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        object.__setattr__(self, "_raw", query_string)
        pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
        object.__setattr__(self, "_pairs", tuple(pairs))

    def __getitem__(self, key: str) -> str:
        for name, value in self._pairs:
            if name == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"QueryParams({list(self._pairs)!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*, in query order."""
        return [value for name, value in self._pairs if name == key]

    @property
    def raw(self) -> bytes:
        """The undecoded query string."""
        return self._raw
