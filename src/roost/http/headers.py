"""Request headers as a read-only, case-insensitive mapping."""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Header pairs from the ASGI scope, decoded once as latin-1.

    Names are matched case-insensitively. Indexing gives the first value;
    ``get_list`` gives every value in arrival order.
    """

    __slots__ = ("_pairs", "_raw")

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)
        pairs = tuple((name.decode("latin-1").lower(), value.decode("latin-1")) for name, value in raw)
        object.__setattr__(self, "_pairs", pairs)

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> "Headers":
        """Build headers from a plain ``{name: value}`` mapping."""
        return cls(
            tuple(
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in headers.items()
            )
        )

    def __getitem__(self, key: str) -> str:
        wanted = key.lower()
        for name, value in self._pairs:
            if name == wanted:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return iter(dict.fromkeys(name for name, _ in self._pairs))

    def __len__(self) -> int:
        return len(dict.fromkeys(name for name, _ in self._pairs))

    def __repr__(self) -> str:
        return f"Headers({list(self._pairs)!r})"

    def get_list(self, key: str) -> list[str]:
        """Return every value for *key*."""
        wanted = key.lower()
        return [value for name, value in self._pairs if name == wanted]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """The undecoded byte pairs, as the ASGI scope carried them."""
        return self._raw
