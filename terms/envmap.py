"""A mutable mapping of environment variables."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping

__all__ = ["EnvMap"]


class EnvMap(MutableMapping[str, str]):
    """Environment variable names mapped to their values."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._inner: dict[str, str] = dict(values or {})

    def __getitem__(self, key: str) -> str:
        return self._inner[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._inner[key] = value

    def __delitem__(self, key: str) -> None:
        self._inner.pop(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self._inner)

    def __len__(self) -> int:
        return len(self._inner)

    def __repr__(self) -> str:
        return f"EnvMap({self._inner!r})"

    def clear(self) -> None:
        """Remove every variable."""
        self._inner.clear()

    def to_dict(self) -> dict[str, str]:
        """Take the contents as a dict, leaving this map empty."""
        taken, self._inner = self._inner, {}
        return taken