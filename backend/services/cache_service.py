from typing import Any


class SelectionMemo:
    """Holds the value computed for the current selection only.

    Storing under a new key drops whatever was held for the previous one.
    """

    def __init__(self):
        self._key: str | None = None
        self._value: Any | None = None

    @property
    def key(self) -> str | None:
        return self._key

    def get(self, key: str) -> Any | None:
        if key == self._key:
            return self._value
        return None

    def set(self, key: str, value: Any) -> None:
        self._key = key
        self._value = value

    def invalidate(self) -> None:
        self._key = None
        self._value = None
