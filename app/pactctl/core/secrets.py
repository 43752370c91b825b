"""Secret store interface.

Secret values live in an external store (typically the OS keychain), never
in the manifest. The core only needs the four operations below.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class SecretStore(Protocol):
    """Key/value store for secret values, addressed by secret name."""

    def get(self, name: str) -> str | None:
        """Return the stored value, or None if absent."""
        ...

    def set(self, name: str, value: str) -> None:
        """Store or replace a value."""
        ...

    def has(self, name: str) -> bool:
        """Check whether a value is stored."""
        ...

    def delete(self, name: str) -> None:
        """Remove a value if present."""
        ...


class MemorySecretStore:
    """In-process SecretStore, for dry runs and tests."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def set(self, name: str, value: str) -> None:
        self._values[name] = value

    def has(self, name: str) -> bool:
        return name in self._values

    def delete(self, name: str) -> None:
        self._values.pop(name, None)
