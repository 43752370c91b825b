"""Abstract base class for machine scanners.

Each scanner inspects one category of machine state and returns a detected
record. Scanners are read-only and never raise for missing tools or
unreadable files; they return an empty record instead.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class Scanner(ABC, Generic[T]):
    """Abstract base class for all scanners.

    Example:
        >>> scanner = GitScanner()
        >>> detected = scanner.scan()
        >>> print(detected.email)
    """

    @property
    @abstractmethod
    def module(self) -> str:
        """Return the module name this scanner reports under."""

    @abstractmethod
    def scan(self) -> T:
        """Inspect the machine.

        Returns:
            The detected record, empty where nothing was found.
        """
