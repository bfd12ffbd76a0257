"""
Case sensitivity rules for file name handling.

File systems disagree on whether ``Readme.md`` and ``README.md`` name the same
file. IOCase captures that choice once so filters and comparators can apply
it consistently.
"""

import sys
from enum import Enum


class IOCase(str, Enum):
    """Case sensitivity policy for file name comparisons."""

    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"
    SYSTEM = "system"  # Follows the conventions of the running platform

    @classmethod
    def for_name(cls, name: str) -> "IOCase":
        """
        Look up a case policy by name, ignoring case.

        Args:
            name: One of 'sensitive', 'insensitive' or 'system'

        Returns:
            The matching IOCase member

        Raises:
            ValueError: If the name is not recognised
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Illegal IOCase name: {name}") from None

    @property
    def is_case_sensitive(self) -> bool:
        """Whether names differing only in case are treated as different."""
        if self is IOCase.SYSTEM:
            return not sys.platform.startswith(("win", "darwin"))
        return self is IOCase.SENSITIVE

    def _fold(self, value: str) -> str:
        return value if self.is_case_sensitive else value.casefold()

    def check_compare_to(self, str1: str, str2: str) -> int:
        """Compare two strings, returning a negative, zero or positive integer."""
        a, b = self._fold(str1), self._fold(str2)
        return (a > b) - (a < b)

    def check_equals(self, str1: str | None, str2: str | None) -> bool:
        """Check whether two strings are equal under this policy."""
        if str1 is None or str2 is None:
            return str1 is str2
        return self._fold(str1) == self._fold(str2)

    def check_starts_with(self, value: str, prefix: str) -> bool:
        """Check whether a string starts with the given prefix."""
        return self._fold(value).startswith(self._fold(prefix))

    def check_ends_with(self, value: str, suffix: str) -> bool:
        """Check whether a string ends with the given suffix."""
        return self._fold(value).endswith(self._fold(suffix))
