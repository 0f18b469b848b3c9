"""
Refresh policies deciding whether a cached dataset can be trusted.

Both policies are pure: they look only at the inputs they are given and
never touch the filesystem.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Optional


class RefreshPolicy(ABC):
    """Decides between "use cache" and "refetch" for one dataset."""

    # Whether should_refresh() looks at the record's age
    needs_age: bool = False

    @abstractmethod
    def should_refresh(
            self,
            exists: bool,
            age: Optional[timedelta] = None,
            force: bool = False,
    ) -> bool:
        """
        Args:
            exists: Whether a cache record is present
            age: Time since the record was written (only required when
                needs_age is True and the record exists)
            force: User asked for a refresh regardless of cache state

        Returns:
            True if the dataset must be fetched again
        """
        pass


class PresenceOnlyPolicy(RefreshPolicy):
    """
    Refetch only when the record is missing or a refresh is forced.

    Used for the item mapping, which changes rarely enough that a cached
    copy is trusted until the user forces a refresh.
    """

    def should_refresh(
            self,
            exists: bool,
            age: Optional[timedelta] = None,
            force: bool = False,
    ) -> bool:
        return force or not exists

    def __repr__(self) -> str:
        return "PresenceOnlyPolicy()"


class TtlPolicy(RefreshPolicy):
    """Refetch when the record is missing, forced, or older than the TTL."""

    needs_age = True

    def __init__(self, ttl: timedelta):
        if ttl < timedelta(0):
            raise ValueError(f"TTL must not be negative: {ttl}")
        self.ttl = ttl

    def should_refresh(
            self,
            exists: bool,
            age: Optional[timedelta] = None,
            force: bool = False,
    ) -> bool:
        if force or not exists:
            return True
        if age is None:
            raise ValueError("TtlPolicy needs the cache age of an existing record")
        return age > self.ttl

    def __repr__(self) -> str:
        return f"TtlPolicy(ttl={self.ttl!r})"
