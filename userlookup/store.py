"""Cache-coherent record stores.

A store owns the path of an account database, the parsed snapshot of
its content, and the moment that snapshot was taken. Before serving a
lookup the store decides whether the snapshot is still fresh::

    now < last_refresh + cache_lifetime  -> serve the snapshot
    otherwise                            -> read, parse, replace, serve

The algorithm lives here, independent of the calling convention. The
blocking adapters (:py:mod:`userlookup.reader`) and the asyncio adapters
(:py:mod:`userlookup.async_reader`) only differ in how they read the file
and how they serialize concurrent refreshes.

The snapshot is a tuple that is replaced, never modified; a lookup that
grabbed the previous snapshot keeps a consistent view of it.
"""

from __future__ import annotations

import datetime
import pathlib
import time
from typing import Any, Callable, ClassVar, Generic, Iterator, Optional, TypeVar, Union

from userlookup import fileparse
from userlookup.errors import DatabaseReadError
from userlookup.fileparse import GroupEntry, PasswdEntry
from userlookup.utils import config, constants, ui

T = TypeVar("T")

Lifetime = Union[int, float, datetime.timedelta]
"""Accepted types for the cache lifetime; numbers are seconds"""


def lifetime_seconds(value: None | Lifetime) -> float:
    """Normalize a cache lifetime to seconds.

    Args:
        value: Seconds, a `timedelta`, or ``None`` to use the configured
            default.

    Raises:
        ValueError: If the lifetime is negative.
    """
    if value is None:
        return config.conf.settings.cache_lifetime
    if isinstance(value, datetime.timedelta):
        seconds = value.total_seconds()
    else:
        seconds = float(value)
    if seconds < 0:
        raise ValueError(f"Cache lifetime cannot be negative: {value}")
    return seconds


class RecordStore(Generic[T]):
    """Snapshot of an account database, refreshed when stale.

    Subclasses define the file format (:py:attr:`database` and
    :py:meth:`parse`); adapters define how the file is read.
    """

    database: ClassVar[constants.DATABASE_LITERAL]
    """Format of the file; selects the default path"""

    clock: ClassVar[Callable[[], float]] = staticmethod(time.monotonic)
    """Time source used for the staleness check"""

    def __init__(
        self,
        cache_lifetime: None | Lifetime = None,
        file: None | pathlib.Path | str = None,
    ) -> None:
        """
        Args:
            cache_lifetime: How long a snapshot is served before reading
                the file again. Use ``0`` to read the file on every lookup.
            file: The database file. If ``None`` the configured default
                path for the format is used.
        """
        self.file: Optional[pathlib.Path] = None if file is None else pathlib.Path(file)
        self.cache_lifetime: float = lifetime_seconds(cache_lifetime)
        # Stale whatever the lifetime, so the first lookup always reads the file
        self.last_refresh: float = float("-inf")
        self.records: tuple[T, ...] = ()

    @classmethod
    def from_file(
        cls, file: pathlib.Path | str, cache_lifetime: None | Lifetime = None, **kwargs: Any
    ):
        """Create a store reading *file* instead of the system database."""
        return cls(cache_lifetime, file, **kwargs)

    @property
    def path(self) -> pathlib.Path:
        """The file read on refresh"""
        if self.file is not None:
            return self.file
        return config.conf.default_file(self.database)

    def parse(self, line: str) -> Optional[T]:
        """Convert a line into a record, ``None`` if malformed"""
        raise NotImplementedError

    def is_stale(self) -> bool:
        """Return ``True`` if the snapshot must be read again.

        The comparison is strict; with a lifetime of zero the snapshot is
        always stale, even for lookups within the same clock tick.
        """
        return not self.clock() < self.last_refresh + self.cache_lifetime

    def invalidate(self) -> None:
        """Force the next lookup to read the file again."""
        self.last_refresh = float("-inf")

    def read_failed(self, path: pathlib.Path, exce: OSError | UnicodeDecodeError) -> DatabaseReadError:
        """Report a failed read, and return the exception to raise.

        The snapshot and the refresh time are left untouched.
        """
        ui.instance().warning(f"Could not read {path}: {exce}")
        return DatabaseReadError(path, exce)

    def replace(self, path: pathlib.Path, text: str) -> None:
        """Parse *text* and install the result as the new snapshot.

        Lines that cannot be parsed are dropped.
        """
        parsed: list[T] = []
        for number, line in enumerate(fileparse.lines(text), start=1):
            entry = self.parse(line)
            if entry is None:
                ui.instance().debug(f"{path}:{number}: ignoring malformed line")
                continue
            parsed.append(entry)
        self.records = tuple(parsed)
        self.last_refresh = self.clock()
        ui.instance().debug(f"Loaded {len(parsed)} {self.database} entries from {path}")

    def first(self, field: str, value: Any) -> Optional[T]:
        """Return the first record whose *field* equals *value*"""
        for record in self.records:
            if getattr(record, field) == value:
                return record
        return None

    def first_field(self, field: str, value: Any, wanted: str) -> Any:
        """Return column *wanted* of the first record matching, or ``None``"""
        record = self.first(field, value)
        if record is None:
            return None
        return getattr(record, wanted)

    def snapshot(self) -> list[T]:
        """Copy of the current records"""
        return list(self.records)

    def traverse(self) -> Iterator[T]:
        """One-shot iterator over the current records"""
        return iter(self.records)


class PasswdStore(RecordStore[PasswdEntry]):
    """Store of ``/etc/passwd`` formatted files"""

    database = "passwd"

    def parse(self, line: str) -> Optional[PasswdEntry]:
        return fileparse.parse_passwd(line)


class GroupStore(RecordStore[GroupEntry]):
    """Store of ``/etc/group`` formatted files"""

    database = "group"

    def __init__(
        self,
        cache_lifetime: None | Lifetime = None,
        file: None | pathlib.Path | str = None,
        strict_members: None | bool = None,
    ) -> None:
        """
        Args:
            cache_lifetime: See :py:class:`RecordStore`.
            file: See :py:class:`RecordStore`.
            strict_members: Parse empty member lists as ``()``. If ``None``
                the configured value is used.
        """
        super().__init__(cache_lifetime, file)
        if strict_members is None:
            strict_members = config.conf.settings.strict_members
        self.strict_members = strict_members

    def parse(self, line: str) -> Optional[GroupEntry]:
        return fileparse.parse_group(line, self.strict_members)
