"""asyncio readers for the account databases.

Same lookups as :py:mod:`userlookup.reader`, but the file is read in a
worker thread so the event loop is not blocked::

    reader = AsyncPasswdReader.from_file("tests/data/passwd", 0)
    entries = await reader.get_entries()
    name = await reader.get_username_by_uid(1000)

A reader must be used from a single event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any, Iterator, Optional, TypeVar

from userlookup.fileparse import GroupEntry, PasswdEntry
from userlookup.store import GroupStore, PasswdStore, RecordStore
from userlookup.utils import content

T = TypeVar("T")


class AsyncStore(RecordStore[T]):
    """Refreshes the snapshot without blocking the event loop.

    Concurrent tasks triggering a refresh wait for the one in progress.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._lock: Optional[asyncio.Lock] = None

    @property
    def lock(self) -> asyncio.Lock:
        # Created on first use, inside the running loop
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def ensure_fresh(self) -> None:
        """Read the file again if the snapshot is stale.

        Raises:
            DatabaseReadError: If the file could not be read.
        """
        if not self.is_stale():
            return
        async with self.lock:
            if not self.is_stale():
                return
            await self._refresh()

    async def refresh(self) -> None:
        """Read the file, regardless of the age of the snapshot.

        Raises:
            DatabaseReadError: If the file could not be read.
        """
        async with self.lock:
            await self._refresh()

    async def _refresh(self) -> None:
        path = self.path
        try:
            text = await asyncio.to_thread(content, path)
        except (OSError, UnicodeDecodeError) as exce:
            raise self.read_failed(path, exce) from exce
        self.replace(path, text)


class AsyncPasswdReader(AsyncStore[PasswdEntry], PasswdStore):
    """Read and lookup user information from a passwd file"""

    async def get_entries(self) -> list[PasswdEntry]:
        """Get the entire list of passwd entries, as a copy"""
        await self.ensure_fresh()
        return self.snapshot()

    async def iter_entries(self) -> Iterator[PasswdEntry]:
        """Iterate over the passwd entries"""
        await self.ensure_fresh()
        return self.traverse()

    async def get_by_username(self, username: str) -> Optional[PasswdEntry]:
        await self.ensure_fresh()
        return self.first("username", username)

    async def get_by_uid(self, uid: int) -> Optional[PasswdEntry]:
        await self.ensure_fresh()
        return self.first("uid", uid)

    async def get_username_by_uid(self, uid: int) -> Optional[str]:
        await self.ensure_fresh()
        return self.first_field("uid", uid, "username")

    async def get_uid_by_username(self, username: str) -> Optional[int]:
        await self.ensure_fresh()
        return self.first_field("username", username, "uid")


class AsyncGroupReader(AsyncStore[GroupEntry], GroupStore):
    """Read and lookup group information from a group file"""

    async def get_groups(self) -> list[GroupEntry]:
        """Get the entire list of group entries, as a copy"""
        await self.ensure_fresh()
        return self.snapshot()

    async def iter_groups(self) -> Iterator[GroupEntry]:
        """Iterate over the group entries"""
        await self.ensure_fresh()
        return self.traverse()

    async def get_by_name(self, name: str) -> Optional[GroupEntry]:
        await self.ensure_fresh()
        return self.first("name", name)

    async def get_by_gid(self, gid: int) -> Optional[GroupEntry]:
        await self.ensure_fresh()
        return self.first("gid", gid)

    async def get_name_by_gid(self, gid: int) -> Optional[str]:
        await self.ensure_fresh()
        return self.first_field("gid", gid, "name")

    async def get_gid_by_name(self, name: str) -> Optional[int]:
        await self.ensure_fresh()
        return self.first_field("name", name, "gid")
