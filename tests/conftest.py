from __future__ import annotations

import pathlib

import pytest

import userlookup

DATA = pathlib.Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def fresh_library():
    """Every test starts with default settings and UI"""
    userlookup.initlib()
    yield
    userlookup.initlib()


@pytest.fixture
def passwd_file() -> pathlib.Path:
    """Three users: root (0), user1 (1000) and user2 (1001)"""
    return DATA / "passwd"


@pytest.fixture
def group_file() -> pathlib.Path:
    """Three groups: root (0), users (100) and wheel (10)"""
    return DATA / "group"


@pytest.fixture
def database(tmp_path: pathlib.Path):
    """Return a function writing a database file with the given lines"""

    def _write(*lines: str, name: str = "db", newline: str = "\n") -> pathlib.Path:
        path = tmp_path / name
        path.write_bytes(newline.join(lines).encode("utf8"))
        return path

    return _write


class FakeClock:
    """Manually advanced replacement for `time.monotonic`"""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)
