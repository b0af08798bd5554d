"""Test the `userlookup.fileparse` module"""

import pathlib

import pytest

from userlookup import fileparse
from userlookup.fileparse import GroupEntry, PasswdEntry


class TestPasswdParser:
    """Test the parsing of passwd lines"""

    def test_complete_line(self) -> None:
        line = "user1:x:1000:1001:User One,,,:/home/user1:/bin/bash"
        assert fileparse.parse_passwd(line) == PasswdEntry(
            username="user1",
            password="x",
            uid=1000,
            gid=1001,
            comment="User One,,,",
            home="/home/user1",
            shell="/bin/bash",
        )

    def test_empty_columns(self) -> None:
        entry = fileparse.parse_passwd("nobody::65534:65534:::")
        assert entry is not None
        assert entry.password == ""
        assert entry.comment == ""
        assert entry.home == ""
        assert entry.shell == ""

    def test_extra_colons_stay_in_shell(self) -> None:
        entry = fileparse.parse_passwd("odd:x:1:1:c:/home/odd:/bin/sh:-l:extra")
        assert entry is not None
        assert entry.shell == "/bin/sh:-l:extra"

    def test_no_trimming(self) -> None:
        entry = fileparse.parse_passwd(" user :x:5:5: comment : /home : /bin/sh ")
        assert entry is not None
        assert entry.username == " user "
        assert entry.shell == " /bin/sh "

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "user1",
            "user1:x:1000:1000:User One:/home/user1",
            "user1:x:1000",
        ],
    )
    def test_truncated(self, line: str) -> None:
        assert fileparse.parse_passwd(line) is None

    @pytest.mark.parametrize(
        "uid,gid",
        [
            ("abc", "1000"),
            ("1000", "abc"),
            ("-1", "1000"),
            ("", "1000"),
            (" 1000", "1000"),
            ("1_000", "1000"),
            ("4294967296", "1000"),
            ("1000", "99999999999"),
        ],
    )
    def test_invalid_ids(self, uid: str, gid: str) -> None:
        line = f"user1:x:{uid}:{gid}:User One:/home/user1:/bin/bash"
        assert fileparse.parse_passwd(line) is None

    def test_id_bounds(self) -> None:
        entry = fileparse.parse_passwd("max:x:4294967295:0:::")
        assert entry is not None
        assert entry.uid == 4294967295
        assert entry.gid == 0

    def test_real(self) -> None:
        sample = pathlib.Path(__file__).parent / "data" / "passwd-ubuntu-focal"
        with open(sample, encoding="utf8") as passwd_content:
            ret = fileparse.passwd(passwd_content.readlines())
        assert len(ret) == 32
        assert ret[0].username == "root"
        assert ret[-1] == PasswdEntry(
            "lxd", "x", 998, 100, "", "/var/snap/lxd/common/lxd", "/bin/false"
        )

    def test_batch_drops_malformed(self) -> None:
        ret = fileparse.passwd(
            [
                "a:x:1:1:::\n",
                "broken\n",
                "b:x:nope:1:::\n",
                "c:x:3:3:::\r\n",
            ]
        )
        assert [e.username for e in ret] == ["a", "c"]
        assert ret[1].shell == ""


class TestGroupParser:
    """Test the parsing of group lines"""

    def test_complete_line(self) -> None:
        assert fileparse.parse_group("users:x:100:user1,user2") == GroupEntry(
            name="users", password="x", gid=100, members=("user1", "user2")
        )

    def test_single_member(self) -> None:
        entry = fileparse.parse_group("wheel:x:10:root")
        assert entry is not None
        assert entry.members == ("root",)

    def test_empty_members(self) -> None:
        entry = fileparse.parse_group("root:x:0:")
        assert entry is not None
        assert entry.members == ("",)
        assert len(entry.members) == 1

    def test_empty_members_strict(self) -> None:
        entry = fileparse.parse_group("root:x:0:", strict_members=True)
        assert entry is not None
        assert entry.members == ()

    def test_strict_keeps_members(self) -> None:
        entry = fileparse.parse_group("users:x:100:a,,b", strict_members=True)
        assert entry is not None
        assert entry.members == ("a", "", "b")

    def test_extra_colons_stay_in_members(self) -> None:
        entry = fileparse.parse_group("odd:x:7:a:b,c")
        assert entry is not None
        assert entry.members == ("a:b", "c")

    @pytest.mark.parametrize("line", ["", "root", "root:x", "root:x:0"])
    def test_truncated(self, line: str) -> None:
        assert fileparse.parse_group(line) is None

    @pytest.mark.parametrize("gid", ["x", "-5", "", "4294967296", "1e3"])
    def test_invalid_gid(self, gid: str) -> None:
        assert fileparse.parse_group(f"users:x:{gid}:user1") is None

    def test_batch(self) -> None:
        ret = fileparse.group(["root:x:0:\n", "bad:x:y:\n", "users:x:100:a\n"])
        assert [g.name for g in ret] == ["root", "users"]


class TestLines:
    """Test the splitting of file content in lines"""

    def test_single_carriage_return_removed(self) -> None:
        text = "a:x:1:1:::/bin/sh\r\r\n"
        assert fileparse.lines(text) == ["a:x:1:1:::/bin/sh\r"]
        assert fileparse.passwd([text])[0].shell == "/bin/sh\r"
        assert fileparse.group(["g:x:1:a\r\r\n"])[0].members == ("a\r",)

    def test_trailing_newline(self) -> None:
        assert fileparse.lines("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self) -> None:
        assert fileparse.lines("a\nb") == ["a", "b"]

    def test_empty(self) -> None:
        assert fileparse.lines("") == []

    def test_crlf(self) -> None:
        assert fileparse.lines("a\r\nb\r\n") == ["a", "b"]

    def test_blank_lines_kept(self) -> None:
        assert fileparse.lines("a\n\nb\n\n") == ["a", "", "b", ""]

    def test_other_breaks_are_content(self) -> None:
        assert fileparse.lines("a\x0bb\n") == ["a\x0bb"]


@pytest.mark.parametrize(
    "value,expected",
    [
        ("0", 0),
        ("1000", 1000),
        ("+12", 12),
        ("007", 7),
        ("4294967295", 4294967295),
        ("4294967296", None),
        ("++1", None),
        ("١٢", None),
    ],
)
def test_parse_id(value: str, expected) -> None:
    assert fileparse.parse_id(value) == expected
