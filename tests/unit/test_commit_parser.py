"""Unit tests for gitodb.parser.commit."""
from __future__ import annotations

import pytest

from gitodb.parser import MalformedCommit, format_commit, parse_commit

TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
PARENT_1 = "3b18e512dba79e4c8300dd08aeb37f8e728b8dad"
PARENT_2 = "8ab686eafeb1f44702738c8b0f24f2567c36da6d"

SIGNED = (
    b"tree " + TREE.encode() + b"\n"
    b"author A <a@example.com> 1 +0000\n"
    b"committer C <c@example.com> 2 +0000\n"
    b"gpgsig -----BEGIN PGP SIGNATURE-----\n"
    b" \n"
    b" iQEzBAABCAAdFiEE\n"
    b" -----END PGP SIGNATURE-----\n"
    b"\n"
    b"Signed commit\n"
)


class TestParseCommit:
    def test_merge_commit(self) -> None:
        fields = parse_commit(
            b"tree T\nparent P1\nparent P2\nauthor A\ncommitter C\n\nMerge branch\n"
        )
        assert fields.tree == "T"
        assert fields.parents == ("P1", "P2")
        assert fields.author == "A"
        assert fields.committer == "C"
        assert fields.message == "Merge branch"
        assert fields.gpgsig is None
        assert fields.is_merge

    def test_root_commit_has_no_parents(self) -> None:
        fields = parse_commit(b"tree T\nauthor A\ncommitter C\n\nroot\n")
        assert fields.parents == ()
        assert not fields.is_merge

    def test_missing_fields_default_to_empty(self) -> None:
        fields = parse_commit(b"parent P\n\nmessage")
        assert fields.tree == ""
        assert fields.author == ""
        assert fields.committer == ""
        assert fields.parents == ("P",)

    def test_message_trailing_whitespace_removed(self) -> None:
        fields = parse_commit(b"tree T\n\nline one\n\nline two\n\n  \n")
        assert fields.message == "line one\n\nline two"

    def test_only_first_blank_line_separates(self) -> None:
        fields = parse_commit(b"tree T\n\nsubject\n\nbody\n")
        assert fields.message == "subject\n\nbody"

    def test_empty_message(self) -> None:
        assert parse_commit(b"tree T\n\n").message == ""

    def test_lines_without_space_are_skipped(self) -> None:
        fields = parse_commit(b"tree T\nweird\nauthor A\n\nm\n")
        assert fields.author == "A"
        assert fields.header("weird") is None

    def test_repeated_key_keeps_last_value(self) -> None:
        fields = parse_commit(b"author A1\nauthor A2\n\nm\n")
        assert fields.author == "A2"

    def test_extra_headers_kept(self) -> None:
        fields = parse_commit(b"tree T\nencoding ISO-8859-1\n\nm\n")
        assert fields.header("encoding") == "ISO-8859-1"

    def test_headers_in_first_seen_order(self) -> None:
        fields = parse_commit(b"tree T\nparent P1\nauthor A\nparent P2\n\nm\n")
        assert [key for key, _ in fields.headers] == ["tree", "parent", "author"]
        assert fields.header("parent") == "P1 P2"

    def test_carriage_return_inside_value_is_kept(self) -> None:
        fields = parse_commit(b"tree T\nauthor A\rB <a@x> 1 +0000\ncommitter C\n\nm\n")
        assert fields.author == "A\rB <a@x> 1 +0000"
        assert fields.committer == "C"

    def test_unicode_line_separator_inside_value_is_kept(self) -> None:
        payload = "tree T\nauthor Jos\u2028e <j@x> 1 +0000\ncommitter C\n\nm\n".encode()
        fields = parse_commit(payload)
        assert fields.author == "Jos\u2028e <j@x> 1 +0000"
        assert [key for key, _ in fields.headers] == ["tree", "author", "committer"]

    @pytest.mark.parametrize("separator", ["\r", "\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_non_lf_break_does_not_add_parent(self, separator: str) -> None:
        payload = f"tree T\nauthor A{separator}parent {'a' * 40}\n\nm\n".encode()
        assert parse_commit(payload).parents == ()

    def test_crlf_line_endings(self) -> None:
        fields = parse_commit(b"tree T\r\nparent P\r\nauthor A\r\n\nm\n")
        assert fields.tree == "T"
        assert fields.parents == ("P",)
        assert fields.author == "A"

    def test_invalid_utf8_is_replaced(self) -> None:
        fields = parse_commit(b"tree T\nauthor J\xf6rg\n\nm\n")
        assert fields.author == "J\ufffdrg"


class TestSignedCommit:
    def test_signature_captured(self) -> None:
        fields = parse_commit(SIGNED)
        assert fields.gpgsig is not None
        assert "BEGIN PGP SIGNATURE" in fields.gpgsig
        assert "END PGP SIGNATURE" in fields.gpgsig

    def test_signature_does_not_leak_into_header(self) -> None:
        fields = parse_commit(SIGNED)
        assert fields.committer == "C <c@example.com> 2 +0000"
        assert fields.header("iQEzBAABCAAdFiEE") is None

    def test_message_after_signature(self) -> None:
        assert parse_commit(SIGNED).message == "Signed commit"


class TestMalformedCommit:
    def test_no_separator(self) -> None:
        with pytest.raises(MalformedCommit, match="no blank line"):
            parse_commit(b"tree T\nauthor A\ncommitter C\nmessage\n")

    def test_empty_payload(self) -> None:
        with pytest.raises(MalformedCommit):
            parse_commit(b"")

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_commit(b"tree T")


class TestFormatCommit:
    def test_layout(self) -> None:
        payload = format_commit(
            tree=TREE,
            parents=[PARENT_1, PARENT_2],
            author="A",
            committer="C",
            message="Merge branch\n\n",
        )
        assert payload == (
            f"tree {TREE}\nparent {PARENT_1}\nparent {PARENT_2}\n"
            "author A\ncommitter C\n\nMerge branch\n"
        ).encode()

    def test_parse_reads_back_fields(self) -> None:
        payload = format_commit(TREE, [PARENT_1], "A", "C", "subject\n\nbody")
        fields = parse_commit(payload)
        assert fields.tree == TREE
        assert fields.parents == (PARENT_1,)
        assert fields.message == "subject\n\nbody"

    def test_extra_headers_follow_committer(self) -> None:
        payload = format_commit(TREE, [], "A", "C", "m", extra_headers=[("encoding", "UTF-8")])
        assert b"committer C\nencoding UTF-8\n\n" in payload

    def test_rejects_newline_in_value(self) -> None:
        with pytest.raises(ValueError, match="single line"):
            format_commit(TREE, [], "A\nparent evil", "C", "m")

    @pytest.mark.parametrize("key", ["", "two words", "a\nb"])
    def test_rejects_bad_header_key(self, key: str) -> None:
        with pytest.raises(ValueError, match="header key"):
            format_commit(TREE, [], "A", "C", "m", extra_headers=[(key, "v")])
