"""Tests for bdpack.header."""

from __future__ import annotations

from bdpack.header import build_header, ensure_authors, legacy_header, passthrough_header, sanitize_name


def _tags(header: str) -> list[str]:
    return [line[len(" * @"):].split(" ", 1)[0] for line in header.splitlines() if line.startswith(" * @")]


def test_passthrough_emits_every_truthy_key() -> None:
    info = {
        "name": "Foo",
        "version": "1.2.0",
        "description": "Does foo things",
        "source": "",
        "updateUrl": None,
        "invite": 0,
    }

    header = passthrough_header("Foo", info)

    assert header.startswith("/**\n")
    assert header.endswith("\n */")
    assert " * @version 1.2.0" in header
    assert " * @description Does foo things" in header
    assert _tags(header) == ["name", "version", "description"]


def test_passthrough_never_emits_authors_tag() -> None:
    info = {"name": "Foo", "authors": [{"name": "Someone", "discord_id": "1"}]}

    assert "authors" not in _tags(passthrough_header("Foo", info))


def test_passthrough_synthesises_authors_from_author_field() -> None:
    info = {"name": "Foo", "author": "X", "authorId": "1234"}

    header = passthrough_header("Foo", info)

    assert info["authors"] == [{"name": "X", "discord_id": "1234"}]
    assert " * @author X" in header
    assert "authors" not in _tags(header)


def test_ensure_authors_keeps_existing_list() -> None:
    info = {"author": "X", "authors": [{"name": "Y"}]}
    ensure_authors(info)
    assert info["authors"] == [{"name": "Y"}]

    bare = {"author": "X"}
    ensure_authors(bare)
    assert bare["authors"] == [{"name": "X"}]


def test_missing_name_falls_back_to_sanitised_directory_name() -> None:
    header = passthrough_header("My Cool Plugin", {"version": "1.0.0"})

    assert _tags(header)[0] == "name"
    assert " * @name MyCool Plugin" in header


def test_sanitize_name_strips_first_newline_and_first_space() -> None:
    assert sanitize_name("Foo Bar Baz\n\n") == "FooBar Baz\n"


def test_passthrough_renders_non_string_values_like_javascript() -> None:
    header = passthrough_header("Foo", {"name": "Foo", "beta": True, "tags": ["a", "b"]})

    assert " * @beta true" in header
    assert " * @tags a,b" in header


def test_passthrough_of_empty_info_still_names_the_plugin() -> None:
    info: dict = {}

    header = passthrough_header("MyPlugin", info)

    assert header == "/**\n * @name MyPlugin\n */"
    assert info == {"name": "MyPlugin"}
    assert passthrough_header("Foo", None) == ""


def test_passthrough_writes_sanitised_name_back_into_info() -> None:
    info = {"name": "Foo Plugin", "version": "1.0.0"}

    header = passthrough_header("Dir", info)

    assert info["name"] == "FooPlugin"
    assert _tags(header) == ["name", "version"]
    assert " * @name FooPlugin" in header


def test_passthrough_follows_javascript_truthiness_and_number_rendering() -> None:
    info = {"name": "Foo", "tags": [], "links": {}, "ratio": 0.0, "build": 2.0, "scale": 1.5, "flags": ["a", None, 3.0]}

    header = passthrough_header("Foo", info)

    assert _tags(header) == ["name", "tags", "links", "build", "scale", "flags"]
    assert " * @build 2\n" in header
    assert " * @scale 1.5\n" in header
    assert " * @flags a,,3\n" in header


def test_legacy_header_always_has_eight_tags() -> None:
    assert _tags(legacy_header("Foo", {})) == [
        "name",
        "version",
        "website",
        "source",
        "patreon",
        "donate",
        "authorLink",
        "invite",
    ]
    full = legacy_header(
        "Foo",
        {
            "name": "Foo Plugin",
            "version": "2.0.0",
            "github": "https://github.com/me/foo",
            "github_raw": "https://raw.githubusercontent.com/me/foo/main/Foo.plugin.js",
            "patreonLink": "https://patreon.com/me",
            "paypalLink": "https://paypal.me/me",
            "authorLink": "https://github.com/me",
            "inviteCode": "abc123",
            "description": "ignored in legacy mode",
        },
    )
    assert len(_tags(full)) == 8
    assert " * @name FooPlugin" in full
    assert " * @website https://github.com/me/foo" in full
    assert " * @invite abc123" in full
    assert "description" not in full


def test_build_header_dispatches_on_legacy_flag() -> None:
    info = {"name": "Foo", "description": "hello"}

    assert "@description" in build_header("Foo", dict(info))
    assert "@description" not in build_header("Foo", dict(info), legacy=True)
