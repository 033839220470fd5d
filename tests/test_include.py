"""Tests for @include handling."""

from pathlib import Path

import pytest

from kdl_html import (
    DocumentParseError,
    MissingExtensionError,
    Scope,
    SourceReadError,
    UnboundVariableError,
    UnsupportedExtensionError,
    render,
    render_file,
)


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestHtmlInclude:
    def test_lines_verbatim_at_depth(self, tmp_path):
        write(tmp_path / "snippet.html", "<b>raw ${not_interpolated}</b>\n<i>x</i>\n")
        root = write(tmp_path / "index.kdl", 'div {\n  @include "snippet.html"\n}\n')
        doc = render_file(root)
        assert doc.text == "<div>\n\t<b>raw ${not_interpolated}</b>\n\t<i>x</i>\n</div>\n"


class TestMarkdownInclude:
    @pytest.mark.parametrize("name", ["notes.md", "notes.markdown"])
    def test_converted(self, tmp_path, name):
        write(tmp_path / name, "# Notes\n")
        root = write(tmp_path / "index.kdl", f'@include "{name}"\n')
        assert render_file(root).text == "<h1>Notes</h1>\n"


class TestKdlInclude:
    def test_same_depth(self, tmp_path):
        write(tmp_path / "item.kdl", 'li "one"\nli "two"\n')
        root = write(tmp_path / "index.kdl", 'ul {\n  @include "item.kdl"\n}\n')
        assert render_file(root).text == "<ul>\n\t<li>one</li>\n\t<li>two</li>\n</ul>\n"

    def test_sees_parent_bindings_before_include(self, tmp_path):
        write(tmp_path / "part.kdl", '- "${title}"\n')
        root = write(tmp_path / "index.kdl", 'let title="Home"\n@include "part.kdl"\n')
        assert render_file(root).text == "Home\n"

    def test_cannot_see_bindings_after_include(self, tmp_path):
        write(tmp_path / "part.kdl", '- "${late}"\n')
        root = write(tmp_path / "index.kdl", '@include "part.kdl"\nlet late="x"\n')
        with pytest.raises(UnboundVariableError) as info:
            render_file(root)
        assert info.value.source == tmp_path / "part.kdl"

    def test_bindings_do_not_leak_back(self, tmp_path):
        write(tmp_path / "part.kdl", 'let x="inner"\nlet leaked="yes"\n- "${x}"\n')
        root = write(
            tmp_path / "index.kdl",
            'let x="outer"\n@include "part.kdl"\n- "${x}"\n',
        )
        assert render_file(root).text == "inner\nouter\n"
        with pytest.raises(UnboundVariableError):
            render('@include "part.kdl"\n- "${leaked}"\n', path=root)

    def test_call_site_overrides(self, tmp_path):
        write(tmp_path / "card.kdl", 'h2 "${title}"\np "${body}"\n')
        root = write(
            tmp_path / "index.kdl",
            'let title="default" body="text"\n'
            '@include "card.kdl" title="First"\n'
            '@include "card.kdl"\n',
        )
        assert render_file(root).text == (
            "<h2>First</h2>\n<p>text</p>\n"
            "<h2>default</h2>\n<p>text</p>\n"
        )

    def test_overrides_not_interpolated(self, tmp_path):
        write(tmp_path / "part.kdl", '- "${v}"\n')
        root = write(tmp_path / "index.kdl", '@include "part.kdl" v="${raw}"\n')
        assert render_file(root).text == "${raw}\n"

    def test_overrides_do_not_leak_back(self, tmp_path):
        write(tmp_path / "part.kdl", '- "${v}"\n')
        root = write(tmp_path / "index.kdl", '@include "part.kdl" v="1"\n- "${v}"\n')
        with pytest.raises(UnboundVariableError):
            render_file(root)

    def test_nested_relative_paths(self, tmp_path):
        write(tmp_path / "parts" / "nav.kdl", 'nav {\n  @include "links.html"\n}\n')
        write(tmp_path / "parts" / "links.html", '<a href="/">Home</a>\n')
        root = write(tmp_path / "index.kdl", 'body {\n  @include "parts/nav.kdl"\n}\n')
        assert render_file(root).text == (
            "<body>\n\t<nav>\n\t\t<a href=\"/\">Home</a>\n\t</nav>\n</body>\n"
        )

    def test_doctype_allowed_in_root_level_include(self, tmp_path):
        write(tmp_path / "head.kdl", '!doctype "html"\n')
        root = write(tmp_path / "index.kdl", '@include "head.kdl"\n')
        assert render_file(root).text == "<!DOCTYPE html>\n"

    def test_parse_error_names_included_file(self, tmp_path):
        bad = write(tmp_path / "bad.kdl", 'div "unclosed\n')
        root = write(tmp_path / "index.kdl", '@include "bad.kdl"\n')
        with pytest.raises(DocumentParseError) as info:
            render_file(root)
        assert info.value.source == bad


class TestIncludeErrors:
    def test_path_interpolated(self, tmp_path):
        write(tmp_path / "en.html", "<p>hello</p>\n")
        root = write(tmp_path / "index.kdl", '@include "${lang}.html"\n')
        assert render_file(root, Scope({"lang": "en"})).text == "<p>hello</p>\n"

    def test_missing_file(self, tmp_path):
        root = write(tmp_path / "index.kdl", '@include "nope.html"\n')
        with pytest.raises(SourceReadError) as info:
            render_file(root)
        assert info.value.path == tmp_path / "nope.html"
        assert info.value.source == root

    def test_non_utf8_file(self, tmp_path):
        bad = tmp_path / "bad.html"
        bad.write_bytes(b"<p>\xff</p>\n")
        root = write(tmp_path / "index.kdl", '@include "bad.html"\n')
        with pytest.raises(SourceReadError) as info:
            render_file(root)
        assert info.value.path == bad
        assert isinstance(info.value.cause, UnicodeDecodeError)

    def test_unsupported_extension(self, tmp_path):
        write(tmp_path / "data.txt", "x\n")
        root = write(tmp_path / "index.kdl", '@include "data.txt"\n')
        with pytest.raises(UnsupportedExtensionError) as info:
            render_file(root)
        assert info.value.extension == "txt"

    def test_missing_extension(self, tmp_path):
        write(tmp_path / "README", "x\n")
        root = write(tmp_path / "index.kdl", '@include "README"\n')
        with pytest.raises(MissingExtensionError):
            render_file(root)


class TestDependencies:
    def test_order_first_encountered(self, tmp_path):
        root = write(tmp_path / "index.kdl", '@include "a.kdl"\n')
        write(tmp_path / "a.kdl", '@include "b.html"\n')
        write(tmp_path / "b.html", "<hr>\n")
        doc = render_file(root)
        assert doc.dependencies == [root, tmp_path / "a.kdl", tmp_path / "b.html"]

    def test_repeats_kept(self, tmp_path):
        write(tmp_path / "x.html", "<br>\n")
        root = write(tmp_path / "index.kdl", '@include "x.html"\n@include "x.html"\n')
        doc = render_file(root)
        assert doc.dependencies == [root, tmp_path / "x.html", tmp_path / "x.html"]

    def test_stdin_render_has_no_root_dependency(self, tmp_path, monkeypatch):
        write(tmp_path / "x.html", "<br>\n")
        monkeypatch.chdir(tmp_path)
        doc = render('@include "x.html"\n')
        assert doc.dependencies == [Path("x.html")]
