"""
test_md_utils.py
----------------
Unit tests for reading_roundup.utils.md module.

Tests markdown parsing, link search order, URL checks and the
front-matter helpers used by roundup export.
"""
import pytest
import yaml
from datetime import date

from reading_roundup.utils.md import (
    find_link_url,
    get_parser,
    is_absolute_url,
    parse_tree,
    roundup_frontmatter,
    roundup_title,
    walk_preorder,
    yaml_escape,
)


class TestIsAbsoluteUrl:
    """Test is_absolute_url function."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/",
            "http://example.com/a/b?c=d#e",
            "mailto:someone@example.com",
            "ftp://files.example.org/pub",
            "https://x/",
        ],
    )
    def test_absolute_urls(self, url):
        """Test URLs with scheme and host or path are accepted."""
        assert is_absolute_url(url) is True

    @pytest.mark.parametrize(
        "url",
        ["", "/relative/path", "relative", "#anchor", "//example.com/x", "https:", "https://exa mple.com/"],
    )
    def test_non_absolute_urls(self, url):
        """Test relative, scheme-only or malformed URLs are rejected."""
        assert is_absolute_url(url) is False


class TestParseTree:
    """Test parse_tree and walk_preorder."""

    def test_shared_parser_is_cached(self):
        """Test get_parser returns one instance."""
        assert get_parser() is get_parser()

    def test_preorder_visits_descendants_before_siblings(self):
        """Test children of a node come before its next sibling."""
        tree = parse_tree("*a [x](https://x.example/)* b\n\n[y](https://y.example/)")
        links = [n.attrs["href"] for n in walk_preorder(tree) if n.type == "link"]
        assert links == ["https://x.example/", "https://y.example/"]

    def test_root_comes_first(self):
        """Test the root node is yielded first."""
        tree = parse_tree("text")
        assert next(walk_preorder(tree)) is tree


class TestFindLinkUrl:
    """Test find_link_url function."""

    def test_inline_link(self):
        """Test labelled links."""
        assert find_link_url(parse_tree("see [Foo](https://foo.example/)")) == "https://foo.example/"

    def test_angle_autolink(self):
        """Test <...> autolinks."""
        assert find_link_url(parse_tree("<https://baz.example/>")) == "https://baz.example/"

    def test_bare_url_linkified(self):
        """Test bare URLs in running text are links."""
        assert (
            find_link_url(parse_tree("read this https://bar.example/essay today"))
            == "https://bar.example/essay"
        )

    def test_link_nested_in_emphasis(self):
        """Test links inside emphasis are found."""
        assert find_link_url(parse_tree("**[Bold](https://bold.example/)**")) == "https://bold.example/"

    def test_link_in_list_item(self):
        """Test links inside list items are found."""
        assert find_link_url(parse_tree("- item [L](https://list.example/)")) == "https://list.example/"

    def test_first_link_wins(self):
        """Test the first link in document order is returned."""
        tree = parse_tree("[a](https://a.example/) and [b](https://b.example/)")
        assert find_link_url(tree) == "https://a.example/"

    def test_relative_link_skipped(self):
        """Test links without an absolute target are passed over."""
        tree = parse_tree("[rel](/local) then [abs](https://abs.example/)")
        assert find_link_url(tree) == "https://abs.example/"

    def test_no_link(self):
        """Test plain text has no link."""
        assert find_link_url(parse_tree("just some text")) is None

    def test_scheme_less_domain_not_linkified(self):
        """Test the shared parser only linkifies text with a scheme."""
        assert find_link_url(parse_tree("read example.com and mail foo@bar.com")) is None
        assert get_parser().linkify.test("example.com") is False

    def test_only_relative_link(self):
        """Test relative links alone yield nothing."""
        assert find_link_url(parse_tree("[rel](/local)")) is None


class TestFrontmatter:
    """Test front-matter helpers."""

    def test_yaml_escape(self):
        """Test quotes, backslashes and newlines are escaped."""
        assert yaml_escape('a "b" \\ c\nd') == 'a \\"b\\" \\\\ c\\nd'

    def test_roundup_title(self):
        """Test title format."""
        assert roundup_title(date(2024, 3, 1)) == "Reading Roundup, 2024-03-01"

    def test_roundup_frontmatter_exact(self):
        """Test the exact block, ending in a blank line."""
        assert roundup_frontmatter(date(2024, 3, 1)) == (
            "---\n"
            'title: "Reading Roundup, 2024-03-01"\n'
            "date: 2024-03-01\n"
            "---\n"
            "\n"
        )

    def test_roundup_frontmatter_is_valid_yaml(self, split_frontmatter):
        """Test the block loads as YAML with the expected values."""
        header, body = split_frontmatter(roundup_frontmatter(date(2024, 3, 1)) + "A\n\n")
        data = yaml.safe_load(header)
        assert data == {"title": "Reading Roundup, 2024-03-01", "date": date(2024, 3, 1)}
        assert body == ["A", ""]

