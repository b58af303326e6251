"""Tests for front matter parsing and re-serialization."""

import pytest
from pathlib import Path

from devto_publisher.core.models import FrontMatter, FrontMatterFormat, ParsedDocument, ParseError
from devto_publisher.core.parser import decode_front_matter, parse, parse_document, split_front_matter


ARTICLE = """---
title: "A title"
published: false
description: "A description"
tags: "tag-one, tag-two"
---

![image](./image.png)
"""


class TestParseDocument:
    """Tests for parse_document()."""

    @pytest.fixture
    def article(self, tmp_path) -> Path:
        path = tmp_path / "article.md"
        path.write_text(ARTICLE)
        return path

    def test_parse(self, article):
        actual = parse_document(article)
        expected = ParsedDocument(
            front_matter_format=FrontMatterFormat.YAML,
            front_matter_source=b'title: "A title"\npublished: false\n'
                                b'description: "A description"\ntags: "tag-one, tag-two"\n',
            front_matter=FrontMatter(
                title="A title",
                published=False,
                description="A description",
                tags="tag-one, tag-two",
            ),
            markdown_source=b"\n![image](./image.png)\n",
        )

        assert actual == expected

    def test_accepts_string_path(self, article):
        assert parse_document(str(article)).front_matter.title == "A title"

    def test_content(self, article):
        expected = """---
title: A title
published: false
description: A description
tags: tag-one, tag-two
---

![image](./image.png)
"""
        assert parse_document(article).content() == expected

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_document(tmp_path / "unknown.md")

    def test_error_names_file(self, tmp_path):
        path = tmp_path / "broken.md"
        path.write_text("---\npublished: maybe\n---\nbody\n")

        with pytest.raises(ParseError) as exc_info:
            parse_document(path)

        assert str(path) in str(exc_info.value)
        assert exc_info.value.name == str(path)


class TestParse:
    """Tests for splitting and decoding raw bytes."""

    def test_no_front_matter(self):
        doc = parse(b"# Heading\n\nJust content.\n")

        assert doc.front_matter_format is FrontMatterFormat.NONE
        assert doc.front_matter_source == b""
        assert doc.front_matter == FrontMatter()
        assert doc.markdown_source == b"# Heading\n\nJust content.\n"
        assert not doc.has_front_matter

    def test_empty_input(self):
        doc = parse(b"")
        assert doc.front_matter == FrontMatter()
        assert doc.markdown_source == b""

    def test_unclosed_delimiter_is_body(self):
        source = b"---\ntitle: Lost\n\nbody\n"
        doc = parse(source)

        assert doc.front_matter_format is FrontMatterFormat.NONE
        assert doc.markdown_source == source

    def test_delimiter_must_be_first_line(self):
        source = b"\n---\ntitle: x\n---\nbody\n"
        assert parse(source).markdown_source == source

    def test_delimiter_must_be_exact(self):
        source = b"----\ntitle: x\n----\nbody\n"
        assert parse(source).front_matter_format is FrontMatterFormat.NONE

    def test_empty_header(self):
        doc = parse(b"---\n---\nbody")

        assert doc.front_matter_format is FrontMatterFormat.YAML
        assert doc.front_matter_source == b""
        assert doc.front_matter == FrontMatter()
        assert doc.markdown_source == b"body"

    def test_closing_delimiter_at_end_of_file(self):
        doc = parse(b"---\ntitle: Only header\n---")
        assert doc.front_matter.title == "Only header"
        assert doc.markdown_source == b""

    def test_crlf_line_endings(self):
        doc = parse(b"---\r\ntitle: A\r\n---\r\nbody\r\n")

        assert doc.front_matter_source == b"title: A\r\n"
        assert doc.front_matter.title == "A"
        assert doc.markdown_source == b"body\r\n"

    def test_body_kept_verbatim(self):
        body = b"\n\n  ---\nstill body\n---\nand more  \n\n"
        doc = parse(b"---\ntitle: t\n---\n" + body)
        assert doc.markdown_source == body

    def test_missing_fields_use_defaults(self):
        doc = parse(b"---\ntitle: Only a title\n---\n")
        assert doc.front_matter == FrontMatter(title="Only a title")

    def test_null_values_use_defaults(self):
        doc = parse(b"---\ntitle:\npublished:\n---\n")
        assert doc.front_matter == FrontMatter()

    def test_unknown_keys_ignored(self):
        doc = parse(b"---\ntitle: T\ncover_image: https://example.com/c.png\n---\n")
        assert doc.front_matter == FrontMatter(title="T")

    def test_published_true(self):
        assert parse(b"---\npublished: true\n---\n").front_matter.published is True

    def test_text_fields_keep_written_scalar(self):
        doc = parse(b"---\ntitle: 3.10\ndescription: yes\ntags: 0x1F\n---\n")

        assert doc.front_matter == FrontMatter(title="3.10", description="yes", tags="0x1F")

    def test_text_fields_survive_content(self):
        doc = parse(b"---\ntitle: 3.10\ndescription: yes\ntags: 0x1F\n---\nbody\n")
        again = parse(doc.content().encode())

        assert again.front_matter == doc.front_matter

    def test_quoted_and_null_text_fields(self):
        doc = parse(b"---\ntitle: \"null\"\ndescription: ~\ntags: 'a, b'\n---\n")
        assert doc.front_matter == FrontMatter(title="null", tags="a, b")

    def test_string_field_rejects_mapping(self):
        with pytest.raises(ParseError, match="'title' must be a string"):
            parse(b"---\ntitle:\n  nested: value\n---\n")

    def test_published_yaml_boolean_spellings(self):
        assert parse(b"---\npublished: yes\n---\n").front_matter.published is True
        assert parse(b"---\npublished: False\n---\n").front_matter.published is False

    def test_published_rejects_list(self):
        with pytest.raises(ParseError, match="published"):
            parse(b"---\npublished:\n  - true\n---\n")

    def test_invalid_utf8_in_body(self):
        with pytest.raises(ParseError, match="body is not valid UTF-8"):
            parse(b"---\ntitle: T\n---\n\xff\n")

    def test_invalid_yaml(self):
        with pytest.raises(ParseError):
            parse(b"---\ntitle: [unclosed\n---\nbody\n")

    def test_published_must_be_boolean(self):
        with pytest.raises(ParseError, match="published"):
            parse(b'---\npublished: "false"\n---\n')

    def test_string_field_rejects_list(self):
        with pytest.raises(ParseError, match="tags"):
            parse(b"---\ntags:\n  - one\n  - two\n---\n")

    def test_top_level_must_be_mapping(self):
        with pytest.raises(ParseError, match="mapping"):
            parse(b"---\n- a\n- b\n---\n")

    def test_invalid_utf8(self):
        with pytest.raises(ParseError, match="front matter is not valid UTF-8"):
            parse(b"---\ntitle: \xff\n---\n")

    def test_invalid_utf8_without_header(self):
        with pytest.raises(ParseError, match="document is not valid UTF-8"):
            parse(b"plain \xfe text\n")

    def test_source_decodes_to_front_matter(self):
        doc = parse(ARTICLE.encode())
        assert decode_front_matter(doc.front_matter_source) == doc.front_matter


class TestSplitFrontMatter:
    """Tests for split_front_matter()."""

    def test_split(self):
        assert split_front_matter(b"---\na: 1\n---\nrest") == (b"a: 1\n", b"rest")

    def test_no_header(self):
        assert split_front_matter(b"rest") is None

    def test_only_opening(self):
        assert split_front_matter(b"---\n") is None


class TestContent:
    """Tests for rebuilding documents."""

    def test_round_trip(self):
        doc = parse(ARTICLE.encode())
        again = parse(doc.content().encode())

        assert again.front_matter == doc.front_matter
        assert again.markdown_source == doc.markdown_source

    def test_round_trip_special_characters(self):
        doc = parse(b"---\ntitle: 'Colons: and #hashes'\ndescription: '2024-01-01'\n---\nbody\n")
        again = parse(doc.content().encode())

        assert again.front_matter.title == "Colons: and #hashes"
        assert again.front_matter.description == "2024-01-01"

    def test_edit_fields(self):
        doc = parse(ARTICLE.encode())
        edited = doc.with_front_matter(published=True, title="New title")

        again = parse(edited.content().encode())
        assert again.front_matter.published is True
        assert again.front_matter.title == "New title"
        assert again.front_matter.tags == "tag-one, tag-two"
        assert again.markdown_source == doc.markdown_source

        # The original is untouched
        assert doc.front_matter.published is False

    def test_unknown_keys_dropped(self):
        doc = parse(b"---\ntitle: T\nseries: S\n---\nbody\n")
        assert "series" not in doc.content()

    def test_no_header_returns_body(self):
        doc = parse(b"# Heading\n")
        assert doc.content() == "# Heading\n"

    def test_no_header_with_edits_adds_header(self):
        doc = parse(b"# Heading\n").with_front_matter(title="Added")
        content = doc.content()

        assert content.startswith("---\n")
        assert content.endswith("---\n# Heading\n")
        assert parse(content.encode()).front_matter.title == "Added"

    def test_key_order(self):
        content = parse(b"---\ntags: t\ntitle: T\n---\n").content()
        lines = content.splitlines()
        assert [line.split(":")[0] for line in lines[1:5]] == ["title", "published", "description", "tags"]
