"""Unit tests for the skill document parser."""

import pytest

from sfs_skills.infrastructure.skill.markdown_parser import MarkdownParseError, MarkdownParser

SAMPLE = """---
name: sfs-health-endpoint
description: Add a /health endpoint.
---

# Health Endpoint

Intro text.

## Route

```ts
# not a heading
router.get("/health", handler);
```

## Next

Document it with sfs-readme, then deploy with sfs-replit-deploy.
See also sfs-readme and sfs-health-endpoint.
"""


@pytest.mark.unit
class TestMarkdownParser:
    """Tests for MarkdownParser."""

    @pytest.fixture
    def parser(self):
        return MarkdownParser()

    def test_parse_frontmatter_fields(self, parser):
        """Test name and description come from front matter."""
        parsed = parser.parse(SAMPLE)
        assert parsed.name == "sfs-health-endpoint"
        assert parsed.description == "Add a /health endpoint."
        assert parsed.frontmatter == {
            "name": "sfs-health-endpoint",
            "description": "Add a /health endpoint.",
        }

    def test_body_is_stripped(self, parser):
        """Test body excludes the front matter and surrounding blank lines."""
        parsed = parser.parse(SAMPLE)
        assert parsed.content.startswith("# Health Endpoint")
        assert parsed.content.endswith("sfs-health-endpoint.")
        assert "---" not in parsed.content

    def test_title_and_sections_skip_code_blocks(self, parser):
        """Test headings inside fenced code are ignored."""
        parsed = parser.parse(SAMPLE)
        assert parsed.title == "Health Endpoint"
        assert parsed.sections == ["Route", "Next"]

    def test_references_sorted_unique_without_self(self, parser):
        """Test sfs-* mentions are collected once and the skill itself is dropped."""
        parsed = parser.parse(SAMPLE)
        assert parsed.references == ["sfs-readme", "sfs-replit-deploy"]

    def test_references_ignore_css_variables_and_paths(self, parser):
        """Test prefixed tokens inside paths or custom properties are not references."""
        content = """---
name: sfs-theme
description: Theme tokens.
---

Use `var(--sfs-gold)` and load `/assets/sfs-logo.svg`.
"""
        assert parser.parse(content).references == []

    def test_references_ignore_file_names_and_image_tags(self, parser):
        """Test file names and image tags with the prefix are not references."""
        content = """---
name: sfs-theme
description: Theme tokens.
---

Create `sfs-tokens.css` and `config/sfs-config.json`, then pull `sfs-api:latest`.
Finish with sfs-readme.
"""
        assert parser.parse(content).references == ["sfs-readme"]

    def test_custom_prefix_references(self):
        """Test the reference pattern follows the configured prefix."""
        parser = MarkdownParser(name_prefix="acme-")
        content = "---\nname: acme-one\ndescription: One.\n---\n\nThen run acme-two, not sfs-three.\n"
        assert parser.parse(content).references == ["acme-two"]

    def test_missing_name_is_empty_string(self, parser):
        """Test missing fields are surfaced as empty strings, not errors."""
        parsed = parser.parse("---\ndescription: Something.\n---\n\nBody\n")
        assert parsed.name == ""
        assert parsed.description == "Something."

    def test_no_body(self, parser):
        """Test a document with only front matter has an empty body."""
        parsed = parser.parse("---\nname: sfs-x\ndescription: X.\n---")
        assert parsed.content == ""
        assert parsed.title is None
        assert parsed.sections == []

    def test_crlf_and_bom(self, parser):
        """Test Windows line endings and a UTF-8 BOM are accepted."""
        content = "\ufeff---\r\nname: sfs-x\r\ndescription: X.\r\n---\r\n\r\n# Title\r\n"
        parsed = parser.parse(content)
        assert parsed.name == "sfs-x"
        assert parsed.title == "Title"

    def test_empty_content(self, parser):
        """Test empty content raises."""
        with pytest.raises(MarkdownParseError, match="Empty content"):
            parser.parse("   \n")

    def test_missing_frontmatter(self, parser):
        """Test a document without front matter raises."""
        with pytest.raises(MarkdownParseError, match="front matter"):
            parser.parse("# Just markdown\n")

    def test_unclosed_frontmatter(self, parser):
        """Test front matter without a closing delimiter raises."""
        with pytest.raises(MarkdownParseError):
            parser.parse("---\nname: sfs-x\ndescription: X.\n# Body\n")

    def test_invalid_yaml(self, parser):
        """Test invalid YAML raises with the file path in the message."""
        with pytest.raises(MarkdownParseError) as exc_info:
            parser.parse("---\nname: [unclosed\n---\n\nBody\n", file_path="x/SKILL.md")
        assert "Invalid YAML" in str(exc_info.value)
        assert exc_info.value.file_path == "x/SKILL.md"
        assert "x/SKILL.md" in str(exc_info.value)

    def test_non_mapping_yaml(self, parser):
        """Test YAML that is not a mapping raises."""
        with pytest.raises(MarkdownParseError, match="dictionary"):
            parser.parse("---\n- a\n- b\n---\n\nBody\n")

    def test_parse_file(self, parser, tmp_path):
        """Test parsing from disk."""
        path = tmp_path / "SKILL.md"
        path.write_text(SAMPLE, encoding="utf-8")
        assert parser.parse_file(str(path)).name == "sfs-health-endpoint"

    def test_parse_file_missing(self, parser, tmp_path):
        """Test a missing file raises MarkdownParseError."""
        with pytest.raises(MarkdownParseError, match="File not found"):
            parser.parse_file(str(tmp_path / "nope.md"))

    def test_parse_file_not_utf8(self, parser, tmp_path):
        """Test undecodable bytes raise MarkdownParseError."""
        path = tmp_path / "SKILL.md"
        path.write_bytes(b"---\nname: sfs-x\ndescription: \xff\xfe\n---\n")
        with pytest.raises(MarkdownParseError, match="UTF-8"):
            parser.parse_file(str(path))

    def test_full_content_round_trip(self, parser):
        """Test full_content re-parses to the same fields."""
        parsed = parser.parse(SAMPLE)
        again = parser.parse(parsed.full_content)
        assert again.name == parsed.name
        assert again.description == parsed.description
        assert again.content == parsed.content
