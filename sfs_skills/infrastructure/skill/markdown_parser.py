"""
Skill document parser.

Parses SFS skill documents: a YAML front-matter block followed by a
free-form Markdown body.

Example SKILL.md:
```markdown
---
name: sfs-health-endpoint
description: Add a /health endpoint that reports dependency status.
---

# Health Endpoint

## Steps
1. Create the route
2. Check each dependency in parallel

When done, run sfs-readme to document the endpoint.
```
"""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml


class MarkdownParseError(Exception):
    """Exception raised when a skill document cannot be parsed."""

    def __init__(self, message: str, file_path: str | None = None) -> None:
        self.file_path = file_path
        super().__init__(f"{message}" + (f" in {file_path}" if file_path else ""))


@dataclass(frozen=True)
class SkillMarkdown:
    """
    Parsed skill document.

    Attributes:
        frontmatter: YAML front matter as a dictionary
        content: Markdown body (everything after the front matter)
        name: Skill name from front matter ("" when missing)
        description: Skill description from front matter ("" when missing)
        title: First level-1 heading of the body
        sections: Level-2 heading texts in document order
        references: Other sfs-* skill names mentioned in the body
    """

    frontmatter: dict[str, Any]
    content: str
    name: str
    description: str
    title: Optional[str] = None
    sections: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)

    @property
    def full_content(self) -> str:
        """Return the full markdown document including front matter."""
        yaml_str = yaml.safe_dump(
            self.frontmatter, default_flow_style=False, allow_unicode=True, sort_keys=False
        )
        return f"---\n{yaml_str}---\n\n{self.content}\n"


class MarkdownParser:
    """
    Parser for skill documents.

    Supports the standard format:
    - YAML front matter delimited by ---
    - Markdown content after the front matter

    Presence and shape of ``name`` and ``description`` are not enforced
    here; SkillValidator reports those together with other problems.
    """

    FRONTMATTER_PATTERN = re.compile(
        r"^\ufeff?---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n(.*))?$",
        re.DOTALL,
    )
    TITLE_PATTERN = re.compile(r"^#[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
    SECTION_PATTERN = re.compile(r"^##[ \t]+(.+?)[ \t#]*$", re.MULTILINE)
    FENCE_PATTERN = re.compile(r"^(```|~~~).*?^\1[ \t]*$", re.MULTILINE | re.DOTALL)

    def __init__(self, name_prefix: str = "sfs-") -> None:
        self.name_prefix = name_prefix
        self._reference_pattern = re.compile(
            r"(?<![\w/.-])("
            + re.escape(name_prefix)
            + r"[a-z0-9]+(?:-[a-z0-9]+)*)"
            # file names (sfs-tokens.css) and image tags (sfs-api:latest) are not references
            + r"(?![\w/-]|[.:]\w)"
        )

    def parse(self, content: str, file_path: str | None = None) -> SkillMarkdown:
        """
        Parse skill document content.

        Args:
            content: Raw file content as string
            file_path: Optional file path for error messages

        Returns:
            SkillMarkdown object with parsed front matter and content

        Raises:
            MarkdownParseError: If parsing fails
        """
        if not content or not content.strip():
            raise MarkdownParseError("Empty content", file_path)

        content = content.replace("\r\n", "\n")
        frontmatter, markdown_content = self._extract_frontmatter(content, file_path)

        name = self._extract_text(frontmatter, "name")
        description = self._extract_text(frontmatter, "description")
        prose = self.FENCE_PATTERN.sub("", markdown_content)

        return SkillMarkdown(
            frontmatter=frontmatter,
            content=markdown_content,
            name=name,
            description=description,
            title=self._extract_title(prose),
            sections=self.SECTION_PATTERN.findall(prose),
            references=self._extract_references(markdown_content, name),
        )

    def parse_file(self, file_path: str) -> SkillMarkdown:
        """
        Parse a skill document from disk.

        Raises:
            MarkdownParseError: If the file is missing, unreadable or invalid
        """
        try:
            with open(file_path, encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError:
            raise MarkdownParseError(f"File not found: {file_path}", file_path) from None
        except UnicodeDecodeError as e:
            raise MarkdownParseError(f"File is not valid UTF-8: {e}", file_path) from e
        except OSError as e:
            raise MarkdownParseError(f"Error reading file: {e}", file_path) from e

        return self.parse(content, file_path)

    def _extract_frontmatter(
        self, content: str, file_path: str | None
    ) -> tuple[dict[str, Any], str]:
        """Parse and validate YAML front matter, returning (frontmatter_dict, markdown_content)."""
        match = self.FRONTMATTER_PATTERN.match(content)
        if not match:
            raise MarkdownParseError(
                "Invalid skill format: missing or malformed YAML front matter. "
                "File must start with '---' followed by YAML and closing '---'",
                file_path,
            )

        frontmatter_yaml = match.group(1)
        markdown_content = (match.group(2) or "").strip()

        try:
            frontmatter = yaml.safe_load(frontmatter_yaml)
        except yaml.YAMLError as e:
            raise MarkdownParseError(f"Invalid YAML front matter: {e}", file_path) from e

        if not isinstance(frontmatter, dict):
            raise MarkdownParseError(
                "YAML front matter must be a dictionary/object",
                file_path,
            )

        return frontmatter, markdown_content

    def _extract_text(self, frontmatter: dict[str, Any], key: str) -> str:
        value = frontmatter.get(key)
        if value is None:
            return ""
        return str(value).strip()

    def _extract_title(self, prose: str) -> Optional[str]:
        match = self.TITLE_PATTERN.search(prose)
        return match.group(1) if match else None

    def _extract_references(self, markdown_content: str, own_name: str) -> list[str]:
        """Collect sfs-* names mentioned in the body, code blocks included."""
        found = set(self._reference_pattern.findall(markdown_content))
        found.discard(own_name)
        return sorted(found)
