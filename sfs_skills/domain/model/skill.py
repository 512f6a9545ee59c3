"""
Skill entity for the SFS skill pack.

A skill is a Markdown instruction document that guides an AI coding
assistant through one scaffolding task (CI/CD, billing, auth, ...).
It carries no executable behaviour; the entity is the indexed form of
one document in the catalog.

Attributes:
    name: Skill identifier from front matter (kebab-case, ``sfs-`` prefix)
    description: One-sentence summary from front matter
    content: Markdown body after the front matter
    title: First level-1 heading of the body, if any
    sections: Level-2 heading texts, in document order
    references: Other ``sfs-*`` skills the body points to
    source: Where the document was discovered
    file_path: Path to the document on disk
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sfs_skills.domain.model.skill_source import SkillSource


@dataclass
class Skill:
    """A skill document indexed by the catalog."""

    name: str
    description: str
    content: str
    source: SkillSource = SkillSource.CUSTOM
    file_path: Optional[str] = None
    title: Optional[str] = None
    sections: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    frontmatter: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("name cannot be empty")

    @property
    def is_builtin(self) -> bool:
        return self.source == SkillSource.BUILTIN

    def search_tokens(self) -> set[str]:
        """Lowercased words from name, description and title."""
        text = " ".join(filter(None, [self.name.replace("-", " "), self.description, self.title]))
        return {token.strip(".,:;()`'\"").lower() for token in text.split() if token.strip()}

    def to_summary_dict(self) -> Dict[str, Any]:
        """Convert to the short form used in listings."""
        return {
            "name": self.name,
            "description": self.description,
            "title": self.title,
            "source": self.source.value,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary including the body."""
        data = self.to_summary_dict()
        data.update(
            {
                "file_path": self.file_path,
                "sections": list(self.sections),
                "references": list(self.references),
                "content": self.content,
            }
        )
        return data
