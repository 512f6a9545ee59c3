"""
Skill source enumeration.

Defines where a skill document was discovered. Sources are listed in
ascending priority: a project skill overrides a custom one, which
overrides a builtin one.
"""

from enum import Enum


class SkillSource(str, Enum):
    """
    Source of a skill document.

    Attributes:
        BUILTIN: Shipped with the package (sfs_skills/builtin/skills/)
        CUSTOM: Extra directory passed on the command line or in settings
        PROJECT: Project-level .sfs/skills/ directory
    """

    BUILTIN = "builtin"
    CUSTOM = "custom"
    PROJECT = "project"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]

    def __str__(self) -> str:
        return self.value


_PRIORITY = {
    SkillSource.BUILTIN: 0,
    SkillSource.CUSTOM: 1,
    SkillSource.PROJECT: 2,
}
