from sfs_skills.domain.model.skill import Skill
from sfs_skills.domain.model.skill_source import SkillSource

__all__ = ["Skill", "SkillSource"]
