from sfs_skills.application.services.skill_catalog import LoadedSkill, PackReport, SkillCatalog

__all__ = ["SkillCatalog", "PackReport", "LoadedSkill"]
