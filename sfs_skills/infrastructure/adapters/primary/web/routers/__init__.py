from sfs_skills.infrastructure.adapters.primary.web.routers import skills

__all__ = ["skills"]
