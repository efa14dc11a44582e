from src.catalog.skill_catalog import CatalogError, SkillCatalog

__all__ = ["CatalogError", "SkillCatalog"]
