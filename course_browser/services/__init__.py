from .catalog_service import CourseCatalog

__all__ = ["CourseCatalog"]
