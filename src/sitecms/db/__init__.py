"""Database models and bootstrap helpers."""

from .db_init import init_db
from .db_models import Base, HomeSettingsModel, ProductModel

__all__ = ["Base", "HomeSettingsModel", "ProductModel", "init_db"]
