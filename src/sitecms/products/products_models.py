"""Product data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ProductStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


@dataclass(slots=True)
class Product:
    id: str
    name_ko: str
    category_code: str
    status: ProductStatus
    is_featured: bool = False
    name_en: str | None = None
    model_no: str | None = None
    images: list[str] = field(default_factory=list)
    updated_at: datetime | None = None
