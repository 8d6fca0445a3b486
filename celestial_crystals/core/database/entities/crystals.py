"""
Crystal product entity models.

This module contains the database entity for sellable crystals. Descriptive
fields mirror the static catalog; stock lives only here.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, UTCDateTime, dump_json_list, load_json_list, utc_now

DEFAULT_LOW_STOCK_THRESHOLD = 5


class CrystalBase(Base):
    """Base fields for a crystal product."""

    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255)
    description: str = Field(default="", sa_type=Text)
    price: float = Field(ge=0)
    category: str = Field(index=True, max_length=100)
    chakra: str = Field(default="", max_length=100)
    element: str = Field(default="", max_length=50)
    hardness: str = Field(default="", max_length=50)
    origin: str = Field(default="", max_length=255)
    rarity: str = Field(default="Common", max_length=20)
    image: Optional[str] = Field(default=None, max_length=500)

    # List fields (stored as JSON strings for SQLModel compatibility)
    images: str = Field(default="[]", sa_type=Text, description="JSON array of image paths")
    colors: str = Field(default="[]", sa_type=Text, description="JSON array of colors")
    properties: str = Field(default="[]", sa_type=Text, description="JSON array of healing properties")
    zodiac_signs: str = Field(default="[]", sa_type=Text, description="JSON array of zodiac signs")
    birth_months: str = Field(default="[]", sa_type=Text, description="JSON array of birth months (1-12)")

    stock_quantity: int = Field(default=0, ge=0)
    low_stock_threshold: int = Field(default=DEFAULT_LOW_STOCK_THRESHOLD, ge=0)
    is_active: bool = Field(default=True)
    is_featured: bool = Field(default=False)


class Crystal(CrystalBase, table=True):
    """Persistent crystal product with stock level.

    Table: cc_crystals
    """

    __tablename__ = "cc_crystals"

    id: str = Field(primary_key=True, index=True, max_length=100, description="Catalog id, e.g. 'tiger-eye-1'")
    created_at: datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now}, sa_type=UTCDateTime)

    def get_images_list(self) -> List[str]:
        return load_json_list(self.images)

    def set_images_list(self, images: List[str]) -> None:
        self.images = dump_json_list(images)

    def get_colors_list(self) -> List[str]:
        return load_json_list(self.colors)

    def set_colors_list(self, colors: List[str]) -> None:
        self.colors = dump_json_list(colors)

    def get_properties_list(self) -> List[str]:
        return load_json_list(self.properties)

    def set_properties_list(self, properties: List[str]) -> None:
        self.properties = dump_json_list(properties)

    def get_zodiac_signs_list(self) -> List[str]:
        return load_json_list(self.zodiac_signs)

    def set_zodiac_signs_list(self, signs: List[str]) -> None:
        self.zodiac_signs = dump_json_list(signs)

    def get_birth_months_list(self) -> List[int]:
        return load_json_list(self.birth_months)

    def set_birth_months_list(self, months: List[int]) -> None:
        self.birth_months = dump_json_list(months)

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.stock_quantity <= self.low_stock_threshold

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock_quantity <= 0

    def __repr__(self) -> str:
        return f"Crystal(id={self.id}, price={self.price}, stock={self.stock_quantity})"
