# schemas.py
from datetime import date
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CatalogRecord(BaseModel):
    """One normalized food of the reference catalog."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    keywords: str = ""

    @field_validator("id", "name")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v


# Search hits expose exactly the public record fields
SearchResult = CatalogRecord


class FoodCount(BaseModel):
    count: int


# -----------------------------
# Inventory API payloads
# -----------------------------
class ItemCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    food_id: str = Field(alias="foodId", min_length=1)
    name: str = Field(min_length=1)
    expiration_date: date = Field(alias="expirationDate")
    quantity: int = Field(default=1, ge=1)
    user_id: Optional[str] = Field(default=None, alias="userId")


class ItemUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    quantity: Optional[int] = Field(default=None, ge=1)
    expiration_date: Optional[date] = Field(default=None, alias="expirationDate")


class InventoryItem(BaseModel):
    id: int
    name: str
    quantity: int
    expiration_date: date
    user_id: Optional[str] = None
    status: Literal["expired", "soon", "ok"] = "ok"
    days_left: int = 0
