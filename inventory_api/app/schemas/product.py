"""
Pydantic models for product data.

``ProductInput`` is the body accepted when creating or replacing a
product; ``ProductRead`` is what the API returns and what the store
persists.  Field names are snake_case in Python and camelCase on the
wire (``createdAt``, ``updatedAt``), matching the stored JSON document.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ProductInput(BaseModel):
    """Schema for creating or replacing a product."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(..., examples=["Widget"])
    description: str = Field("", examples=["Blue plastic widget"])
    price: float = Field(..., ge=0, allow_inf_nan=False, examples=[9.5])
    quantity: int = Field(..., ge=0, examples=[3])
    sku: Optional[str] = Field(None, examples=["WDG-001"])
    category: Optional[str] = Field(None, examples=["Hardware"])
    supplier: Optional[str] = Field(None, examples=["ACME"])

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be empty")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_default(cls, v):
        # Clients sometimes send ``null`` for an empty description.
        return "" if v is None else v


class ProductRead(ProductInput):
    """Schema for reading a product from the API."""

    id: str
    created_at: str
    updated_at: str


class InventorySummary(BaseModel):
    """Aggregated figures shown on the dashboard and in the report."""

    total_products: int
    total_stock_value: float
    low_stock_count: int
    low_stock_threshold: int


class DeleteResult(BaseModel):
    success: bool = True
