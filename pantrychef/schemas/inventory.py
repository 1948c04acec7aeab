from decimal import Decimal, InvalidOperation
from typing import Optional

from pydantic import BaseModel, Field, constr, field_validator

from pantrychef.models import has_line_break, quantity_to_text


class InventoryItemCreate(BaseModel):
    """Schema for creating or replacing an inventory item."""
    name: constr(strip_whitespace=True, min_length=1, max_length=100) = Field(..., description="Item name is required")
    quantity: str = Field(..., description="Quantity must be greater than 0; numbers are stored as text")
    unit: constr(strip_whitespace=True, min_length=1, max_length=30) = Field(..., description="Unit is required")

    @field_validator('name', 'unit')
    @classmethod
    def validate_single_line(cls, v: str) -> str:
        if has_line_break(v):
            raise ValueError('Must be a single line of text')
        return v

    @field_validator('quantity', mode='before')
    @classmethod
    def validate_quantity(cls, v) -> str:
        """Accept a number or numeric text and keep it as text."""
        text = quantity_to_text(v)
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValueError('Quantity must be a number')
        if not number.is_finite() or number < Decimal("0.01"):
            raise ValueError('Quantity must be greater than 0')
        return text


class InventoryItemResponse(BaseModel):
    """Schema for inventory item response."""
    id: str
    name: str
    quantity: str
    unit: str
    created_at: Optional[str] = None
