from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
import unicodedata
from typing import Any


def has_line_break(text: str) -> bool:
    """True if text contains a line break or another control character."""
    return any(unicodedata.category(ch) in ("Cc", "Zl", "Zp") for ch in text)


def single_line(text: str) -> str:
    """Collapse line breaks and control characters so text stays on one line."""
    cleaned = "".join(" " if unicodedata.category(ch) in ("Cc", "Zl", "Zp") else ch for ch in text)
    return " ".join(cleaned.split())


def quantity_to_text(value: Any) -> str:
    """
    Render a quantity as text without float formatting drift.

    Integral numbers lose the trailing ".0"; other floats use the shortest
    representation that round-trips ("0.1", not "0.10000000000000001").
    """
    if isinstance(value, bool):
        raise ValueError("Quantity must be a number or text, not a boolean")
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError("Quantity must be a finite number")
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    raise ValueError(f"Unsupported quantity type: {type(value).__name__}")


@dataclass
class InventoryEntry:
    """Read-only snapshot of one inventory row, as fed to the prompt builder."""
    name: str
    quantity: str
    unit: str

    def __post_init__(self):
        self.quantity = quantity_to_text(self.quantity)
        self.unit = self.unit or ""

    @classmethod
    def from_row(cls, row) -> "InventoryEntry":
        return cls(name=row.name, quantity=row.quantity, unit=row.unit)

    def as_prompt_line(self) -> str:
        # rows stored before names were checked may still hold line breaks
        return f"{single_line(self.name)}: {single_line(self.quantity)} {single_line(self.unit)}"
