from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

STOCK_LOW = "Low Stock"
STOCK_RUNNING_LOW = "Running Low"
STOCK_OK = "In Stock"


def stock_status(quantity: int, min_stock: int) -> str:
    if quantity <= min_stock:
        return STOCK_LOW
    if quantity <= min_stock * 1.5:
        return STOCK_RUNNING_LOW
    return STOCK_OK


class InventoryItemCreate(BaseModel):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    quantity: int = Field(0, ge=0)
    unit: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = None
    min_stock: int = Field(0, ge=0)


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = None
    min_stock: Optional[int] = Field(None, ge=0)


class QuantityAdjust(BaseModel):
    delta: int


class InventoryItemResponse(BaseModel):
    id: str
    name: str
    category: Optional[str] = None
    quantity: int = 0
    unit: Optional[str] = None
    price: Optional[float] = None
    supplier: Optional[str] = None
    min_stock: int = 0
    stock_status: str = STOCK_OK
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @classmethod
    def from_row(cls, row: dict) -> "InventoryItemResponse":
        quantity = row.get("quantity") or 0
        min_stock = row.get("min_stock") or 0
        return cls(**{**row, "quantity": quantity, "min_stock": min_stock,
                      "stock_status": stock_status(quantity, min_stock)})
