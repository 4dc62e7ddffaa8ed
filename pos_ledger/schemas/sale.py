"""
Pydantic schemas for recording completed sales in the ledger.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from pos_ledger.models.enums import PaymentMethod, SalePostingStatus


class SaleRecordRequest(BaseModel):
    """
    A completed sale, as handed over by checkout.

    cost_of_goods_sold is computed by the caller: quantity times
    cost price for each line item, summed.
    """
    sale_id: int
    user_id: int
    total: Decimal = Field(gt=0, decimal_places=2)
    cost_of_goods_sold: Decimal = Field(ge=0, decimal_places=2)
    payment_method: PaymentMethod


class SalePostingResponse(BaseModel):
    id: int
    sale_id: int
    user_id: int
    journal_entry_id: int | None
    status: SalePostingStatus
    payment_method: PaymentMethod
    total: Decimal
    cost_of_goods_sold: Decimal
    error_message: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
