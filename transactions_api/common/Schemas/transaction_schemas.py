from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class TransactionIn(BaseModel):
    """Запись из стороннего JSON. Только приведение типов, без бизнес-валидации."""
    id: int = Field(..., description="Идентификатор из источника")
    title: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    sold: Optional[bool] = None
    dateOfSale: Optional[datetime] = None

    @field_validator("price", mode="before")
    @classmethod
    def _price_to_float(cls, v):
        if v is None or isinstance(v, (int, float)):
            return v
        s = str(v).strip().replace(" ", "").replace(",", ".")
        return float(s)

    @field_validator("dateOfSale")
    @classmethod
    def _to_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # "2021-11-27T20:29:54+05:30" -> 2021-11-27 15:29:54, месяц считается по UTC
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class TransactionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    sold: Optional[bool] = None
    dateOfSale: Optional[datetime] = None

    @field_serializer("dateOfSale")
    def _utc_iso(self, v: Optional[datetime]) -> Optional[str]:
        # в базе naive UTC, наружу отдаём с явным Z
        if v is None:
            return None
        return v.replace(tzinfo=timezone.utc).isoformat().replace("+00:00", "Z")


class InitializeResponse(BaseModel):
    msg: str


class TotalCount(BaseModel):
    total: int


class TransactionsPage(BaseModel):
    transactions: List[TransactionOut]
    total: TotalCount


class SaleAmount(BaseModel):
    total: Optional[float] = None


class ItemsCount(BaseModel):
    count: int


class Statistics(BaseModel):
    totalSaleAmount: SaleAmount
    soldItems: ItemsCount
    notSoldItems: ItemsCount


class PriceRangeCount(BaseModel):
    range: str
    count: int


class BarChart(BaseModel):
    barChartData: List[PriceRangeCount]


class CategoryCount(BaseModel):
    category: Optional[str] = None
    count: int


class PieChart(BaseModel):
    pieChartData: List[CategoryCount]


class CombinedResponse(BaseModel):
    initialize: InitializeResponse
    listTransactions: TransactionsPage
    statistics: Statistics
    barChart: BarChart
    pieChart: PieChart
