from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TimeFilter(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"

    @classmethod
    def parse(cls, value: "TimeFilter | str") -> "TimeFilter":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            options = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown filter {value!r}; expected one of: {options}") from None


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    price: float
    quantity: int
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class Pagination(BaseModel):
    """Paging state of one list response; 1 <= current_page <= last_page."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    current_page: int = 1
    last_page: int = 1
    per_page: int = 10

    @model_validator(mode="before")
    @classmethod
    def _clamp_pages(cls, raw: Any) -> Any:
        if not isinstance(raw, dict):
            return raw
        out = dict(raw)
        try:
            last_page = max(1, int(out.get("last_page") or 1))
            current_page = int(out.get("current_page") or 1)
        except (TypeError, ValueError):
            # leave it to field validation to report the bad value
            return out
        out["last_page"] = last_page
        out["current_page"] = max(1, min(current_page, last_page))
        return out

    def with_page(self, page: int) -> "Pagination":
        return self.model_copy(update={"current_page": page})


class ProductPage(Pagination):
    data: List[Product] = Field(default_factory=list)

    @property
    def pagination(self) -> Pagination:
        return Pagination(
            current_page=self.current_page,
            last_page=self.last_page,
            per_page=self.per_page,
        )


class Statistics(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    total_products: float = 0
    total_quantity: float = 0
    average_price: float = 0


class TimeSeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: datetime
    y: float

    @model_validator(mode="before")
    @classmethod
    def _accept_pairs(cls, raw: Any) -> Any:
        if isinstance(raw, (list, tuple)):
            if len(raw) != 2:
                raise ValueError(f"time-series pair must have two items, got {len(raw)}")
            return {"x": raw[0], "y": raw[1]}
        return raw
