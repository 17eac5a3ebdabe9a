from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class PaginationViewModel(BaseModel):
    label: str
    current_page: int
    last_page: int
    per_page: int
    pages: List[int]
    prev_disabled: bool
    next_disabled: bool


class DeleteModalModel(BaseModel):
    open: bool = False
    product_id: Optional[int] = None
    prompt: Optional[str] = None


class ProductListViewModel(BaseModel):
    status: str
    search: str = ""
    columns: List[str]
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    empty_message: Optional[str] = None
    pagination: PaginationViewModel
    modal: DeleteModalModel = Field(default_factory=DeleteModalModel)
    notice: Optional[str] = None
    error: Optional[str] = None


class StatisticTileModel(BaseModel):
    key: str
    label: str
    value: float
    display: str


class DashboardViewModel(BaseModel):
    statistics: Dict[str, float]
    tiles: List[StatisticTileModel]
    filter: str
    filter_options: List[str]
    series_status: str
    series: List[Dict[str, Any]]
    line_chart: Dict[str, Any]
    bar_chart: Optional[Dict[str, Any]] = None
    errors: List[str] = Field(default_factory=list)


class DeleteResultModel(BaseModel):
    deleted: bool
    notice: Optional[str] = None
    view: ProductListViewModel
