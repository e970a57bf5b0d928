"""
Schemas for catalog search, filtering and sorting
"""
import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SortKey(str, Enum):
    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    POPULARITY = "popularity"
    NAME = "name"


class PriceRange(BaseModel):
    """Inclusive price bounds; max_price None means unbounded"""
    label: str = "Custom"
    min_price: float = Field(0, ge=0)
    max_price: Optional[float] = Field(None, ge=0)

    def contains(self, price: float) -> bool:
        if price < self.min_price:
            return False
        return self.max_price is None or price <= self.max_price


class EventFilters(BaseModel):
    query: Optional[str] = None
    category: Optional[str] = None
    city: Optional[str] = None
    price_range: Optional[PriceRange] = None
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None


class CatalogFilterOptions(BaseModel):
    """Values offered by the catalog filter bar"""
    categories: List[str]
    cities: List[str]
    price_ranges: List[PriceRange]
    sort_options: List[str]
