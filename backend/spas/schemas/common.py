from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel

from spas.timeutil import as_utc

T = TypeVar("T")
S = TypeVar("S")

# Naive datetimes from clients are interpreted as UTC
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class ListEnvelope(BaseModel, Generic[T]):
    success: bool = True
    data: list[T] = []
    pagination: Pagination | None = None
    count: int | None = None


class ItemEnvelope(BaseModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T


class StatsEnvelope(BaseModel, Generic[S]):
    success: bool = True
    stats: S
    period: str
