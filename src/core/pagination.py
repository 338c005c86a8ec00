# src/core/pagination.py
import math

from pydantic import BaseModel, ConfigDict

from core.schemas import CamelModel

PAGE_SIZE = 60

# keeps OFFSET inside a signed 64-bit integer
MAX_PAGE = (2**63 - 1) // PAGE_SIZE


def coerce_page(raw) -> int:
    """Turn a raw ``page`` query value into a 1-based page number.

    Anything non-numeric or below 1 falls back to the first page; very
    large numbers are capped at ``MAX_PAGE``.
    """
    if raw is None or isinstance(raw, bool):
        return 1
    try:
        page = int(str(raw).strip())
    except ValueError:
        return 1
    if page < 1:
        return 1
    return min(page, MAX_PAGE)


class PageRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int = 1
    page_size: int = PAGE_SIZE

    @classmethod
    def from_raw(cls, raw, page_size: int = PAGE_SIZE) -> "PageRequest":
        return cls(page=coerce_page(raw), page_size=page_size)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    has_previous_page: bool
    total_recipes: int
    has_next_page: bool


def paginate(page_request: PageRequest, total_count: int, returned_count: int) -> Pagination:
    # out-of-range pages are not an error: the page is empty and the flags stay consistent
    return Pagination(
        current_page=page_request.page,
        total_pages=math.ceil(total_count / page_request.page_size),
        has_previous_page=page_request.page > 1,
        total_recipes=total_count,
        has_next_page=page_request.skip + returned_count < total_count,
    )
