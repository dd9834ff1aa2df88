from pydantic import BaseModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, total_pages=-(-total // limit) if limit else 0)
