"""Seitenweise Listen der API (Pydantic v2, generisch)."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class Page(BaseModel, Generic[T]):
    """Eine Seite einer paginierten Liste."""

    items: list[T]
    total: int
    page: int = 1
    page_size: int = 10
    total_pages: int = 1

    @classmethod
    def from_payload(cls, item_type: type[T], payload: Any,
                     page: int = 1, page_size: int = 10) -> "Page[T]":
        """Liest beide Antwortformate des Backends.

        {items, total, page, pageSize, totalPages}      (Frontend-Vertrag)
        {requests, total, limit, offset}                (Go-Backend)
        Eine reine Liste wird als einzelne Seite behandelt.
        """
        if payload is None:
            return cls(items=[], total=0, page=page, page_size=page_size, total_pages=0)
        if isinstance(payload, list):
            items = [item_type.model_validate(i) for i in payload]
            return cls(items=items, total=len(items), page=1,
                       page_size=max(len(items), page_size), total_pages=1)

        raw_items = payload.get("items")
        if raw_items is None:
            raw_items = payload.get("requests") or []
        items = [item_type.model_validate(i) for i in raw_items]
        total = int(payload.get("total", len(items)))

        size = payload.get("pageSize") or payload.get("page_size") or payload.get("limit") or page_size
        size = int(size)
        if "page" in payload:
            current = int(payload["page"])
        elif "offset" in payload and size:
            current = int(payload["offset"]) // size + 1
        else:
            current = page
        total_pages = payload.get("totalPages") or payload.get("total_pages")
        if total_pages is None:
            total_pages = -(-total // size) if size else 1
        return cls(items=items, total=total, page=current,
                   page_size=size, total_pages=int(total_pages))

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
