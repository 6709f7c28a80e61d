from __future__ import annotations

from typing import Any, Optional

from zoinkies.domain.errors import CatalogUnavailable, ReferenceItemNotFound
from zoinkies.domain.models.object_types import ObjectType, object_type_id
from zoinkies.domain.models.reference import ReferenceCatalog, ReferenceItem


class ReferenceService:
    """Read-only access to the catalog loaded once at startup.

    A catalog that failed to load is kept as ``None`` so every lookup fails
    loudly instead of behaving like an empty catalog.
    """

    def __init__(self, catalog: Optional[ReferenceCatalog], *, source: str = "") -> None:
        self._catalog = catalog
        self.source = source

    @property
    def available(self) -> bool:
        return self._catalog is not None

    def catalog(self) -> ReferenceCatalog:
        if self._catalog is None:
            raise CatalogUnavailable(self.source)
        return self._catalog

    def lookup(self, item_id: ObjectType | str | None) -> Optional[ReferenceItem]:
        return self.catalog().lookup(item_id)

    def require(self, item_id: ObjectType | str) -> ReferenceItem:
        item = self.lookup(item_id)
        if item is None:
            raise ReferenceItemNotFound(str(object_type_id(item_id)))
        return item

    def to_payload(self) -> dict[str, Any]:
        return self.catalog().to_payload()
