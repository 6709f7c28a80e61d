from __future__ import annotations

import json
import logging
import threading
from importlib import resources
from pathlib import Path
from typing import Any, Optional

from zoinkies.domain.models.reference import ReferenceCatalog
from zoinkies.domain.repositories import ReferenceDataSource


logger = logging.getLogger(__name__)

_PACKAGED_RESOURCE = "reference_data.json"


def parse_reference_payload(payload: Any) -> ReferenceCatalog:
    """Build a catalog from ``{"references": [...]}`` or a bare list of records."""
    if isinstance(payload, dict):
        records = payload.get("references")
    else:
        records = payload
    if not isinstance(records, list):
        raise ValueError("Reference data must contain a 'references' list")
    return ReferenceCatalog.from_records(records)


class JsonReferenceDataSource(ReferenceDataSource):
    """Reads reference data from a JSON file, or the copy bundled with the package."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path else None

    @property
    def description(self) -> str:
        return str(self.path) if self.path else f"zoinkies.data/{_PACKAGED_RESOURCE}"

    def _read_text(self) -> str:
        if self.path is not None:
            return self.path.read_text(encoding="utf-8")
        return resources.files("zoinkies.data").joinpath(_PACKAGED_RESOURCE).read_text(encoding="utf-8")

    def load(self) -> Optional[ReferenceCatalog]:
        try:
            catalog = parse_reference_payload(json.loads(self._read_text()))
        except (OSError, ValueError) as exc:
            logger.warning(
                "Reference data could not be loaded",
                extra={"source": self.description, "reason": str(exc)},
            )
            return None
        logger.info("Reference data loaded", extra={"source": self.description, "items": len(catalog)})
        return catalog


class CatalogHolder:
    """Loads the catalog exactly once, no matter how many callers race for it."""

    def __init__(self, source: ReferenceDataSource) -> None:
        self._source = source
        self._lock = threading.Lock()
        self._loaded = False
        self._catalog: Optional[ReferenceCatalog] = None

    @property
    def description(self) -> str:
        return str(getattr(self._source, "description", type(self._source).__name__))

    def get(self) -> Optional[ReferenceCatalog]:
        if self._loaded:
            return self._catalog
        with self._lock:
            if not self._loaded:
                self._catalog = self._source.load()
                self._loaded = True
        return self._catalog
