import json
import sys
import tempfile
from datetime import timedelta
from pathlib import Path
import unittest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from zoinkies.application.services.reference_service import ReferenceService
from zoinkies.domain.errors import CatalogUnavailable, ReferenceItemNotFound
from zoinkies.domain.models.object_types import ObjectType
from zoinkies.domain.models.reference import (
    ReferenceCatalog,
    ReferenceItem,
    format_duration,
    parse_duration,
)
from zoinkies.domain.repositories import ReferenceDataSource
from zoinkies.infrastructure.reference_data_loader import (
    CatalogHolder,
    JsonReferenceDataSource,
    parse_reference_payload,
)


class DurationParsingTests(unittest.TestCase):
    def test_parses_time_and_day_designators(self) -> None:
        self.assertEqual(timedelta(seconds=30), parse_duration("PT30S"))
        self.assertEqual(timedelta(minutes=5), parse_duration("PT5M"))
        self.assertEqual(timedelta(days=1, hours=2), parse_duration("P1DT2H"))
        self.assertEqual(timedelta(seconds=1.5), parse_duration("PT1.5S"))

    def test_empty_input_means_no_duration(self) -> None:
        self.assertIsNone(parse_duration(None))
        self.assertIsNone(parse_duration(""))

    def test_rejects_malformed_or_calendar_durations(self) -> None:
        for raw in ("P", "PT", "P1DT", "30S", "P1Y", "P2M"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValueError):
                    parse_duration(raw)

    def test_format_duration_produces_parseable_text(self) -> None:
        self.assertEqual("PT2M", format_duration(timedelta(minutes=2)))
        self.assertEqual("P1DT2H", format_duration(timedelta(days=1, hours=2)))
        self.assertEqual("PT0S", format_duration(timedelta(0)))
        self.assertIsNone(format_duration(None))


class ReferenceCatalogTests(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = ReferenceCatalog.from_records(
            [
                {"itemId": "minion", "respawnDuration": "PT2M", "cooldown": "PT3S"},
                {"itemId": "tower"},
                {"itemId": "weapon_type_1", "attackScoreBonus": 2},
            ]
        )

    def test_lookup_by_plain_id_or_enum(self) -> None:
        minion = self.catalog.lookup("minion")
        self.assertIsNotNone(minion)
        self.assertEqual(timedelta(minutes=2), minion.respawn_duration)
        self.assertEqual(timedelta(seconds=3), minion.cooldown)
        self.assertIs(minion, self.catalog.lookup(ObjectType.MINION))

    def test_missing_id_returns_none_instead_of_raising(self) -> None:
        self.assertIsNone(self.catalog.lookup("dragon"))
        self.assertIsNone(self.catalog.lookup(None))
        self.assertNotIn("dragon", self.catalog)

    def test_items_without_duration_never_respawn(self) -> None:
        self.assertFalse(self.catalog.lookup("tower").respawns)
        self.assertTrue(self.catalog.lookup("minion").respawns)

    def test_duplicate_ids_are_rejected(self) -> None:
        with self.assertRaises(ValueError):
            ReferenceCatalog(items=(ReferenceItem("chest"), ReferenceItem("chest")))

    def test_payload_keeps_catalog_order_and_iso_durations(self) -> None:
        payload = self.catalog.to_payload()
        ids = [row["itemId"] for row in payload["references"]]
        self.assertEqual(["minion", "tower", "weapon_type_1"], ids)
        self.assertEqual("PT2M", payload["references"][0]["respawnDuration"])
        self.assertIsNone(payload["references"][1]["respawnDuration"])
        self.assertEqual(2, payload["references"][2]["attackScoreBonus"])

    def test_catalog_is_immutable(self) -> None:
        item = self.catalog.lookup("minion")
        with self.assertRaises(Exception):
            item.cooldown = None  # type: ignore[misc]


class ReferenceDataLoaderTests(unittest.TestCase):
    def test_bundled_reference_data_covers_every_object_type(self) -> None:
        catalog = JsonReferenceDataSource().load()
        self.assertIsNotNone(catalog)
        for object_type in ObjectType:
            with self.subTest(object_type=object_type.value):
                self.assertIsNotNone(catalog.lookup(object_type))
        self.assertIsNone(catalog.lookup("tower").respawn_duration)
        self.assertIsNotNone(catalog.lookup("chest").respawn_duration)

    def test_loads_from_explicit_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "refs.json"
            path.write_text(json.dumps({"references": [{"itemId": "chest", "respawnDuration": "PT10S"}]}), encoding="utf-8")
            catalog = JsonReferenceDataSource(path).load()
        self.assertEqual(1, len(catalog))
        self.assertEqual(timedelta(seconds=10), catalog.lookup("chest").respawn_duration)

    def test_unreadable_file_degrades_to_no_catalog(self) -> None:
        source = JsonReferenceDataSource(Path(tempfile.gettempdir()) / "zoinkies-missing-refs.json")
        with self.assertLogs("zoinkies.infrastructure.reference_data_loader", level="WARNING"):
            self.assertIsNone(source.load())

    def test_malformed_payload_degrades_to_no_catalog(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "refs.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertLogs("zoinkies.infrastructure.reference_data_loader", level="WARNING"):
                self.assertIsNone(JsonReferenceDataSource(path).load())

    def test_bare_record_list_is_accepted(self) -> None:
        catalog = parse_reference_payload([{"itemId": "gold_key"}])
        self.assertIsNotNone(catalog.lookup("gold_key"))
        with self.assertRaises(ValueError):
            parse_reference_payload({"items": []})

    def test_catalog_holder_loads_once(self) -> None:
        class _CountingSource(ReferenceDataSource):
            def __init__(self) -> None:
                self.calls = 0

            def load(self):
                self.calls += 1
                return None

        source = _CountingSource()
        holder = CatalogHolder(source)
        self.assertIsNone(holder.get())
        self.assertIsNone(holder.get())
        self.assertEqual(1, source.calls)


class ReferenceServiceTests(unittest.TestCase):
    def test_missing_catalog_is_surfaced_on_lookup(self) -> None:
        service = ReferenceService(None, source="refs.json")
        self.assertFalse(service.available)
        with self.assertRaises(CatalogUnavailable):
            service.lookup("minion")
        with self.assertRaises(CatalogUnavailable):
            service.to_payload()

    def test_require_raises_for_unknown_item(self) -> None:
        service = ReferenceService(ReferenceCatalog.from_records([{"itemId": "minion"}]))
        self.assertEqual("minion", service.require(ObjectType.MINION).item_id)
        with self.assertRaises(ReferenceItemNotFound) as ctx:
            service.require("general")
        self.assertEqual("general", ctx.exception.item_id)

    def test_empty_catalog_is_valid_but_finds_nothing(self) -> None:
        service = ReferenceService(ReferenceCatalog())
        self.assertTrue(service.available)
        self.assertIsNone(service.lookup("minion"))


if __name__ == "__main__":
    unittest.main()
