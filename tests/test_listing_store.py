import tempfile
import unittest
from pathlib import Path

from hany_realty.schemas.listing import ListingCreate
from hany_realty.stores.listing_store import (
    JsonListingStore,
    normalize_sync_items,
    parse_listing_id,
)


class NormalizeSyncItemsTests(unittest.TestCase):
    def test_images_fall_back_to_imgs(self):
        [item] = normalize_sync_items([{"id": 1, "title": "A", "imgs": ["x.jpg"]}])
        self.assertEqual(item.images, ["x.jpg"])

        [item] = normalize_sync_items([{"id": 1, "images": ["y.jpg"], "imgs": ["x.jpg"]}])
        self.assertEqual(item.images, ["y.jpg"])

    def test_ids_are_kept_or_reassigned(self):
        items = normalize_sync_items(
            [{"id": "12"}, {"id": -3}, {"id": True}, {"id": 12}, {}]
        )
        self.assertEqual([i.id for i in items], [12, 13, 14, 15, 16])

    def test_numbers_become_text_and_junk_is_cleared(self):
        [item] = normalize_sync_items(
            [{"id": 2, "price": 500, "title": None, "lat": "37.5", "tags": ["a", 1]}]
        )
        self.assertEqual(item.price, "500")
        self.assertEqual(item.title, "")
        self.assertIsNone(item.lat)
        self.assertEqual(item.tags, ["a"])

    def test_broken_timestamps_are_replaced(self):
        [item] = normalize_sync_items([{"id": 1, "createdAt": "yesterday"}])
        self.assertIsNotNone(item.created_at)


class ParseListingIdTests(unittest.TestCase):
    def test_only_canonical_ascii_numbers_parse(self):
        self.assertEqual(parse_listing_id("12"), 12)
        for text in ("²", "①", "01", " 1", "-1", "", "1a"):
            self.assertIsNone(parse_listing_id(text), text)


class JsonListingStoreTests(unittest.TestCase):
    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.store = JsonListingStore(Path(tmp.name) / "nested" / "listings.json")

    def test_missing_file_is_empty_and_created_on_write(self):
        self.assertEqual(self.store.list_listings(), [])
        listing = self.store.create_listing(ListingCreate(title="A"))
        self.assertEqual(listing.id, 1)
        self.assertTrue(self.store.file.path.exists())

    def test_ids_compare_as_strings(self):
        self.store.create_listing(ListingCreate(title="A"))
        self.assertIsNotNone(self.store.get_listing("1"))
        self.assertIsNone(self.store.get_listing("01"))

    def test_update_bumps_updated_at(self):
        created = self.store.create_listing(ListingCreate(title="A"))
        updated = self.store.update_listing("1", {"price": "10"})
        self.assertEqual(updated.price, "10")
        self.assertGreaterEqual(updated.updated_at, created.updated_at)
        self.assertEqual(updated.created_at, created.created_at)


if __name__ == "__main__":
    unittest.main()
