import unittest

from bucket_explorer.models import BucketListing, ObjectEntry, SortDirection
from bucket_explorer.query import parse_timestamp, query_objects, timestamp_of


def _listing(*entries: ObjectEntry) -> BucketListing:
    return BucketListing(bucket_name="bucket", objects=tuple(entries))


def _keys(entries) -> list[str]:
    return [entry.key for entry in entries]


class QueryObjectsTests(unittest.TestCase):
    def test_filter_is_case_insensitive_substring_and_preserves_order(self):
        listing = _listing(
            ObjectEntry(key="a.txt"),
            ObjectEntry(key="b.log"),
            ObjectEntry(key="A_2.txt"),
        )

        result = query_objects(listing, "a", SortDirection.ASCENDING)

        self.assertEqual(["a.txt", "A_2.txt"], _keys(result))

    def test_search_text_is_trimmed(self):
        listing = _listing(ObjectEntry(key="Reports/Q1.pdf"), ObjectEntry(key="notes.txt"))

        result = query_objects(listing, "  q1  ")

        self.assertEqual(["Reports/Q1.pdf"], _keys(result))

    def test_blank_search_text_keeps_everything(self):
        listing = _listing(ObjectEntry(key="x"), ObjectEntry(key="y"))

        for search in ("", "   ", None):
            with self.subTest(search=search):
                self.assertEqual(["x", "y"], _keys(query_objects(listing, search)))

    def test_sorts_by_last_modified(self):
        listing = _listing(
            ObjectEntry(key="x", last_modified="2023-01-01T00:00:00Z"),
            ObjectEntry(key="y", last_modified="2022-01-01T00:00:00Z"),
        )

        self.assertEqual(["y", "x"], _keys(query_objects(listing, "", SortDirection.ASCENDING)))
        self.assertEqual(["x", "y"], _keys(query_objects(listing, "", SortDirection.DESCENDING)))

    def test_accepts_direction_strings(self):
        listing = _listing(
            ObjectEntry(key="old", last_modified="2020-01-01T00:00:00.000Z"),
            ObjectEntry(key="new", last_modified="2021-01-01T00:00:00.000Z"),
        )

        self.assertEqual(["new", "old"], _keys(query_objects(listing, "", "desc")))
        self.assertEqual(["old", "new"], _keys(query_objects(listing, "", "asc")))
        self.assertEqual(["old", "new"], _keys(query_objects(listing, "", "sideways")))

    def test_missing_or_invalid_dates_sort_as_epoch(self):
        listing = _listing(
            ObjectEntry(key="dated", last_modified="2021-05-05T10:00:00Z"),
            ObjectEntry(key="missing"),
            ObjectEntry(key="garbage", last_modified="not a date"),
        )

        self.assertEqual(
            ["missing", "garbage", "dated"],
            _keys(query_objects(listing, "", SortDirection.ASCENDING)),
        )
        self.assertEqual(
            ["dated", "missing", "garbage"],
            _keys(query_objects(listing, "", SortDirection.DESCENDING)),
        )

    def test_ties_keep_input_order_in_both_directions(self):
        stamp = "2023-03-03T03:03:03Z"
        listing = _listing(
            ObjectEntry(key="b", last_modified=stamp),
            ObjectEntry(key="a", last_modified=stamp),
            ObjectEntry(key="c", last_modified=stamp),
        )

        self.assertEqual(["b", "a", "c"], _keys(query_objects(listing, "", SortDirection.ASCENDING)))
        self.assertEqual(["b", "a", "c"], _keys(query_objects(listing, "", SortDirection.DESCENDING)))

    def test_offsets_are_compared_as_instants(self):
        listing = _listing(
            ObjectEntry(key="utc", last_modified="2023-01-01T10:00:00Z"),
            ObjectEntry(key="plus-two", last_modified="2023-01-01T11:00:00+02:00"),
        )

        self.assertEqual(["plus-two", "utc"], _keys(query_objects(listing)))

    def test_returns_fresh_list_without_mutating_listing(self):
        entries = (
            ObjectEntry(key="x", last_modified="2023-01-01T00:00:00Z"),
            ObjectEntry(key="y", last_modified="2022-01-01T00:00:00Z"),
        )
        listing = _listing(*entries)

        result = query_objects(listing, "", SortDirection.ASCENDING)
        result.append(ObjectEntry(key="z"))

        self.assertIsNot(result, listing.objects)
        self.assertEqual(entries, listing.objects)

    def test_is_idempotent(self):
        listing = _listing(
            ObjectEntry(key="a.txt", last_modified="2021-01-01T00:00:00Z"),
            ObjectEntry(key="b.txt", last_modified="2020-01-01T00:00:00Z"),
            ObjectEntry(key="c.log"),
        )

        first = query_objects(listing, "TXT", SortDirection.DESCENDING)
        second = query_objects(listing, "TXT", SortDirection.DESCENDING)

        self.assertEqual(first, second)
        self.assertEqual(["a.txt", "b.txt"], _keys(first))

    def test_rfc_1123_dates_sort_by_their_time(self):
        listing = _listing(
            ObjectEntry(key="new", last_modified="Tue, 03 Jan 2023 09:00:00 GMT"),
            ObjectEntry(key="old", last_modified="Mon, 02 Jan 2023 15:04:05 GMT"),
            ObjectEntry(key="iso", last_modified="2023-01-02T20:00:00Z"),
        )

        self.assertEqual(["old", "iso", "new"], _keys(query_objects(listing, "", SortDirection.ASCENDING)))

    def test_dates_at_the_edge_of_the_range_do_not_raise(self):
        listing = _listing(
            ObjectEntry(key="ancient", last_modified="0001-01-01T00:00:00+01:00"),
            ObjectEntry(key="future", last_modified="9999-12-31T23:59:59-01:00"),
            ObjectEntry(key="recent", last_modified="2023-01-01T00:00:00Z"),
        )

        self.assertEqual(
            ["ancient", "recent", "future"],
            _keys(query_objects(listing, "", SortDirection.ASCENDING)),
        )

    def test_empty_listing(self):
        self.assertEqual([], query_objects(BucketListing(), "anything"))


class TimestampTests(unittest.TestCase):
    def test_timestamp_of_parses_iso_text(self):
        self.assertEqual(0.0, timestamp_of("1970-01-01T00:00:00Z"))
        self.assertEqual(86400.0, timestamp_of("1970-01-02T00:00:00.000Z"))
        self.assertEqual(86400.0, timestamp_of("1970-01-02"))

    def test_timestamp_of_reads_rfc_1123_dates(self):
        self.assertEqual(86400.0, timestamp_of("Fri, 02 Jan 1970 00:00:00 GMT"))
        self.assertEqual(86400.0, timestamp_of("Fri, 02 Jan 1970 02:00:00 +0200"))

    def test_timestamp_of_falls_back_to_epoch(self):
        for value in ("", None, "yesterday", "2023-13-45T00:00:00Z"):
            with self.subTest(value=value):
                self.assertEqual(0.0, timestamp_of(value))

    def test_parse_timestamp_returns_none_for_invalid_text(self):
        self.assertIsNone(parse_timestamp("nope"))
        self.assertIsNotNone(parse_timestamp("2024-02-29T23:59:59Z"))


if __name__ == "__main__":
    unittest.main()
