from __future__ import annotations

import unittest

from app.mappers.header_mapper import IMPORT_KEYS, METRIC_COLUMNS, HeaderMapper, normalize_header
from app.validators.mapping_validator import SchemaMappingError


class TestNormalizeHeader(unittest.TestCase):
    def test_ignores_case_spacing_and_punctuation(self) -> None:
        self.assertEqual(normalize_header(" Reported By "), "reportedby")
        self.assertEqual(normalize_header("reported_by"), "reportedby")
        self.assertEqual(normalize_header("reportedBy"), "reportedby")


class TestResolveMapping(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = HeaderMapper()

    def test_export_titles_resolve_to_import_keys(self) -> None:
        headers = [column.title for column in METRIC_COLUMNS]

        resolution = self.mapper.resolve_mapping(headers)

        self.assertEqual(set(resolution.key_to_source), set(IMPORT_KEYS))
        self.assertEqual(resolution.key_to_source["reportedBy"], "Reported By")
        self.assertEqual(resolution.key_to_source["dateReported"], "Date Reported")
        self.assertEqual(resolution.ignored_headers, ("ID",))
        self.assertNotIn("id", resolution.key_to_source)

    def test_camel_case_keys_resolve_exactly(self) -> None:
        resolution = self.mapper.resolve_mapping(list(IMPORT_KEYS))

        self.assertEqual(resolution.key_to_source, {key: key for key in IMPORT_KEYS})
        self.assertTrue(all(strategy == "exact_or_alias" for strategy in resolution.match_strategies.values()))

    def test_optional_columns_may_be_absent(self) -> None:
        headers = [key for key in IMPORT_KEYS if key not in {"verified", "notes"}]

        resolution = self.mapper.resolve_mapping(headers)

        self.assertNotIn("verified", resolution.key_to_source)
        self.assertNotIn("notes", resolution.key_to_source)

    def test_aliases_resolve(self) -> None:
        headers = [key for key in IMPORT_KEYS if key != "notes"] + ["Comments"]

        resolution = self.mapper.resolve_mapping(headers)

        self.assertEqual(resolution.key_to_source["notes"], "Comments")

    def test_misspelled_header_resolves_fuzzily(self) -> None:
        headers = ["Catgory"] + [key for key in IMPORT_KEYS if key != "category"]

        resolution = self.mapper.resolve_mapping(headers)

        self.assertEqual(resolution.key_to_source["category"], "Catgory")
        self.assertEqual(resolution.match_strategies["category"], "fuzzy")

    def test_unrelated_header_is_left_unmapped(self) -> None:
        headers = list(IMPORT_KEYS) + ["Internal Reference"]

        resolution = self.mapper.resolve_mapping(headers)

        self.assertNotIn("Internal Reference", resolution.key_to_source.values())

    def test_every_missing_required_column_is_listed(self) -> None:
        headers = [key for key in IMPORT_KEYS if key not in {"unit", "source"}]

        with self.assertRaises(SchemaMappingError) as ctx:
            self.mapper.resolve_mapping(headers)

        self.assertEqual(
            [(error.code, error.field) for error in ctx.exception.errors],
            [("required_field_unmapped", "unit"), ("required_field_unmapped", "source")],
        )
        self.assertIn("Missing required columns: source, unit.", ctx.exception.message)

    def test_missing_required_column_is_reported(self) -> None:
        headers = [key for key in IMPORT_KEYS if key != "value"]

        with self.assertRaises(SchemaMappingError) as ctx:
            self.mapper.resolve_mapping(headers)

        codes = {(error.code, error.field) for error in ctx.exception.errors}
        self.assertIn(("required_field_unmapped", "value"), codes)
        self.assertIn("value", ctx.exception.message)

    def test_empty_headers_are_rejected(self) -> None:
        with self.assertRaises(SchemaMappingError) as ctx:
            self.mapper.resolve_mapping(["", "  "])
        self.assertEqual(ctx.exception.errors[0].code, "empty_headers")

    def test_map_row_picks_mapped_columns(self) -> None:
        headers = [column.title for column in METRIC_COLUMNS]
        resolution = self.mapper.resolve_mapping(headers)
        raw_row = {title: f"cell-{index}" for index, title in enumerate(headers)}

        mapped = HeaderMapper.map_row(raw_row=raw_row, mapping=resolution)

        self.assertEqual(set(mapped), set(IMPORT_KEYS))
        self.assertEqual(mapped["category"], "cell-1")
        self.assertNotIn("id", mapped)


if __name__ == "__main__":
    unittest.main()
