"""Tests for the pure catalog view functions."""

import pytest

from web.views import (
    NO_VALUE,
    UNKNOWN,
    GroupMode,
    GroupSummary,
    SortConfig,
    collection_info,
    default_color,
    filter_by_exact_field,
    filter_by_search_term,
    format_cell,
    group_by_collection,
    group_by_design_or_color,
    group_key,
    list_variants,
    record_to_row,
    resolve_order_id,
    sort_by,
)

from web.tests.conftest import make_record


class TestGroupByCollection:
    def test_counts_and_first_seen_order(self, records):
        summaries = group_by_collection(records)

        assert [(s.collection_name, s.vendor, s.count) for s in summaries] == [
            ("Alie", "Loloi", 5),
            ("Bodrum", "Surya", 1),
        ]

    def test_counts_add_up_to_record_total(self, records):
        assert sum(s.count for s in group_by_collection(records)) == len(records)

    def test_first_vendor_wins(self):
        summaries = group_by_collection(
            [make_record(vendor="Loloi"), make_record(vendor="Loloi II")]
        )
        assert summaries[0].vendor == "Loloi"

    def test_blank_collection_is_unknown(self):
        [summary] = group_by_collection([make_record(collection_name="", vendor="")])
        assert summary.collection_name == UNKNOWN
        assert summary.vendor == UNKNOWN

    def test_empty_input(self):
        assert group_by_collection([]) == []

    def test_to_dict(self, records):
        data = group_by_collection(records)[1].to_dict(include_members=True)
        assert data["collectionName"] == "Bodrum"
        assert data["count"] == 1
        assert data["members"][0]["orderId"] == "HM-2001"


class TestGroupByDesignOrColor:
    def alie(self, records):
        return filter_by_exact_field(records, "collection_name", "Alie")

    def test_by_design(self, records):
        groups = group_by_design_or_color(self.alie(records), GroupMode.BY_DESIGN)

        assert [(g.key, g.count, g.sizes) for g in groups] == [
            ("ALI-01", 2, ("5x8", "8x10")),
            ("ALI-02", 2, ("5x8", "8x10")),
            ("ALI-03", 1, ("9x12",)),
        ]

    def test_by_color_accepts_plain_string(self, records):
        groups = group_by_design_or_color(self.alie(records), "color")

        assert [(g.key, g.count, g.size_count) for g in groups] == [("Ivory", 2, 2), ("Blue", 3, 3)]

    def test_duplicate_sizes_counted_once(self):
        groups = group_by_design_or_color(
            [make_record(size="5x8"), make_record(size="5x8"), make_record(size="")],
            GroupMode.BY_COLOR,
        )
        assert groups[0].count == 3
        assert groups[0].sizes == ("5x8",)

    def test_blank_color_is_unknown(self):
        [group] = group_by_design_or_color([make_record(primary_color="")])
        assert group.key == UNKNOWN

    def test_unknown_mode(self, records):
        with pytest.raises(ValueError):
            group_by_design_or_color(records, "vendor")


class TestDefaultColor:
    def test_most_sizes_wins(self):
        summaries = [
            GroupSummary("Red", 1, ("5x8",)),
            GroupSummary("Blue", 2, ("5x8", "8x10")),
        ]
        assert default_color(summaries) == "Blue"

    def test_tie_goes_to_first(self):
        summaries = [
            GroupSummary("Red", 1, ("5x8",)),
            GroupSummary("Blue", 5, ("8x10",)),
        ]
        assert default_color(summaries) == "Red"

    def test_no_groups(self):
        assert default_color([]) is None


class TestFilterBySearchTerm:
    @pytest.fixture
    def groups(self):
        return [GroupSummary("AB123", 1), GroupSummary("xAB9", 1), GroupSummary("CD1", 1)]

    def test_case_insensitive_substring(self, groups):
        assert [g.key for g in filter_by_search_term(groups, "ab", "key")] == ["AB123", "xAB9"]
        assert [g.key for g in filter_by_search_term(groups, "AB", "key")] == ["AB123", "xAB9"]

    def test_no_match(self, groups):
        assert filter_by_search_term(groups, "zzz", "key") == []

    def test_empty_term_keeps_everything(self, groups):
        result = filter_by_search_term(groups, "", "key")
        assert result == groups
        assert result is not groups

    def test_callable_selector(self, records):
        result = filter_by_search_term(records, "bod", lambda r: r.collection_name)
        assert [r.design_id for r in result] == ["BDM-2300"]


class TestSortBy:
    def test_numeric_ascending(self, records):
        prices = [r.retail_price for r in sort_by(records, "retail_price")]
        assert prices == [0, 199.0, 329.0, 349.5, 899.0, 1234.5]

    def test_descending(self, records):
        prices = [r.retail_price for r in sort_by(records, "retail_price", "desc")]
        assert prices == [1234.5, 899.0, 349.5, 329.0, 199.0, 0]

    def test_stable_on_ties(self):
        items = [
            {"size": "5x8", "upc": "1"},
            {"size": "8x10", "upc": "2"},
            {"size": "5x8", "upc": "3"},
            {"size": "8x10", "upc": "4"},
        ]
        assert [i["upc"] for i in sort_by(items, "size")] == ["1", "3", "2", "4"]
        assert [i["upc"] for i in sort_by(items, "size", "desc")] == ["2", "4", "1", "3"]

    def test_blanks_sort_last_both_ways(self, records):
        asc = sort_by(records, "vpn")
        desc = sort_by(records, "vpn", "desc")
        assert asc[-1].vpn == ""
        assert desc[-1].vpn == ""

    def test_does_not_mutate_input(self, records):
        before = list(records)
        result = sort_by(records, "retail_price", "desc")
        assert records == before
        assert result is not records

    def test_rejects_unknown_direction(self, records):
        with pytest.raises(ValueError):
            sort_by(records, "size", "sideways")


class TestSortConfig:
    def test_toggle_sequence(self):
        config = SortConfig().toggle("size")
        assert config == SortConfig("size", "asc")

        config = config.toggle("size")
        assert config == SortConfig("size", "desc")

        config = config.toggle("size")
        assert config == SortConfig("size", "asc")

    def test_new_key_resets_to_ascending(self):
        assert SortConfig("size", "desc").toggle("vpn") == SortConfig("vpn", "asc")

    def test_apply_without_key_keeps_order(self, records):
        result = SortConfig().apply(records)
        assert result == records
        assert result is not records


class TestResolveOrderId:
    def test_prefers_product_id(self):
        order_id = resolve_order_id(make_record(product_id="HM-1", vpn="V-1"))
        assert (order_id.value, order_id.is_present) == ("HM-1", True)

    def test_falls_back_to_vpn(self):
        order_id = resolve_order_id(make_record(product_id="  ", vpn="V-1"))
        assert (order_id.value, order_id.is_present) == ("V-1", True)

    def test_nothing_present(self):
        order_id = resolve_order_id(make_record())
        assert order_id.is_present is False
        assert order_id.value == ""
        assert order_id.display == NO_VALUE

    def test_excel_variant_fields(self):
        fields = ("sku_override", "design_id")
        assert resolve_order_id(make_record(sku_override="HM-77"), fields).value == "HM-77"
        assert resolve_order_id(make_record(design_id="ALI-09"), fields).value == "ALI-09"

    def test_mapping_with_nulls(self):
        order_id = resolve_order_id({"product_id": None, "vpn": None})
        assert order_id.is_present is False


class TestListVariants:
    def test_design_rows_sorted(self, records):
        rows = list_variants(records, "Alie", design_id="ALI-02", sort=SortConfig("size", "desc"))
        assert [r.size for r in rows] == ["8x10", "5x8"]

    def test_color_filter(self, records):
        rows = list_variants(records, "Alie", color="Blue")
        assert [r.design_id for r in rows] == ["ALI-02", "ALI-02", "ALI-03"]

    def test_unknown_collection(self, records):
        assert list_variants(records, "Nope") == []


class TestDisplay:
    def test_format_cell(self):
        assert format_cell("", "vpn") == NO_VALUE
        assert format_cell(None, "upc") == NO_VALUE
        assert format_cell(1234.5, "retail_price") == "$1234.50"
        assert format_cell(0, "Retail") == "$0.00"
        assert format_cell("5x8", "size") == "5x8"

    def test_record_to_row(self, records):
        row = record_to_row(records[1])
        assert row["orderId"] == "ALIEAI-01IV80A0"
        assert row["orderIdPresent"] is True
        assert row["retailDisplay"] == "$349.50"

    def test_record_to_row_without_order_id(self, records):
        row = record_to_row(records[2])
        assert row["orderId"] == NO_VALUE
        assert row["orderIdPresent"] is False

    def test_collection_info(self, records):
        assert collection_info(records) == {"collection_name": "Alie", "vendor": "Loloi"}
        assert collection_info([]) == {"collection_name": "", "vendor": ""}


class TestBlankGroupKeys:
    @pytest.fixture
    def blank_records(self):
        return [
            make_record(collection_name="C", design_id="", primary_color="", size="5x8"),
            make_record(collection_name="C", design_id="", primary_color="", size="8x10"),
            make_record(collection_name="C", design_id="D1", primary_color="Red", size="5x8"),
        ]

    def test_group_key_labels_blanks(self):
        assert group_key("primary_color")(make_record(primary_color="")) == UNKNOWN
        assert group_key("primary_color")(make_record(primary_color="Red")) == "Red"

    def test_unknown_groups_can_be_listed(self, blank_records):
        groups = group_by_design_or_color(blank_records, GroupMode.BY_COLOR)
        assert default_color(groups) == UNKNOWN

        rows = list_variants(blank_records, "C", color=default_color(groups))
        assert [r.size for r in rows] == ["5x8", "8x10"]

        rows = list_variants(blank_records, "C", design_id=UNKNOWN)
        assert len(rows) == 2

    def test_unknown_collection_key(self):
        records = [make_record(collection_name="")]
        [summary] = group_by_collection(records)
        assert list_variants(records, summary.collection_name) == records
