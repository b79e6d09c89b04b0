"""Tests for list search, sorting and pagination."""
import pytest

from medshop.services.query import (
    filter_items,
    locale_compare,
    next_sort_state,
    paginate,
    pagination_range,
    run_query,
    sort_items,
    total_pages,
)

MEDICINES = [
    {"name": "Paracetamol", "manufacturer": "Cipla", "quantity": 120, "batchNumber": "B-77"},
    {"name": "Amoxicillin", "manufacturer": "Sun Pharma", "quantity": 15, "batchNumber": "A-12"},
    {"name": "azithromycin", "manufacturer": "Lupin", "quantity": 40, "batchNumber": "C-03"},
    {"name": "Cetirizine", "manufacturer": "Cipla", "quantity": None, "batchNumber": "B-12"},
]


class TestFilter:
    def test_substring_match_on_name(self):
        items = [{"name": "Paracetamol"}, {"name": "Amoxicillin"}]
        assert filter_items(items, "para", ["name"]) == [{"name": "Paracetamol"}]

    def test_case_insensitive(self):
        assert [m["name"] for m in filter_items(MEDICINES, "CIPLA", ["manufacturer"])] == [
            "Paracetamol",
            "Cetirizine",
        ]

    def test_blank_term_returns_input(self):
        assert filter_items(MEDICINES, "", ["name"]) == MEDICINES
        assert filter_items(MEDICINES, "   ", ["name"]) == MEDICINES

    def test_numbers_are_searchable(self):
        assert [m["name"] for m in filter_items(MEDICINES, "12", ["quantity"])] == ["Paracetamol"]

    def test_snake_case_field_on_camel_case_record(self):
        assert [m["name"] for m in filter_items(MEDICINES, "b-", ["batch_number"])] == [
            "Paracetamol",
            "Cetirizine",
        ]

    def test_any_field_may_match(self):
        found = filter_items(MEDICINES, "lupin", ["name", "manufacturer"])
        assert [m["name"] for m in found] == ["azithromycin"]

    def test_narrowing_is_monotonic(self):
        once = filter_items(MEDICINES, "i", ["name"])
        twice = filter_items(once, "cin", ["name"])
        assert len(twice) <= len(once)
        assert all(m in once for m in twice)

    def test_pydantic_records(self, store, make_medicine):
        store.medicines.add(make_medicine(name="Paracetamol"))
        store.medicines.add(make_medicine(name="Amoxicillin"))
        found = filter_items(store.medicines.list(), "amox", ["name"])
        assert [m.name for m in found] == ["Amoxicillin"]


class TestSort:
    def test_ascending_is_case_insensitive(self):
        ordered = sort_items(MEDICINES, "name", "asc")
        assert [m["name"] for m in ordered] == ["Amoxicillin", "azithromycin", "Cetirizine", "Paracetamol"]

    def test_descending(self):
        ordered = sort_items(MEDICINES, "name", "desc")
        assert [m["name"] for m in ordered] == ["Paracetamol", "Cetirizine", "azithromycin", "Amoxicillin"]

    def test_none_first_ascending_last_descending(self):
        assert sort_items(MEDICINES, "quantity", "asc")[0]["name"] == "Cetirizine"
        assert sort_items(MEDICINES, "quantity", "desc")[-1]["name"] == "Cetirizine"

    def test_numeric_order(self):
        ordered = sort_items(MEDICINES[:3], "quantity", "asc")
        assert [m["quantity"] for m in ordered] == [15, 40, 120]

    def test_stable_for_equal_keys(self):
        ordered = sort_items(MEDICINES, "manufacturer", "asc")
        assert [m["name"] for m in ordered][:2] == ["Paracetamol", "Cetirizine"]

    def test_idempotent(self):
        once = sort_items(MEDICINES, "name", "desc")
        assert sort_items(once, "name", "desc") == once

    def test_unsorted_returns_input(self):
        assert sort_items(MEDICINES, "name", None) is MEDICINES
        assert sort_items(MEDICINES, None, "asc") is MEDICINES

    def test_camel_case_field_on_models(self, store, make_medicine):
        store.medicines.add(make_medicine(name="High", min_stock_level=50))
        store.medicines.add(make_medicine(name="Low", min_stock_level=5))
        ordered = sort_items(store.medicines.list(), "minStockLevel", "asc")
        assert [m.name for m in ordered] == ["Low", "High"]

    def test_unknown_direction(self):
        with pytest.raises(ValueError):
            sort_items(MEDICINES, "name", "sideways")

    def test_locale_compare_accents_and_case(self):
        assert locale_compare("apple", "Banana") < 0
        assert locale_compare("éclair", "eclair") > 0
        assert locale_compare("éclair", "fig") < 0
        assert locale_compare("same", "same") == 0


class TestSortToggle:
    def test_three_toggles_return_to_unsorted(self):
        state = (None, None)
        state = next_sort_state(*state, "name")
        assert state == ("name", "asc")
        state = next_sort_state(*state, "name")
        assert state == ("name", "desc")
        state = next_sort_state(*state, "name")
        assert state == (None, None)

    def test_new_field_starts_ascending(self):
        assert next_sort_state("name", "desc", "quantity") == ("quantity", "asc")


class TestPagination:
    def test_pages_cover_input_exactly(self):
        items = list(range(23))
        pages = total_pages(len(items), 5)
        assert pages == 5
        joined = [x for page in range(1, pages + 1) for x in paginate(items, page, 5)]
        assert joined == items

    def test_out_of_range_page_is_empty(self):
        assert paginate([1, 2, 3], 2, 10) == []
        assert paginate([1, 2, 3], 0, 10) == []

    def test_total_pages(self):
        assert total_pages(0, 10) == 0
        assert total_pages(10, 10) == 1
        assert total_pages(11, 10) == 2
        with pytest.raises(ValueError):
            total_pages(5, 0)

    def test_pagination_range(self):
        assert pagination_range(1, 3) == [1, 2, 3]
        assert pagination_range(1, 10) == [1, 2, 3, 4, 5, "...", 10]
        assert pagination_range(5, 10) == [1, "...", 3, 4, 5, 6, 7, "...", 10]
        assert pagination_range(10, 10) == [1, "...", 6, 7, 8, 9, 10]


def test_run_query_filters_sorts_and_pages():
    page = run_query(MEDICINES, search="in", fields=["name"], sort_field="name", direction="asc", page=1, page_size=2)
    assert page.total == 3
    assert page.total_pages == 2
    assert [m["name"] for m in page.items] == ["Amoxicillin", "azithromycin"]
