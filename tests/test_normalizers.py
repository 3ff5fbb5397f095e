"""
Tests for field normalizers: price, tower, contact and list fields.
"""

import pytest

from realty_csv.normalizers import (
    normalize_price, normalize_tower, split_contact, parse_price_range,
    parse_carpet_areas, parse_amenities, parse_image_urls, parse_int_prefix,
    parse_units_available, infer_status, infer_furniture_type, slugify
)


class TestNormalizePrice:

    def test_lakh_range(self):
        assert normalize_price("79 to 84L") == "79-84L"

    def test_crore_range(self):
        assert normalize_price("1.10 to 1.16 cr") == "1.10-1.16cr"

    def test_case_insensitive_to(self):
        assert normalize_price("1.5 TO 2 Cr") == "1.5-2Cr"

    def test_empty(self):
        assert normalize_price("") == ""

    def test_already_normalized_is_unchanged(self):
        assert normalize_price("79-84L") == "79-84L"


class TestNormalizeTower:

    def test_space_before_phase(self):
        assert normalize_tower("18 Soldout") == "18 Tower (Soldout)"

    def test_no_space_before_phase(self):
        assert normalize_tower("3Launched") == "3 Tower (Launched)"

    def test_phase_case_is_kept(self):
        assert normalize_tower("2 future") == "2 Tower (future)"

    def test_non_matching_passes_through(self):
        assert normalize_tower("Tower A") == "Tower A"
        assert normalize_tower("") == ""

    def test_normalized_value_is_a_fixed_point(self):
        assert normalize_tower("18 Tower (Soldout)") == "18 Tower (Soldout)"


class TestSplitContact:

    def test_name_and_phone(self):
        contact = split_contact("Sales Name - 1234567890")
        assert contact.name == "Sales Name"
        assert contact.phone == "1234567890"
        assert contact.raw == "Sales Name - 1234567890"

    def test_phone_with_country_code(self):
        contact = split_contact("Rahul - +91 98765 43210")
        assert contact.name == "Rahul"
        assert contact.phone == "+91 98765 43210"

    def test_hyphenated_name(self):
        contact = split_contact("Anne-Marie - 9876543210")
        assert contact.name == "Anne-Marie"
        assert contact.phone == "9876543210"

    def test_name_only(self):
        assert split_contact("Neha") == ("Neha", "", "Neha")

    def test_hyphen_without_phone(self):
        assert split_contact("Block-A").name == "Block-A"
        assert split_contact("Block-A").phone == ""


class TestParsePriceRange:

    def test_bare_number_takes_following_suffix(self):
        price = parse_price_range("79-84L")
        assert (price.min_lakhs, price.max_lakhs) == (79, 84)
        assert price.original_format == "79-84L"

    def test_crore_converted_to_lakhs(self):
        price = parse_price_range("1.10 to 1.16 cr")
        assert (price.min_lakhs, price.max_lakhs) == (110, 116)

    def test_single_crore(self):
        price = parse_price_range("1.12cr")
        assert price.min_lakhs == price.max_lakhs == 112

    def test_mixed_units(self):
        price = parse_price_range("90L - 1.2cr")
        assert (price.min_lakhs, price.max_lakhs) == (90, 120)

    def test_bare_crore_range(self):
        price = parse_price_range("2-2.5cr")
        assert (price.min_lakhs, price.max_lakhs) == (200, 250)

    def test_comma_alternatives(self):
        price = parse_price_range("84,94L")
        assert (price.min_lakhs, price.max_lakhs) == (84, 94)

    def test_no_suffix_means_lakhs(self):
        price = parse_price_range("85")
        assert price.min_lakhs == price.max_lakhs == 85

    def test_tie_goes_to_following_suffix(self):
        """60 sits between 50cr and 70L and takes L."""
        price = parse_price_range("50cr-60-70L")
        assert (price.min_lakhs, price.max_lakhs) == (60, 5000)

    def test_trailing_note_numbers_ignored(self):
        price = parse_price_range("1.2 Cr (2 parking)")
        assert (price.min_lakhs, price.max_lakhs) == (120, 120)

    def test_only_leading_number_of_each_side(self):
        price = parse_price_range("79 to 84L (incl 5 GST)")
        assert (price.min_lakhs, price.max_lakhs) == (79, 84)

    def test_empty_is_zero(self):
        price = parse_price_range("")
        assert (price.min_lakhs, price.max_lakhs, price.original_format) == (0, 0, "")

    def test_no_number_raises(self):
        with pytest.raises(ValueError):
            parse_price_range("On request")

    @pytest.mark.parametrize("text", ["79-84L", "1.10-1.16cr", "90L-1.2cr", "5cr-60-70L", "2.5"])
    def test_min_never_exceeds_max(self, text):
        price = parse_price_range(text)
        assert price.min_lakhs <= price.max_lakhs


class TestListFields:

    def test_carpet_comma_and_slash(self):
        assert parse_carpet_areas("863, 887") == [863, 887]
        assert parse_carpet_areas("794/895") == [794, 895]

    def test_carpet_drops_non_numeric(self):
        assert parse_carpet_areas("NA, 950 sqft") == [950]
        assert parse_carpet_areas("") == []

    def test_carpet_sorted_and_distinct(self):
        assert parse_carpet_areas("1200, 1100") == [1100, 1200]
        assert parse_carpet_areas("1200, 1100, 1100") == [1100, 1200]
        assert parse_carpet_areas("950/950") == [950]

    def test_amenities_trimmed_and_deduplicated(self):
        assert parse_amenities(" Gym, Pool ;Club House | gym,, ") == ["Gym", "Pool", "Club House"]

    def test_all_amenities(self):
        assert parse_amenities("All Amenities") == ["All Amenities"]

    def test_image_urls(self):
        urls = parse_image_urls("http://x/a.jpg, http://x/b.jpg|http://x/c.jpg")
        assert urls == ["http://x/a.jpg", "http://x/b.jpg", "http://x/c.jpg"]

    def test_int_prefix(self):
        assert parse_int_prefix("64 Flats") == 64
        assert parse_int_prefix("600 Unit") == 600
        assert parse_int_prefix("1,200 Units") == 1200
        assert parse_int_prefix("12,5") == 12
        assert parse_int_prefix("NA") is None
        assert parse_int_prefix("") is None

    def test_units_available(self):
        assert parse_units_available("12 units available") == 12
        assert parse_units_available("only 5 flats left") == 5
        assert parse_units_available("") is None


class TestKeywordInference:

    def test_sold_out(self):
        assert infer_status("Dec 26", "2BHK", "", "Sold out") == "sold-out"
        assert infer_status("", "3BHK", "18 Tower (Soldout)") == "sold-out"

    def test_launching_soon(self):
        assert infer_status("Launching soon") == "launching-soon"

    def test_future_phase(self):
        assert infer_status("", "2BHK", "", "Future phase") == "future-phase"

    def test_default_available(self):
        assert infer_status("Dec 26", "2BHK") == "available"
        assert infer_status() == "available"

    def test_furniture(self):
        assert infer_furniture_type("3BHK Semi Furnished") == "semi-furnished"
        assert infer_furniture_type("2BHK", "fully furnished flats") == "fully-furnished"
        assert infer_furniture_type("2BHK") == "unfurnished"

    def test_slugify(self):
        assert slugify("Lodha  Group") == "lodha_group"
        assert slugify(" Tower-1 (A) ") == "tower_1_a"
