"""
Tests for item sources: catalog folders, demo values and batch proposal.
"""

import random

import pytest
from scanbench.constants import DEMO_GTINS, GS_CHAR
from scanbench.errors import (
    InvalidInputError,
    InvalidPrefixError,
    InvalidProductTypeError,
    InvalidRangeError,
    MissingGoodsIdError,
    NothingSelectedError,
    UnknownTemplateError,
)
from scanbench.models import BarcodeFormat, Folder, Item, ItemKind, ProductType
from scanbench.sources import (
    Catalog,
    DemoSequence,
    DiscountPolicy,
    MagnitudePolicy,
    clean_goods_ids,
    propose_datamatrix_items,
    propose_gs1_items,
    propose_simple_item,
    propose_weight_items,
    recompute_payload,
)


def dm_item(gtin, active=True):
    return Item(source_value=gtin, kind=ItemKind.DATAMATRIX, format=BarcodeFormat.DATAMATRIX, active=active)


class TestDemoSequence:
    """Round-robin demo GTINs."""

    def test_cycles_in_order(self):
        demo = DemoSequence()
        values = [demo.next_value() for _ in range(len(DEMO_GTINS) + 2)]
        assert values[:len(DEMO_GTINS)] == list(DEMO_GTINS)
        assert values[len(DEMO_GTINS):] == list(DEMO_GTINS[:2])

    def test_peek_and_reset(self):
        demo = DemoSequence(["1", "2"])
        assert demo.peek() == "1"
        demo.next_value()
        assert demo.peek() == "2"
        demo.reset()
        assert demo.next_value() == "1"

    def test_empty_sequence_rejected(self):
        with pytest.raises(InvalidInputError):
            DemoSequence([])


class TestCatalog:
    """Folder housekeeping and the active-item view used by rotation."""

    def setup_method(self):
        self.catalog = Catalog()
        self.folder = self.catalog.find_or_create("Dairy")
        self.items = [dm_item(g) for g in DEMO_GTINS[:3]]
        self.catalog.add_items(self.folder.id, self.items)

    def test_find_or_create_is_case_insensitive(self):
        assert self.catalog.find_or_create("  dairy ") is self.folder
        assert len(self.catalog.folders) == 1

    def test_add_items_selects_folder(self):
        assert self.catalog.selected_folder_id == self.folder.id

    def test_active_items_in_order(self):
        self.catalog.set_active(self.folder.id, self.items[1].id, False)
        active = self.catalog.get_active_items()
        assert [item.source_value for item in active] == [DEMO_GTINS[0], DEMO_GTINS[2]]

    def test_select_and_deselect_all(self):
        self.catalog.deselect_all(self.folder.id)
        assert self.catalog.get_active_items(self.folder.id) == ()
        self.catalog.select_all(self.folder.id)
        assert len(self.catalog.get_active_items(self.folder.id)) == 3

    def test_set_active_unknown_item(self):
        assert self.catalog.set_active(self.folder.id, "missing", False) is False

    def test_clear_selected_removes_active_items(self):
        self.catalog.set_active(self.folder.id, self.items[0].id, False)
        assert self.catalog.clear_selected(self.folder.id) == 2
        assert [item.id for item in self.folder.items] == [self.items[0].id]

    def test_rename(self):
        self.catalog.rename(self.folder.id, " Bakery ")
        assert self.folder.name == "Bakery"
        with pytest.raises(InvalidInputError):
            self.catalog.rename(self.folder.id, "  ")

    def test_delete_clears_selection(self):
        assert self.catalog.delete(self.folder.id) is True
        assert self.catalog.selected_folder_id is None
        assert self.catalog.delete(self.folder.id) is False
        with pytest.raises(NothingSelectedError):
            self.catalog.get_active_items()

    def test_unknown_folder(self):
        with pytest.raises(NothingSelectedError):
            self.catalog.select_all("missing")

    def test_empty_folder_name(self):
        with pytest.raises(InvalidInputError):
            self.catalog.find_or_create("   ")

    def test_prebuilt_folders(self):
        folder = Folder(name="Seeded", items=[dm_item("4810099003310", active=False)])
        catalog = Catalog([folder])
        assert catalog.get(folder.id) is folder
        assert catalog.get(None) is None
        assert catalog.get_active_items(folder.id) == ()


class TestPolicies:
    """Discount and magnitude draws."""

    def test_fixed_discount(self):
        assert DiscountPolicy.fixed_value(15).draw(random.Random(0)) == 15

    def test_random_discount_accepts_reversed_bounds(self):
        policy = DiscountPolicy.random_range(30, 10)
        rng = random.Random(1)
        draws = [policy.draw(rng) for _ in range(200)]
        assert min(draws) >= 10 and max(draws) <= 30

    def test_quantity_rounded_to_two_decimals(self):
        policy = MagnitudePolicy.random_range(1, 5)
        rng = random.Random(2)
        for _ in range(50):
            value = policy.draw_quantity(rng)
            assert 1 <= value <= 5
            assert round(value, 2) == value

    def test_weight_is_whole_grams(self):
        policy = MagnitudePolicy.random_range(100, 200)
        rng = random.Random(3)
        for _ in range(50):
            value = policy.draw_weight(rng)
            assert isinstance(value, int)
            assert 100 <= value <= 200

    def test_invalid_range(self):
        with pytest.raises(InvalidRangeError):
            MagnitudePolicy.random_range(5, 5).validate()
        MagnitudePolicy.fixed_value(5).validate()


class TestProposeGS1:
    """GS1 pack batches."""

    def test_clean_goods_ids(self):
        assert clean_goods_ids("123\nabc\n 45-67 \n123456789\n") == ["123", "4567"]

    def test_variations_per_goods_id(self):
        result = propose_gs1_items("123\n456", "piece", variations=3, rng=random.Random(0))
        assert len(result.items) == 6
        assert [item.source_value for item in result.items] == ["123"] * 3 + ["456"] * 3
        assert all(item.format is BarcodeFormat.QRCODE for item in result.items)
        assert result.skipped_count == 0

    def test_items_reproduce_their_payload(self):
        rng = random.Random(1)
        pieces = propose_gs1_items("12345", "piece", variations=5,
                                   discount=DiscountPolicy.random_range(0, 20), rng=rng)
        weights = propose_gs1_items("12345", "weight", variations=5,
                                    discount=DiscountPolicy.fixed_value(10), rng=rng)
        for item in pieces.items + weights.items:
            assert recompute_payload(item) == item.payload

    def test_discount_carries_unique_id(self):
        result = propose_gs1_items("12345", "weight", variations=4,
                                   discount=DiscountPolicy.fixed_value(10), rng=random.Random(2))
        for item in result.items:
            assert item.unique_id is not None
            assert GS_CHAR + "9810" + GS_CHAR + "21" + item.unique_id + GS_CHAR in item.payload

    def test_weight_items_have_no_quantity(self):
        result = propose_gs1_items("12345", ProductType.WEIGHT, variations=2,
                                   magnitude=MagnitudePolicy.fixed_value(750), rng=random.Random(3))
        for item in result.items:
            assert item.quantity is None
            assert item.weight == 750
            assert "3103000750" in item.payload

    def test_fractional_quantity_sets_decimal_position(self):
        result = propose_gs1_items("12345", "piece", variations=1,
                                   magnitude=MagnitudePolicy.fixed_value(2.75), rng=random.Random(4))
        item = result.items[0]
        assert item.decimal_position == 2
        assert "3700000275" in item.payload

    def test_oversized_quantity_is_skipped(self):
        result = propose_gs1_items("12345", "piece", variations=2,
                                   magnitude=MagnitudePolicy.fixed_value(123456789), rng=random.Random(5))
        assert result.items == []
        assert result.skipped_count == 2
        assert not result.valid

    def test_no_goods_ids(self):
        with pytest.raises(MissingGoodsIdError):
            propose_gs1_items("abc\n\n", "piece")

    def test_bad_product_type(self):
        with pytest.raises(InvalidProductTypeError):
            propose_gs1_items("123", "box")

    def test_bad_range(self):
        with pytest.raises(InvalidRangeError):
            propose_gs1_items("123", "piece", magnitude=MagnitudePolicy.random_range(10, 1))

    def test_zero_variations(self):
        with pytest.raises(InvalidInputError):
            propose_gs1_items("123", "piece", variations=0)


class TestProposeWeight:
    """Weight carousel batches."""

    def test_every_plu_and_prefix(self):
        result = propose_weight_items("12345\n777", prefixes=("77", "22"), variations=2,
                                      rng=random.Random(0))
        assert len(result.items) == 8
        assert {item.prefix for item in result.items} == {"77", "22"}
        for item in result.items:
            assert recompute_payload(item) == item.payload

    def test_same_weight_across_prefixes(self):
        result = propose_weight_items("12345", prefixes=("77", "49", "22"), variations=1,
                                      rng=random.Random(1))
        assert len({item.weight for item in result.items}) == 1

    def test_discount_only_for_prefix_49(self):
        result = propose_weight_items("12345", prefixes=("77", "49"), variations=3,
                                      discount=DiscountPolicy.fixed_value(12), rng=random.Random(2))
        for item in result.items:
            if item.prefix == "49":
                assert item.discount == 12
                assert item.payload[11:13] == "12"
            else:
                assert item.discount == 0

    def test_overflow_is_skipped_per_prefix(self):
        result = propose_weight_items("12345\n1234567", prefixes=("77", "22"), variations=2,
                                      rng=random.Random(3))
        assert len(result.items) == 4
        assert result.skipped_count == 4
        assert result.skipped[0].source_value == "77/1234567"
        assert len(result.errors) == 4

    def test_invalid_prefix(self):
        with pytest.raises(InvalidPrefixError):
            propose_weight_items("12345", prefixes=("50",))
        with pytest.raises(InvalidPrefixError):
            propose_weight_items("12345", prefixes=())

    def test_no_plus(self):
        with pytest.raises(InvalidInputError):
            propose_weight_items("\n  \n")


class TestProposeDataMatrix:
    """Library entries from GTIN lines."""

    def test_deduplicates_and_skips_invalid(self):
        lines = "4810099003310\n\n123\n4810099003310\n4600682000013"
        result = propose_datamatrix_items(lines, "type2")
        assert [item.source_value for item in result.items] == ["4810099003310", "4600682000013"]
        assert all(item.payload is None for item in result.items)
        assert all(item.template_id == "type2" for item in result.items)
        assert result.skipped_count == 1
        assert result.skipped[0].index == 2

    def test_accepts_iterables(self):
        result = propose_datamatrix_items(DEMO_GTINS)
        assert len(result.items) == len(DEMO_GTINS)
        assert result.items[0].template_id == "type1"

    def test_unknown_template(self):
        with pytest.raises(UnknownTemplateError):
            propose_datamatrix_items("4810099003310", "type9")

    def test_recompute_draws_fresh_tails(self):
        item = propose_datamatrix_items("4810099003310").items[0]
        rng = random.Random(4)
        first = recompute_payload(item, rng)
        second = recompute_payload(item, rng)
        assert first != second
        assert first.startswith("0104810099003310")


class TestProposeSimple:
    """Single linear barcode entries."""

    def test_ean13_item(self):
        item = propose_simple_item(" 590123412345 ", "EAN13")
        assert item.payload == "5901234123457"
        assert item.kind is ItemKind.SIMPLE
        assert recompute_payload(item) == item.payload

    def test_empty_value(self):
        with pytest.raises(InvalidInputError):
            propose_simple_item("   ")
