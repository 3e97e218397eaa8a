"""
Tests for payload corruption.
"""

import random

import pytest
from scanbench.constants import GS_CHAR, JUNK_ALPHABET
from scanbench.encoders import encode_data_matrix
from scanbench.errors import UnknownMutationMethod
from scanbench.mutator import (
    corrupt,
    corrupt_with_report,
    CorruptionMethod,
    CONCRETE_METHODS,
)


GS = GS_CHAR


@pytest.fixture
def dm_payload():
    return encode_data_matrix("4810099003310", "type1", random.Random(11)).payload


class TestRemoveChars:
    """Contiguous run of 5-10 characters dropped."""

    def test_length_shrinks_by_five_to_ten(self, dm_payload):
        rng = random.Random(1)
        for _ in range(30):
            broken = corrupt(dm_payload, "removeChars", rng)
            assert 5 <= len(dm_payload) - len(broken) <= 10

    def test_short_payload_does_not_fail(self):
        broken = corrupt("ABC", CorruptionMethod.REMOVE_CHARS, random.Random(1))
        assert broken == ""


class TestWrongChecksum:
    """Digit shifts in the GTIN or across the payload."""

    def test_only_gtin_digits_change(self, dm_payload):
        rng = random.Random(2)
        for _ in range(30):
            broken = corrupt(dm_payload, "wrongChecksum", rng)
            assert len(broken) == len(dm_payload)
            assert broken[:2] == "01"
            assert broken[16:] == dm_payload[16:]
            assert broken[2:16].isdigit()

    def test_gtin_is_eventually_changed(self, dm_payload):
        rng = random.Random(3)
        results = {corrupt(dm_payload, "wrongChecksum", rng)[2:16] for _ in range(20)}
        assert any(gtin != dm_payload[2:16] for gtin in results)

    def test_non_gtin_payload_keeps_letters(self):
        payload = "99MPUC" + GS + "24012345" + GS + "3700000002" + GS
        rng = random.Random(4)
        for _ in range(20):
            broken = corrupt(payload, "wrongChecksum", rng)
            assert len(broken) == len(payload)
            for before, after in zip(payload, broken):
                if not before.isdigit():
                    assert after == before
                else:
                    assert after.isdigit()


class TestReplaceGS:
    """Group separators become a visible marker."""

    def test_every_separator_replaced(self, dm_payload):
        broken = corrupt(dm_payload, "replaceGS")
        assert GS not in broken
        assert broken.count("|||") == dm_payload.count(GS)

    def test_simple(self):
        assert corrupt("a" + GS + "b", "replaceGS") == "a|||b"

    def test_no_separator_is_unchanged(self):
        assert corrupt("5901234123457", "replaceGS") == "5901234123457"


class TestAddJunk:
    """10-15 junk characters inserted at one offset."""

    def test_length_grows_by_ten_to_fifteen(self, dm_payload):
        rng = random.Random(5)
        for _ in range(30):
            broken = corrupt(dm_payload, "addJunk", rng)
            added = len(broken) - len(dm_payload)
            assert 10 <= added <= 15

    def test_inserted_run_uses_junk_alphabet(self):
        broken = corrupt("0000", "addJunk", random.Random(6))
        junk = broken.replace("0", "")
        assert 10 <= len(junk) <= 15
        assert set(junk) <= set(JUNK_ALPHABET)


class TestCorruptWithReport:
    """Method dispatch and reporting."""

    def test_random_picks_a_concrete_method(self, dm_payload):
        rng = random.Random(7)
        seen = set()
        for _ in range(40):
            result = corrupt_with_report(dm_payload, "random", rng)
            assert result.method in CONCRETE_METHODS
            assert result.applied
            seen.add(result.method)
        assert len(seen) > 1

    def test_unknown_method_is_reported_not_raised(self, dm_payload):
        result = corrupt_with_report(dm_payload, "shuffle")
        assert result.payload == dm_payload
        assert result.method is None
        assert not result.applied
        assert isinstance(result.errors[0], UnknownMutationMethod)
        assert result.errors[0].method == "shuffle"

    def test_unknown_method_plain_call(self):
        assert corrupt("ABC", "shuffle") == "ABC"

    def test_empty_payload(self):
        for method in CorruptionMethod:
            assert corrupt("", method) == ""

    def test_original_is_kept(self, dm_payload):
        result = corrupt_with_report(dm_payload, "addJunk", random.Random(8))
        assert result.original == dm_payload
        assert result.payload != dm_payload
