"""
Tests for cart and settings snapshot encoding
"""

from collections import Counter
from decimal import Decimal

from shopcart.cart import SkipReason
from shopcart.models import CartSettings


class TestCartSnapshot:
    """Cart record encoding."""

    def test_encode_format(self, store):
        data = store.encode_cart([("EL-001", 2), ("BK-403", 1)])
        assert data == b"EL-001,2\nBK-403,1\n"

    def test_encode_empty(self, store):
        assert store.encode_cart([]) == b""

    def test_round_trip(self, store, cart):
        cart.add("HM-101", 3)
        cart.add("FS-205", 1)
        cart.add("SP-304", 12)

        result = store.decode_cart(store.encode_cart(cart.records()))

        assert Counter(result.records) == Counter(cart.records())
        assert result.skipped_count == 0

    def test_tolerates_whitespace_and_blank_lines(self, store):
        data = b"  EL-001 , 2  \r\n\n\tBK-403,1\n"
        result = store.decode_cart(data)
        assert result.records == [("EL-001", 2), ("BK-403", 1)]
        assert result.skipped == []

    def test_skips_bad_records(self, store):
        data = (
            b"EL-001,2\n"
            b"garbage\n"
            b"EL-002,two\n"
            b"EL-003,0\n"
            b"EL-004,-5\n"
            b"ZZ-999,1\n"
            b"EL-005,1,extra\n"
            b",3\n"
            b"HM-101,1\n"
        )
        result = store.decode_cart(data)

        assert result.records == [("EL-001", 2), ("HM-101", 1)]
        assert [(s.line_number, s.reason) for s in result.skipped] == [
            (2, SkipReason.MALFORMED),
            (3, SkipReason.MALFORMED),
            (4, SkipReason.INVALID_QUANTITY),
            (5, SkipReason.INVALID_QUANTITY),
            (6, SkipReason.UNKNOWN_PRODUCT),
            (7, SkipReason.MALFORMED),
            (8, SkipReason.MALFORMED),
        ]
        assert result.skipped_count == 7

    def test_undecodable_bytes_are_skipped(self, store):
        result = store.decode_cart(b"EL-001,1\n\xff\xfe,2\n")
        assert result.records == [("EL-001", 1)]
        assert result.skipped[0].reason == SkipReason.UNKNOWN_PRODUCT

    def test_bom_is_ignored(self, store):
        result = store.decode_cart("\ufeffEL-001,1\n".encode("utf-8"))
        assert result.records == [("EL-001", 1)]

    def test_duplicate_ids_are_kept_as_records(self, store):
        result = store.decode_cart(b"EL-001,1\nEL-001,2\n")
        assert result.records == [("EL-001", 1), ("EL-001", 2)]


class TestSettingsSnapshot:
    """Settings key=value encoding."""

    def test_encode(self, store):
        data = store.encode_settings(CartSettings(discount_code="save10", shipping_fee="50"))
        assert data == b"discount=save10\nshipping=50.00\n"

    def test_round_trip(self, store):
        settings = CartSettings(discount_code="FREESHIP", shipping_fee=Decimal("123.45"))
        assert store.decode_settings(store.encode_settings(settings)) == settings

    def test_missing_data_defaults(self, store):
        settings = store.decode_settings(None)
        assert settings.discount_code == ""
        assert settings.shipping_fee == Decimal("0.00")

    def test_missing_keys_default(self, store):
        settings = store.decode_settings(b"#ShoppingCart Settings\nunrelated=1\n")
        assert settings == CartSettings()

    def test_unparsable_shipping_defaults(self, store):
        settings = store.decode_settings(b"discount=SAVE20\nshipping=lots\n")
        assert settings.discount_code == "SAVE20"
        assert settings.shipping_fee == Decimal("0.00")

    def test_negative_shipping_defaults(self, store):
        assert store.decode_settings(b"shipping=-5\n").shipping_fee == Decimal("0.00")

    def test_reads_java_style_properties(self, store):
        data = (
            b"#ShoppingCart Settings\n"
            b"#Thu Jan 01 00:00:00 SAST 2025\n"
            b"discount=STUDENT5\n"
            b"shipping=75.0\n"
        )
        settings = store.decode_settings(data)
        assert settings.discount_code == "STUDENT5"
        assert settings.shipping_fee == Decimal("75.00")

    def test_value_may_contain_equals(self, store):
        assert store.decode_settings(b"discount=A=B\n").discount_code == "A=B"

    def test_newlines_in_code_do_not_break_format(self, store):
        data = store.encode_settings(CartSettings(discount_code="SAVE10\nshipping=999"))
        assert store.decode_settings(data).shipping_fee == Decimal("0.00")
