"""Tests for GST helpers."""

from decimal import Decimal

from bulkledger.utils.gst import GST_RATE, split_gst


def test_rate_is_three_percent():
    assert GST_RATE == Decimal("0.03")


def test_split_round_amount():
    assert split_gst(Decimal("103")) == (Decimal("100.00"), Decimal("3.00"))


def test_split_rounds_to_cents():
    base, gst = split_gst(Decimal("73173"))

    assert base == Decimal("71041.75")
    assert gst == Decimal("2131.25")
    assert base + gst == Decimal("73173")
