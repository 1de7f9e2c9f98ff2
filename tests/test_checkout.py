"""Tests for rupee formatting and the checkout deep link"""
import pytest

from services.cart_service.checkout import build_checkout_url, encode_uri_component
from shared.money import format_amount, format_inr


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0"),
        (80, "80"),
        (999, "999"),
        (1000, "1,000"),
        (100000, "1,00,000"),
        (1234567, "12,34,567"),
        (1499.5, "1,499.5"),
        (0.1 + 0.2, "0.3"),
        (2.0006, "2.001"),
        (2.0625, "2.063"),
        (1.0005, "1.001"),
        (-2500, "-2,500"),
    ],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected


def test_format_inr():
    assert format_inr(2500) == "₹2,500"


def test_encode_uri_component_matches_browser_rules():
    assert encode_uri_component("a b/c?d=e&f") == "a%20b%2Fc%3Fd%3De%26f"
    assert encode_uri_component("*New* (x)!~'_.-") == "*New*%20(x)!~'_.-"
    assert encode_uri_component("₹\n") == "%E2%82%B9%0A"


def test_build_checkout_url():
    url = build_checkout_url("2x Garam Masala - ₹440", "+91 98765-43210")

    assert url == "https://wa.me/919876543210?text=2x%20Garam%20Masala%20-%20%E2%82%B9440"


def test_build_checkout_url_requires_digits():
    with pytest.raises(ValueError):
        build_checkout_url("hello", "YOUR_PHONE_NUMBER")
