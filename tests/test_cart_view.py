"""Tests for the cart page view and count badge"""
import pytest

from services.cart_service.cart_view import (
    CartCountBadge,
    CartView,
    parse_quantity,
    render_cart_html,
)
from services.cart_service.exceptions import InvalidIndexError


class TestRenderCartHtml:
    def test_empty_cart(self):
        html = render_cart_html([])

        assert 'id="emptyCart" class="empty-cart" style="display: flex"' in html
        assert 'id="cartSummary" class="cart-summary" style="display: none"' in html
        assert "cart-item\"" not in html

    def test_items_and_totals(self, cart, masala, basil):
        cart.add_item(masala)
        cart.add_item(basil)

        html = render_cart_html(cart.get_items())

        assert 'data-index="0"' in html
        assert 'data-index="1"' in html
        assert "Garam Masala" in html
        assert "(100g)" in html
        assert "₹440" in html
        assert '<span id="total">₹520</span>' in html
        assert 'value="2"' in html

    def test_names_are_escaped(self, cart):
        cart.add_item({"id": 5, "name": "<b>Hing</b>", "price": 10, "quantity": 1})

        html = render_cart_html(cart.get_items())

        assert "&lt;b&gt;Hing&lt;/b&gt;" in html
        assert "<b>Hing</b>" not in html


class TestCartView:
    def test_renders_on_creation_and_on_change(self, cart, masala):
        view = CartView(cart)
        assert view.empty_visible is True
        assert view.summary_visible is False

        cart.add_item(masala)

        assert view.empty_visible is False
        assert view.summary_visible is True
        assert "Garam Masala" in view.html

    def test_increment_and_decrement(self, cart, masala):
        cart.add_item(masala)
        view = CartView(cart)

        view.increment(0)
        assert cart.get_items()[0].quantity == 3

        view.decrement(0)
        view.decrement(0)
        view.decrement(0)
        assert cart.get_items()[0].quantity == 1

    def test_set_quantity_parses_input(self, cart, masala):
        cart.add_item(masala)
        view = CartView(cart)

        view.set_quantity(0, "6")
        assert cart.get_items()[0].quantity == 6

        view.set_quantity(0, "abc")
        assert cart.get_items()[0].quantity == 1

    def test_remove(self, cart, masala, basil):
        cart.add_item(masala)
        cart.add_item(basil)
        view = CartView(cart)

        view.remove(0)

        assert [i.product_id for i in cart.get_items()] == ["4"]
        assert "Garam Masala" not in view.html

    def test_control_on_missing_row_raises(self, cart):
        view = CartView(cart)

        with pytest.raises(InvalidIndexError):
            view.increment(0)

    def test_detach_stops_rendering(self, cart, masala):
        view = CartView(cart)
        view.detach()

        cart.add_item(masala)

        assert "Garam Masala" not in view.html


class TestCartCountBadge:
    def test_tracks_total_quantity(self, cart, masala, basil):
        badge = CartCountBadge(cart)
        assert (badge.count, badge.display) == (0, "none")

        cart.add_item(masala)
        cart.add_item(basil)
        assert (badge.count, badge.display) == (3, "flex")

        cart.update_quantity(0, 5)
        assert badge.count == 6

        cart.clear()
        assert (badge.count, badge.display) == (0, "none")

    def test_initial_count_from_loaded_cart(self, cart, masala):
        cart.add_item(masala)

        assert CartCountBadge(cart).count == 2


@pytest.mark.parametrize(
    "raw,expected",
    [("3", 3), (" 12 ", 12), ("4abc", 4), ("", 1), ("0", 1), ("abc", 1), (None, 1), (7, 7), (0, 1), ("-2", -2)],
)
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected
