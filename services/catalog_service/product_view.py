"""Product listing HTML: product cards, star ratings and the product grid."""

import math
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from shared.money import format_inr

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)
env.filters["inr"] = format_inr

FULL_STAR = '<i class="fas fa-star"></i>'
HALF_STAR = '<i class="fas fa-star-half-alt"></i>'
EMPTY_STAR = '<i class="far fa-star"></i>'


def star_rating_html(rating: float) -> Markup:
    """Five star icons for a 0-5 rating; a fraction of .5 or more shows a half star."""
    rating = min(max(rating or 0.0, 0.0), 5.0)
    full = math.floor(rating)
    half = 1 if rating % 1 >= 0.5 else 0
    empty = 5 - full - half
    return Markup(FULL_STAR * full + HALF_STAR * half + EMPTY_STAR * empty)


def render_product_card(product) -> Markup:
    """Card for a catalog product (ORM object or ProductRead)."""
    price = product.discounted_price if product.discount > 0 else product.price
    template = env.get_template("product_card.html")
    return Markup(
        template.render(
            product=product,
            price=price,
            stars=star_rating_html(product.rating),
            review_count=len(product.reviews or []),
        )
    )


def render_product_grid(products: Iterable) -> str:
    cards = [render_product_card(p) for p in products]
    return env.get_template("products.html").render(cards=cards)
