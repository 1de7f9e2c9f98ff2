from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship, validates

from shared.database import Base

CATEGORIES = ("spices", "herbs", "blends", "seasonings")


def _new_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """Catalog product. ``rating`` is the mean of its review ratings."""

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_products_rating_range"),
        CheckConstraint("discount >= 0 AND discount <= 100", name="ck_products_discount_range"),
        Index("ix_products_search", "name", "category"),
    )

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    category = Column(Enum(*CATEGORIES, name="product_category"), nullable=False, index=True)
    image_url = Column(String(1024), nullable=False)
    in_stock = Column(Boolean, default=True, nullable=False)
    rating = Column(Float, default=0.0, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)
    discount = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, server_default=func.now(), nullable=False
    )

    reviews = relationship(
        "Review",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="Review.date",
    )

    def __init__(self, **kwargs):
        # Column defaults only apply at INSERT; unsaved products need them too
        kwargs.setdefault("in_stock", True)
        kwargs.setdefault("rating", 0.0)
        kwargs.setdefault("featured", False)
        kwargs.setdefault("discount", 0)
        super().__init__(**kwargs)

    @validates("name")
    def _trim_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ValueError("name cannot be empty")
        return value

    @validates("price")
    def _check_price(self, key, value):
        if value is None or value < 0:
            raise ValueError("price must be >= 0")
        return value

    @validates("category")
    def _check_category(self, key, value):
        if value not in CATEGORIES:
            raise ValueError(f"category must be one of {', '.join(CATEGORIES)}")
        return value

    @validates("discount")
    def _check_discount(self, key, value):
        if value is None:
            return 0
        if not 0 <= value <= 100:
            raise ValueError("discount must be between 0 and 100")
        return value

    @property
    def discounted_price(self) -> float:
        discount = self.discount or 0
        if discount > 0:
            # Half-up like the storefront's Math.round, not Python's banker's rounding
            return float(int(self.price * (100 - discount) / 100 + 0.5))
        return self.price

    def add_review(self, user_id: str, name: str, rating: int, comment: str) -> "Review":
        """Append a review and recompute the mean rating."""
        review = Review(user_id=user_id, name=name, rating=int(rating), comment=comment)
        self.reviews.append(review)
        self.rating = sum(r.rating for r in self.reviews) / len(self.reviews)
        return review


class Review(Base):
    """Shopper review attached to a product."""

    __tablename__ = "product_reviews"
    __table_args__ = (CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),)

    id = Column(String(32), primary_key=True, default=_new_id)
    product_id = Column(String(32), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

    product = relationship("Product", back_populates="reviews")

    @validates("rating")
    def _check_rating(self, key, value):
        if not 1 <= value <= 5:
            raise ValueError("rating must be between 1 and 5")
        return value
