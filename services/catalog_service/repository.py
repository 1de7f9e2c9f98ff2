import logging
from typing import List, Optional

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session

from services.catalog_service.models import Product, Review

logger = logging.getLogger(__name__)


class ProductRepository:
    """Repository for catalog reads and review writes."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_product(
        self,
        name: str,
        description: str,
        price: float,
        category: str,
        image_url: str,
        in_stock: bool = True,
        featured: bool = False,
        discount: int = 0,
    ) -> Product:
        """Create a new product."""
        product = Product(
            name=name,
            description=description,
            price=price,
            category=category,
            image_url=image_url,
            in_stock=in_stock,
            featured=featured,
            discount=discount,
        )
        self.db.add(product)
        self.db.flush()
        logger.info(f"Created product {product.id}: {product.name} ({category})")
        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID."""
        return self.db.get(Product, product_id)

    def get_by_name(self, name: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.name == name.strip()).first()

    def list_products(self, category: Optional[str] = None, featured: Optional[bool] = None) -> List[Product]:
        """List products, featured first then newest, optionally filtered."""
        query = self.db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        if featured is not None:
            query = query.filter(Product.featured.is_(featured))
        return query.order_by(Product.featured.desc(), Product.created_at.desc(), Product.name).all()

    def search(self, text: str, category: Optional[str] = None) -> List[Product]:
        """Case-insensitive search across name, description and category."""
        text = (text or "").strip()
        if not text:
            return self.list_products(category=category)

        pattern = f"%{text}%"
        query = self.db.query(Product).filter(
            or_(
                Product.name.ilike(pattern),
                Product.description.ilike(pattern),
                cast(Product.category, String).ilike(pattern),
            )
        )
        if category:
            query = query.filter(Product.category == category)
        return query.order_by(Product.name).all()

    def add_review(self, product_id: str, user_id: str, name: str, rating: int, comment: str) -> Optional[Product]:
        """Attach a review and refresh the product rating. Returns None for unknown products."""
        product = self.get_product(product_id)
        if not product:
            logger.warning(f"Review for unknown product {product_id}")
            return None

        review: Review = product.add_review(user_id, name, rating, comment)
        self.db.flush()
        logger.info(f"Added {review.rating}-star review to {product.id}; rating now {product.rating:.2f}")
        return product
