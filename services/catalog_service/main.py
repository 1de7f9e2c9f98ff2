"""
catalog_service/main.py - Product Catalog Service

PURPOSE:
    Serves the spice catalog to the storefront: product listings as JSON for the
    frontend, the rendered product grid, and shopper reviews.

API ENDPOINTS:
    GET  /api/products                    - List products (?q=, ?category=, ?featured=)
    GET  /api/products/{product_id}       - Product details
    POST /api/products/{product_id}/reviews - Add a review (recomputes rating)
    GET  /products                        - Product grid HTML
    GET  /health                          - Health check endpoint

DATABASE:
    - Table products: id, name, description, price, category, image_url, in_stock,
      rating, featured, discount, created_at, updated_at
    - Table product_reviews: id, product_id, user_id, name, rating, comment, date
    - Seeded with the sample spice catalog on startup (SEED_PRODUCTS=false to skip)

USAGE:
    Runs on port 8002
    Access: http://localhost:8002/api/products
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Iterator, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.responses import HTMLResponse
from pydantic_settings import BaseSettings
from sqlalchemy.orm import Session, sessionmaker

from shared.database import DATABASE_URL, init_db, make_engine, make_session_factory
from shared.logging_config import setup_logging

from services.catalog_service import models  # noqa: F401  registers tables on Base
from services.catalog_service.product_view import render_product_grid
from services.catalog_service.repository import ProductRepository
from services.catalog_service.schemas import (
    Category,
    HealthResponse,
    ProductRead,
    ReviewCreate,
)
from services.catalog_service.seed_data import seed_products

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings."""

    database_url: str = DATABASE_URL
    seed_products: bool = os.getenv("SEED_PRODUCTS", "true").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    catalog_service_port: int = int(os.getenv("CATALOG_SERVICE_PORT", "8002"))


settings = Settings()

SessionLocal: Optional[sessionmaker] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    global SessionLocal

    setup_logging("catalog-service", level=settings.log_level)
    logger.info("Starting Catalog Service...")

    try:
        engine = make_engine(settings.database_url)
        init_db(engine)
        SessionLocal = make_session_factory(engine)
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    if settings.seed_products:
        db = SessionLocal()
        try:
            seed_products(db)
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to seed products: {e}")
        finally:
            db.close()

    yield

    logger.info("Shutting down Catalog Service...")
    engine.dispose()


app = FastAPI(title="Catalog Service", version="1.0.0", lifespan=lifespan)


def get_db() -> Iterator[Session]:
    """Get database session."""
    if SessionLocal is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Catalog database unavailable")
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _query_products(
    repo: ProductRepository,
    q: Optional[str],
    category: Optional[str],
    featured: Optional[bool],
):
    if q:
        products = repo.search(q, category=category)
        if featured is not None:
            products = [p for p in products if p.featured == featured]
        return products
    return repo.list_products(category=category, featured=featured)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", service="catalog-service", version="1.0.0")


@app.get("/api/products", response_model=List[ProductRead])
def list_products(
    q: Optional[str] = Query(default=None, description="Text search on name, description and category"),
    category: Optional[Category] = None,
    featured: Optional[bool] = None,
    db: Session = Depends(get_db),
) -> List[ProductRead]:
    """List products."""
    repo = ProductRepository(db)
    products = _query_products(repo, q, category, featured)
    return [ProductRead.model_validate(p) for p in products]


@app.get("/api/products/{product_id}", response_model=ProductRead)
def get_product(product_id: str, db: Session = Depends(get_db)) -> ProductRead:
    """Get product details."""
    product = ProductRepository(db).get_product(product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return ProductRead.model_validate(product)


@app.post(
    "/api/products/{product_id}/reviews",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def add_review(product_id: str, review: ReviewCreate, db: Session = Depends(get_db)) -> ProductRead:
    """Add a review; the product's rating becomes the mean of all its reviews."""
    try:
        product = ProductRepository(db).add_review(
            product_id,
            user_id=review.user_id,
            name=review.name,
            rating=review.rating,
            comment=review.comment,
        )
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        db.commit()
        db.refresh(product)
        return ProductRead.model_validate(product)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Error adding review: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@app.get("/products", response_class=HTMLResponse)
def products_page(
    category: Optional[Category] = None,
    db: Session = Depends(get_db),
) -> HTMLResponse:
    """Render the product grid."""
    try:
        products = ProductRepository(db).list_products(category=category)
    except Exception as e:
        # The page still renders; an empty grid shows the "no products" message
        logger.error(f"Error fetching products: {e}")
        products = []
    return HTMLResponse(render_product_grid(products))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.catalog_service_port)
