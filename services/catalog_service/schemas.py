from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Category = Literal["spices", "herbs", "blends", "seasonings"]


class ReviewCreate(BaseModel):
    """Payload for posting a review."""

    user_id: str
    name: str
    rating: int = Field(ge=1, le=5)
    comment: str

    @field_validator("name", "comment")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ReviewRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: str
    rating: int
    comment: str
    date: datetime


class ProductRead(BaseModel):
    """Product representation for the storefront, including the discounted price."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    price: float
    discounted_price: float
    category: Category
    image_url: str
    in_stock: bool
    rating: float
    featured: bool
    discount: int
    reviews: List[ReviewRead] = []
    created_at: Optional[datetime] = None


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
