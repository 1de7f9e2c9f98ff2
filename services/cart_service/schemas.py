from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class CartEntry(BaseModel):
    """One line item in the cart.

    ``weight`` is the variant discriminator: two entries for the same product with
    different weights are separate cart lines.
    """

    model_config = ConfigDict(extra="ignore")

    product_id: str = Field(validation_alias=AliasChoices("product_id", "id"))
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    weight: Optional[str] = None
    image: str = Field(default="", validation_alias=AliasChoices("image", "image_url"))

    @field_validator("product_id", "weight", mode="before")
    @classmethod
    def stringify(cls, v, info: ValidationInfo):
        # Catalog ids and weights arrive as numbers from some callers
        if v is not None and not isinstance(v, str):
            v = str(v)
        if info.field_name == "weight" and v is not None and not v.strip():
            # Blank weight means no variant
            return None
        return v

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def matches(self, product_id: str, weight: Optional[str] = None) -> bool:
        """True when an incoming (product_id, weight) pair belongs on this line.

        A line without a weight absorbs any weight of the same product.
        """
        if self.product_id != product_id:
            return False
        return not self.weight or self.weight == weight


class UpdateQuantityRequest(BaseModel):
    """Request model for updating item quantity."""

    quantity: int


class CartResponse(BaseModel):
    """Response model for cart."""

    session_id: str
    items: List[CartEntry]
    total_amount: float
    total_items: int


class CheckoutResponse(BaseModel):
    """Response model for checkout hand-off."""

    message: str
    checkout_url: str
    event_id: str
    cart: CartResponse


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    service: str
    version: str
