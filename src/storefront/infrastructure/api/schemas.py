"""Request bodies for the HTTP API.

Field names on the wire are camelCase.  Address fields are optional here
so that missing ones reach the domain, which reports all of them at once.
"""

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AddToCartRequest(_CamelModel):
    """Add item to cart."""

    product_id: str = Field(alias="productId", min_length=1)
    quantity: int = 1


class UpdateCartRequest(_CamelModel):
    """Update cart item quantity."""

    quantity: int


class ShippingAddressIn(_CamelModel):

    name: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = Field(default=None, alias="postalCode")
    country: str | None = None
    phone: str | None = None


class PlaceOrderRequest(_CamelModel):
    """Create an order from the caller's cart."""

    shipping_address: ShippingAddressIn | None = Field(default=None, alias="shippingAddress")
    payment_method: str = Field(default="mock", alias="paymentMethod")


class UpdateOrderRequest(_CamelModel):
    """Admin status update; omitted fields are left unchanged."""

    order_status: str | None = Field(default=None, alias="orderStatus")
    payment_status: str | None = Field(default=None, alias="paymentStatus")
    tracking_number: str | None = Field(default=None, alias="trackingNumber")


class AddReviewRequest(_CamelModel):

    rating: int
    comment: str
