"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Business validation (quantities, payment methods,
blank delivery fields) stays in the domain so that every caller gets the
same error.
"""

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class DeliveryAddressSchema(BaseModel):
    full_name: str
    phone: str
    address: str


class OrderItemSchema(BaseModel):
    item_id: str
    product_id: str
    product_name: str | None = None
    quantity: int
    price: float
    size: str | None = None
    color: str | None = None


class PaymentSlipSchema(BaseModel):
    slip_id: str
    order_id: str
    image_url: str
    verified: bool
    uploaded_at: datetime | None = None
    verified_at: datetime | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1
    size: str | None = None
    color: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "c0a8012e-0000-4000-8000-000000000001",
                    "quantity": 2,
                    "size": "M",
                    "color": "Black",
                }
            ]
        }
    }


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartIdResponse(BaseModel):
    cart_id: str


class CartItemIdResponse(BaseModel):
    item_id: str


class CartLineSchema(BaseModel):
    item_id: str
    product_id: str
    name: str
    size: str | None = None
    color: str | None = None
    quantity: int
    unit_price: float
    line_total: float
    is_active: bool


class CartResponse(BaseModel):
    cart_id: str | None = None
    items: list[CartLineSchema]
    total: float


class CartTotalResponse(BaseModel):
    total: float
    currency: str


# ---------------------------------------------------------------------------
# Checkout & orders
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    payment_method: str
    full_name: str | None = None
    phone: str | None = None
    address: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "payment_method": "cash-on-delivery",
                    "full_name": "Aye Aye",
                    "phone": "09-123456789",
                    "address": "12 Bogyoke Road, Yangon",
                }
            ]
        }
    }


class OrderIdResponse(BaseModel):
    order_id: str


class UploadPaymentSlipRequest(BaseModel):
    image_url: str


class SlipIdResponse(BaseModel):
    slip_id: str


class DeliveryAddressRequest(BaseModel):
    full_name: str | None = None
    phone: str | None = None
    address: str | None = None


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str


class VerifyPaymentSlipRequest(BaseModel):
    verified: bool


class OrderSchema(BaseModel):
    order_id: str
    customer_id: str
    total_amount: float
    payment_method: str
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    delivery_address: DeliveryAddressSchema | None = None
    items: list[OrderItemSchema]


class OrderDetailSchema(OrderSchema):
    payment_slips: list[PaymentSlipSchema]


class UnverifiedSlipSchema(PaymentSlipSchema):
    total_amount: float | None = None
    customer_id: str | None = None
    full_name: str | None = None


class BusinessMetricsResponse(BaseModel):
    total_customers: int
    total_orders: int
    total_revenue: float
    pending_orders: int
    processing_orders: int


class CleanupRequest(BaseModel):
    older_than: datetime | None = None


class CleanupResponse(BaseModel):
    orders: int
    order_items: int
    delivery_addresses: int
    payment_slips: int
    notifications: int


class SaveCategoryRequest(BaseModel):
    season: str | None = None
    year: int | None = None


class SaveProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = None
    stock: int | None = None
    is_preorder: bool | None = None
    is_active: bool | None = None
    category_id: str | None = None
    sizes: list[str] | None = None
    colors: list[str] | None = None


class ActiveStatusRequest(BaseModel):
    is_active: bool


class AddProductImageRequest(BaseModel):
    image_url: str
    alt_text: str | None = None
    is_primary: bool = False
    sort_order: int = 0


class UpdateProductImageRequest(BaseModel):
    alt_text: str | None = None
    is_primary: bool | None = None
    sort_order: int | None = None


class ProductSummarySchema(BaseModel):
    product_id: str
    name: str
    price: float
    stock: int | None = None
    is_active: bool
    is_preorder: bool
    category_id: str | None = None
    image_count: int


class ProductImageSchema(BaseModel):
    image_id: str
    image_url: str
    alt_text: str | None = None
    is_primary: bool
    sort_order: int | None = None


class GrantRoleRequest(BaseModel):
    user_id: str
    role: str


class IdResponse(BaseModel):
    id: str


class StatusResponse(BaseModel):
    status: str = "ok"
