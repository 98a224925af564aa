"""FastAPI routes for the Ordering domain: cart, checkout, orders and admin.

The caller is identified by the ``X-User-Id`` header. Authorization happens
in the domain, so routes only pass the identity along.
"""

import json

from fastapi import APIRouter, Depends, Header
from protean.utils.globals import current_domain

from ordering.access.management import GrantRole
from ordering.api.schemas import (
    ActiveStatusRequest,
    AddProductImageRequest,
    AddToCartRequest,
    BusinessMetricsResponse,
    CartIdResponse,
    CartItemIdResponse,
    CartResponse,
    CartTotalResponse,
    CheckoutRequest,
    CleanupRequest,
    CleanupResponse,
    DeliveryAddressRequest,
    GrantRoleRequest,
    IdResponse,
    OrderDetailSchema,
    OrderIdResponse,
    OrderSchema,
    ProductImageSchema,
    ProductSummarySchema,
    SaveCategoryRequest,
    SaveProductRequest,
    SlipIdResponse,
    StatusResponse,
    UnverifiedSlipSchema,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
    UpdateProductImageRequest,
    UploadPaymentSlipRequest,
    VerifyPaymentSlipRequest,
)
from ordering.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from ordering.cart.management import GetOrCreateCart
from ordering.cart.totals import cart_contents, cart_total
from ordering.catalogue.images import AddProductImage, RemoveProductImage, UpdateProductImage
from ordering.catalogue.management import (
    DeleteCategory,
    DeleteProduct,
    SaveCategory,
    SaveProduct,
    SetActiveStatus,
)
from ordering.checkout.checkout import Checkout
from ordering.order.address import CorrectDeliveryAddress, RemoveDeliveryAddress
from ordering.order.housekeeping import CleanupOldOrders, DeleteOrder
from ordering.order.status import UpdateOrderStatus
from ordering.payment.upload import UploadPaymentSlip
from ordering.payment.verification import VerifyPaymentSlip
from ordering.reporting.queries import (
    business_metrics,
    get_order_detail,
    list_orders,
    list_product_images,
    list_unverified_slips,
    products_with_image_counts,
)
from ordering.shared.money import as_amount, store_currency


def caller_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """The authenticated user id, as forwarded by the auth gateway."""
    return x_user_id


def _options(values):
    return None if values is None else json.dumps(values)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.post("", response_model=CartIdResponse)
async def get_or_create_cart(user_id: str | None = Depends(caller_id)) -> CartIdResponse:
    result = current_domain.process(GetOrCreateCart(customer_id=user_id), asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.get("", response_model=CartResponse)
async def get_cart(user_id: str | None = Depends(caller_id)) -> CartResponse:
    return CartResponse(**cart_contents(user_id))


@cart_router.get("/total", response_model=CartTotalResponse)
async def get_cart_total(user_id: str | None = Depends(caller_id)) -> CartTotalResponse:
    return CartTotalResponse(total=as_amount(cart_total(user_id)), currency=store_currency())


@cart_router.post("/items", status_code=201, response_model=CartItemIdResponse)
async def add_cart_item(body: AddToCartRequest, user_id: str | None = Depends(caller_id)) -> CartItemIdResponse:
    command = AddToCart(
        customer_id=user_id,
        product_id=body.product_id,
        quantity=body.quantity,
        size=body.size,
        color=body.color,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartItemIdResponse(item_id=result)


@cart_router.put("/items/{item_id}", response_model=StatusResponse)
async def update_cart_item_quantity(
    item_id: str, body: UpdateCartQuantityRequest, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = UpdateCartQuantity(customer_id=user_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str, user_id: str | None = Depends(caller_id)) -> StatusResponse:
    current_domain.process(RemoveFromCart(customer_id=user_id, item_id=item_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Checkout & Order Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


@checkout_router.post("", status_code=201, response_model=OrderIdResponse)
async def checkout(body: CheckoutRequest, user_id: str | None = Depends(caller_id)) -> OrderIdResponse:
    command = Checkout(
        customer_id=user_id,
        payment_method=body.payment_method,
        full_name=body.full_name,
        phone=body.phone,
        address=body.address,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.post("/{order_id}/payment-slips", status_code=201, response_model=SlipIdResponse)
async def upload_payment_slip(
    order_id: str, body: UploadPaymentSlipRequest, user_id: str | None = Depends(caller_id)
) -> SlipIdResponse:
    command = UploadPaymentSlip(actor_id=user_id, order_id=order_id, image_url=body.image_url)
    result = current_domain.process(command, asynchronous=False)
    return SlipIdResponse(slip_id=result)


@order_router.put("/{order_id}/delivery-address", response_model=StatusResponse)
async def correct_delivery_address(
    order_id: str, body: DeliveryAddressRequest, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = CorrectDeliveryAddress(
        actor_id=user_id,
        order_id=order_id,
        full_name=body.full_name,
        phone=body.phone,
        address=body.address,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


@admin_router.get("/orders", response_model=list[OrderSchema])
async def admin_list_orders(
    offset: int = 0, limit: int = 50, user_id: str | None = Depends(caller_id)
) -> list[OrderSchema]:
    return [OrderSchema(**o) for o in list_orders(user_id, offset=offset, limit=limit)]


@admin_router.post("/orders/cleanup", response_model=CleanupResponse)
async def admin_cleanup_orders(body: CleanupRequest, user_id: str | None = Depends(caller_id)) -> CleanupResponse:
    result = current_domain.process(
        CleanupOldOrders(actor_id=user_id, older_than=body.older_than),
        asynchronous=False,
    )
    return CleanupResponse(**result)


@admin_router.get("/orders/{order_id}", response_model=OrderDetailSchema)
async def admin_get_order(order_id: str, user_id: str | None = Depends(caller_id)) -> OrderDetailSchema:
    return OrderDetailSchema(**get_order_detail(user_id, order_id))


@admin_router.delete("/orders/{order_id}", response_model=CleanupResponse)
async def admin_delete_order(order_id: str, user_id: str | None = Depends(caller_id)) -> CleanupResponse:
    result = current_domain.process(DeleteOrder(actor_id=user_id, order_id=order_id), asynchronous=False)
    return CleanupResponse(**result)


@admin_router.put("/orders/{order_id}/status", response_model=StatusResponse)
async def admin_update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = UpdateOrderStatus(actor_id=user_id, order_id=order_id, status=body.status)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/orders/{order_id}/delivery-address", response_model=StatusResponse)
async def admin_remove_delivery_address(order_id: str, user_id: str | None = Depends(caller_id)) -> StatusResponse:
    current_domain.process(RemoveDeliveryAddress(actor_id=user_id, order_id=order_id), asynchronous=False)
    return StatusResponse()


@admin_router.get("/payment-slips/unverified", response_model=list[UnverifiedSlipSchema])
async def admin_unverified_slips(user_id: str | None = Depends(caller_id)) -> list[UnverifiedSlipSchema]:
    return [UnverifiedSlipSchema(**s) for s in list_unverified_slips(user_id)]


@admin_router.put("/payment-slips/{slip_id}", response_model=StatusResponse)
async def admin_verify_payment_slip(
    slip_id: str, body: VerifyPaymentSlipRequest, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = VerifyPaymentSlip(actor_id=user_id, slip_id=slip_id, verified=body.verified)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.get("/metrics", response_model=BusinessMetricsResponse)
async def admin_metrics(user_id: str | None = Depends(caller_id)) -> BusinessMetricsResponse:
    return BusinessMetricsResponse(**business_metrics(user_id))


@admin_router.post("/roles", response_model=StatusResponse)
async def admin_grant_role(body: GrantRoleRequest, user_id: str | None = Depends(caller_id)) -> StatusResponse:
    current_domain.process(GrantRole(actor_id=user_id, user_id=body.user_id, role=body.role), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Catalogue administration
# ---------------------------------------------------------------------------
@admin_router.post("/categories", status_code=201, response_model=IdResponse)
async def admin_create_category(body: SaveCategoryRequest, user_id: str | None = Depends(caller_id)) -> IdResponse:
    result = current_domain.process(
        SaveCategory(actor_id=user_id, season=body.season, year=body.year),
        asynchronous=False,
    )
    return IdResponse(id=result)


@admin_router.put("/categories/{category_id}", response_model=IdResponse)
async def admin_update_category(
    category_id: str, body: SaveCategoryRequest, user_id: str | None = Depends(caller_id)
) -> IdResponse:
    result = current_domain.process(
        SaveCategory(actor_id=user_id, category_id=category_id, season=body.season, year=body.year),
        asynchronous=False,
    )
    return IdResponse(id=result)


@admin_router.put("/categories/{category_id}/active", response_model=StatusResponse)
async def admin_set_category_active(
    category_id: str, body: ActiveStatusRequest, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = SetActiveStatus(actor_id=user_id, kind="category", record_id=category_id, is_active=body.is_active)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/categories/{category_id}", response_model=StatusResponse)
async def admin_delete_category(category_id: str, user_id: str | None = Depends(caller_id)) -> StatusResponse:
    current_domain.process(DeleteCategory(actor_id=user_id, category_id=category_id), asynchronous=False)
    return StatusResponse()


@admin_router.get("/products", response_model=list[ProductSummarySchema])
async def admin_list_products(user_id: str | None = Depends(caller_id)) -> list[ProductSummarySchema]:
    return [ProductSummarySchema(**p) for p in products_with_image_counts(user_id)]


def _save_product_command(user_id, body: SaveProductRequest, product_id=None) -> SaveProduct:
    return SaveProduct(
        actor_id=user_id,
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        is_preorder=body.is_preorder,
        is_active=body.is_active,
        category_id=body.category_id,
        sizes=_options(body.sizes),
        colors=_options(body.colors),
    )


@admin_router.post("/products", status_code=201, response_model=IdResponse)
async def admin_create_product(body: SaveProductRequest, user_id: str | None = Depends(caller_id)) -> IdResponse:
    result = current_domain.process(_save_product_command(user_id, body), asynchronous=False)
    return IdResponse(id=result)


@admin_router.put("/products/{product_id}", response_model=IdResponse)
async def admin_update_product(
    product_id: str, body: SaveProductRequest, user_id: str | None = Depends(caller_id)
) -> IdResponse:
    result = current_domain.process(_save_product_command(user_id, body, product_id), asynchronous=False)
    return IdResponse(id=result)


@admin_router.put("/products/{product_id}/active", response_model=StatusResponse)
async def admin_set_product_active(
    product_id: str, body: ActiveStatusRequest, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = SetActiveStatus(actor_id=user_id, kind="product", record_id=product_id, is_active=body.is_active)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def admin_delete_product(product_id: str, user_id: str | None = Depends(caller_id)) -> StatusResponse:
    current_domain.process(DeleteProduct(actor_id=user_id, product_id=product_id), asynchronous=False)
    return StatusResponse()


@admin_router.get("/products/{product_id}/images", response_model=list[ProductImageSchema])
async def admin_list_product_images(
    product_id: str, user_id: str | None = Depends(caller_id)
) -> list[ProductImageSchema]:
    return [ProductImageSchema(**i) for i in list_product_images(user_id, product_id)]


@admin_router.post("/products/{product_id}/images", status_code=201, response_model=IdResponse)
async def admin_add_product_image(
    product_id: str, body: AddProductImageRequest, user_id: str | None = Depends(caller_id)
) -> IdResponse:
    command = AddProductImage(
        actor_id=user_id,
        product_id=product_id,
        image_url=body.image_url,
        alt_text=body.alt_text,
        is_primary=body.is_primary,
        sort_order=body.sort_order,
    )
    result = current_domain.process(command, asynchronous=False)
    return IdResponse(id=result)


@admin_router.put("/products/{product_id}/images/{image_id}", response_model=StatusResponse)
async def admin_update_product_image(
    product_id: str, image_id: str, body: UpdateProductImageRequest, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = UpdateProductImage(
        actor_id=user_id,
        product_id=product_id,
        image_id=image_id,
        alt_text=body.alt_text,
        is_primary=body.is_primary,
        sort_order=body.sort_order,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_router.delete("/products/{product_id}/images/{image_id}", response_model=StatusResponse)
async def admin_remove_product_image(
    product_id: str, image_id: str, user_id: str | None = Depends(caller_id)
) -> StatusResponse:
    command = RemoveProductImage(actor_id=user_id, product_id=product_id, image_id=image_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
