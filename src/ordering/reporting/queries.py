"""Admin read queries over orders, payment slips and the catalogue.

Queries read the aggregates directly and shape plain dicts for the API.
Every query is admin only.
"""

from decimal import Decimal

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.access.role import require_admin
from ordering.catalogue.product import Product
from ordering.order.order import Order, OrderStatus
from ordering.payment.slip import PaymentSlip
from ordering.shared.lookup import load
from ordering.shared.money import as_amount, to_decimal

REVENUE_STATUSES = {
    OrderStatus.PAID.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.SHIPPED.value,
    OrderStatus.DELIVERED.value,
}
PROCESSING_STATUSES = {
    OrderStatus.PAID.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.SHIPPED.value,
}


def _product_names(product_ids) -> dict:
    repo = current_domain.repository_for(Product)
    names = {}
    for product_id in set(product_ids):
        try:
            names[product_id] = repo.get(product_id).name
        except ObjectNotFoundError:
            names[product_id] = None
    return names


def _address(order) -> dict | None:
    if order.delivery_address is None:
        return None
    return {
        "full_name": order.delivery_address.full_name,
        "phone": order.delivery_address.phone,
        "address": order.delivery_address.address,
    }


def _order_dict(order, names) -> dict:
    return {
        "order_id": str(order.id),
        "customer_id": str(order.customer_id),
        "total_amount": order.total_amount,
        "payment_method": order.payment_method,
        "status": order.status,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "delivery_address": _address(order),
        "items": [
            {
                "item_id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": names.get(str(item.product_id)),
                "quantity": item.quantity,
                "price": item.price,
                "size": item.size,
                "color": item.color,
            }
            for item in order.items
        ],
    }


def _slip_dict(slip) -> dict:
    return {
        "slip_id": str(slip.id),
        "order_id": str(slip.order_id),
        "image_url": slip.image_url,
        "verified": slip.verified,
        "uploaded_at": slip.uploaded_at,
        "verified_at": slip.verified_at,
    }


def list_orders(actor_id, offset: int = 0, limit: int = 50) -> list[dict]:
    """Orders newest first, with delivery address and items."""
    require_admin(actor_id)
    orders = (
        current_domain.repository_for(Order)
        ._dao.query.order_by("-created_at")
        .offset(max(offset, 0))
        .limit(max(limit, 1))
        .all()
        .items
    )
    names = _product_names(str(item.product_id) for order in orders for item in order.items)
    return [_order_dict(order, names) for order in orders]


def get_order_detail(actor_id, order_id) -> dict:
    require_admin(actor_id)
    order = load(Order, order_id, "Order")
    names = _product_names(str(item.product_id) for item in order.items)

    slips = (
        current_domain.repository_for(PaymentSlip)
        ._dao.query.filter(order_id=str(order.id))
        .order_by("uploaded_at")
        .all()
        .items
    )
    detail = _order_dict(order, names)
    detail["payment_slips"] = [_slip_dict(slip) for slip in slips]
    return detail


def list_unverified_slips(actor_id) -> list[dict]:
    """Slips awaiting review, oldest first, with order total, customer and delivery name."""
    require_admin(actor_id)
    slips = (
        current_domain.repository_for(PaymentSlip)
        ._dao.query.filter(verified=False)
        .order_by("uploaded_at")
        .all()
        .items
    )

    order_repo = current_domain.repository_for(Order)
    results = []
    for slip in slips:
        row = _slip_dict(slip)
        try:
            order = order_repo.get(str(slip.order_id))
        except ObjectNotFoundError:
            order = None
        row["total_amount"] = order.total_amount if order else None
        row["customer_id"] = str(order.customer_id) if order else None
        row["full_name"] = order.delivery_address.full_name if order and order.delivery_address else None
        results.append(row)
    return results


def business_metrics(actor_id) -> dict:
    require_admin(actor_id)
    orders = current_domain.repository_for(Order)._dao.query.all().items

    revenue = sum(
        (to_decimal(o.total_amount) for o in orders if o.status in REVENUE_STATUSES),
        Decimal("0"),
    )
    return {
        "total_customers": len({str(o.customer_id) for o in orders}),
        "total_orders": len(orders),
        "total_revenue": as_amount(revenue),
        "pending_orders": sum(1 for o in orders if o.status == OrderStatus.PENDING_PAYMENT.value),
        "processing_orders": sum(1 for o in orders if o.status in PROCESSING_STATUSES),
    }


def products_with_image_counts(actor_id) -> list[dict]:
    """Products newest first, each with how many images it has."""
    require_admin(actor_id)
    products = current_domain.repository_for(Product)._dao.query.order_by("-created_at").all().items
    return [
        {
            "product_id": str(p.id),
            "name": p.name,
            "price": p.price,
            "stock": p.stock,
            "is_active": p.is_active,
            "is_preorder": p.is_preorder,
            "category_id": str(p.category_id) if p.category_id else None,
            "image_count": len(p.images),
        }
        for p in products
    ]


def list_product_images(actor_id, product_id) -> list[dict]:
    require_admin(actor_id)
    product = load(Product, product_id, "Product")
    return [
        {
            "image_id": str(i.id),
            "image_url": i.image_url,
            "alt_text": i.alt_text,
            "is_primary": i.is_primary,
            "sort_order": i.sort_order,
        }
        for i in product.sorted_images()
    ]
