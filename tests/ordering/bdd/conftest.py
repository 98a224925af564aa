"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from ordering.cart.cart import Cart
from ordering.catalogue.product import Product
from ordering.errors import OrderingError
from ordering.order.order import Order


@pytest.fixture()
def context():
    """Scenario state: products by name, the placed order and any captured error."""
    return {"products": {}, "order_id": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:d} with {stock:d} in stock'))
def product_in_catalogue(context, make_product, name, price, stock):
    context["products"][name] = make_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('the customer has {quantity:d} of "{name}" in the cart'))
def product_in_cart(context, customer_id, add_to_cart, name, quantity):
    add_to_cart(customer_id, context["products"][name], quantity)


@given(parsers.cfparse('the customer checks out with "{method}"'))
@when(parsers.cfparse('the customer checks out with "{method}"'))
def customer_checks_out(context, customer_id, checkout, method):
    try:
        context["order_id"] = checkout(customer_id, method)
    except (OrderingError, ValidationError) as exc:
        context["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(context, status):
    assert current_domain.repository_for(Order).get(context["order_id"]).status == status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock_is(context, name, stock):
    product = current_domain.repository_for(Product).get(str(context["products"][name].id))
    assert product.stock == stock


@then("the cart is empty")
def cart_is_empty(customer_id):
    assert len(current_domain.repository_for(Cart).for_customer(customer_id).items) == 0


@then(parsers.cfparse("the cart still holds {count:d} line"))
def cart_holds_lines(customer_id, count):
    assert len(current_domain.repository_for(Cart).for_customer(customer_id).items) == count
