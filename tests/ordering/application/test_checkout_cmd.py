"""Application tests for checkout: the cart becomes an order in one unit of work."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from ordering.cart.cart import Cart
from ordering.cart.repository import CartRepository
from ordering.catalogue.product import Product
from ordering.errors import AuthRequired, Conflict, EmptyCart
from ordering.order.order import Order


def _product(product_id):
    return current_domain.repository_for(Product).get(str(product_id))


def _order(order_id):
    return current_domain.repository_for(Order).get(order_id)


def _cart(customer_id):
    return current_domain.repository_for(Cart).for_customer(customer_id)


class TestSuccessfulCheckout:
    def test_cash_on_delivery_order(self, customer_id, make_product, add_to_cart, checkout):
        product = make_product(price=1000, stock=10)
        add_to_cart(customer_id, product, 2, size="M")

        order_id = checkout(customer_id, "cash-on-delivery")

        order = _order(order_id)
        assert order.total_amount == 2000.0
        assert order.status == "pending_confirmation"
        assert str(order.customer_id) == customer_id
        assert len(order.items) == 1
        assert order.items[0].price == 1000.0
        assert order.items[0].size == "M"
        assert order.delivery_address.full_name == "Aye Aye"

    def test_two_lines_total_and_stock(self, customer_id, make_product, add_to_cart, checkout):
        shirt = make_product(name="Shirt", price=1000, stock=10)
        scarf = make_product(name="Scarf", price=500, stock=5)
        add_to_cart(customer_id, shirt, 2)
        add_to_cart(customer_id, scarf, 1)

        order_id = checkout(customer_id)

        assert _order(order_id).total_amount == 2500.0
        assert _product(shirt.id).stock == 8
        assert _product(scarf.id).stock == 4

    def test_wallet_pay_awaits_payment(self, customer_id, make_product, add_to_cart, checkout):
        add_to_cart(customer_id, make_product(), 1)
        order_id = checkout(customer_id, "wallet-pay")
        assert _order(order_id).status == "pending_payment"

    def test_cart_is_drained_but_kept(self, customer_id, make_product, add_to_cart, checkout):
        add_to_cart(customer_id, make_product(), 1)
        cart_id = str(_cart(customer_id).id)

        checkout(customer_id)

        cart = _cart(customer_id)
        assert str(cart.id) == cart_id
        assert len(cart.items) == 0

    def test_two_sizes_of_one_product_share_stock(self, customer_id, make_product, add_to_cart, checkout):
        product = make_product(stock=10, sizes=["S", "M"])
        add_to_cart(customer_id, product, 2, size="S")
        add_to_cart(customer_id, product, 3, size="M")

        order_id = checkout(customer_id)

        assert len(_order(order_id).items) == 2
        assert _product(product.id).stock == 5

    def test_preorder_stock_untouched(self, customer_id, make_product, add_to_cart, checkout):
        product = make_product(stock=None, is_preorder=True)
        add_to_cart(customer_id, product, 3)
        checkout(customer_id)
        assert _product(product.id).stock is None

    def test_stock_may_go_negative(self, customer_id, make_product, add_to_cart, checkout):
        product = make_product(stock=1)
        add_to_cart(customer_id, product, 3)
        checkout(customer_id)
        assert _product(product.id).stock == -2

    def test_price_is_locked_at_checkout(self, customer_id, make_product, add_to_cart, checkout):
        product = make_product(price=1000)
        add_to_cart(customer_id, product, 1)
        order_id = checkout(customer_id)

        product = _product(product.id)
        product.change_price(1500)
        current_domain.repository_for(Product).add(product)

        order = _order(order_id)
        assert order.items[0].price == 1000.0
        assert order.total_amount == 1000.0

    def test_lines_for_deleted_products_are_skipped(self, customer_id, make_product, add_to_cart, checkout):
        kept = make_product(price=1000)
        gone = make_product(price=700)
        add_to_cart(customer_id, kept, 1)
        add_to_cart(customer_id, gone, 1)
        repo = current_domain.repository_for(Product)
        repo._dao.delete(repo.get(str(gone.id)))

        order_id = checkout(customer_id)

        order = _order(order_id)
        assert [str(i.product_id) for i in order.items] == [str(kept.id)]
        assert order.total_amount == 1000.0

    def test_delivery_fields_are_stripped(self, customer_id, make_product, add_to_cart, checkout):
        add_to_cart(customer_id, make_product(), 1)
        order_id = checkout(customer_id, full_name="  Aye Aye  ", phone=" 0912 ")
        address = _order(order_id).delivery_address
        assert address.full_name == "Aye Aye"
        assert address.phone == "0912"


class TestRejectedCheckout:
    def test_without_cart(self, customer_id, checkout):
        with pytest.raises(EmptyCart):
            checkout(customer_id)

    def test_with_drained_cart(self, customer_id, make_product, add_to_cart, checkout):
        add_to_cart(customer_id, make_product(), 1)
        checkout(customer_id)
        with pytest.raises(EmptyCart):
            checkout(customer_id)

    def test_zero_total(self, customer_id, make_product, add_to_cart, checkout):
        add_to_cart(customer_id, make_product(price=0), 1)
        with pytest.raises(EmptyCart):
            checkout(customer_id)

    def test_anonymous_caller(self, checkout):
        with pytest.raises(AuthRequired):
            checkout(None)

    @pytest.mark.parametrize("field", ["full_name", "phone", "address"])
    def test_blank_delivery_field(self, customer_id, make_product, add_to_cart, checkout, field):
        product = make_product(stock=10)
        add_to_cart(customer_id, product, 2)

        with pytest.raises(ValidationError) as exc:
            checkout(customer_id, **{field: "   "})

        assert field in exc.value.messages
        assert len(_cart(customer_id).items) == 1
        assert _product(product.id).stock == 10
        assert current_domain.repository_for(Order)._dao.query.all().total == 0

    def test_unknown_payment_method(self, customer_id, make_product, add_to_cart, checkout):
        add_to_cart(customer_id, make_product(), 1)
        with pytest.raises(ValidationError) as exc:
            checkout(customer_id, "credit-card")
        assert "payment_method" in exc.value.messages


class TestCheckoutAtomicity:
    def test_failure_midway_changes_nothing(self, customer_id, make_product, add_to_cart, checkout, monkeypatch):
        first = make_product(name="Shirt", stock=10)
        second = make_product(name="Scarf", stock=10)
        add_to_cart(customer_id, first, 1)
        add_to_cart(customer_id, second, 1)

        original = Product.decrement_stock
        calls = []

        def failing_decrement(self, quantity):
            calls.append(str(self.id))
            if len(calls) == 2:
                raise RuntimeError("stock service unavailable")
            return original(self, quantity)

        monkeypatch.setattr(Product, "decrement_stock", failing_decrement)

        with pytest.raises(RuntimeError):
            checkout(customer_id)

        assert current_domain.repository_for(Order)._dao.query.all().total == 0
        assert len(_cart(customer_id).items) == 2
        assert _product(first.id).stock == 10
        assert _product(second.id).stock == 10

    def test_failure_after_writes_are_registered_rolls_them_back(
        self, customer_id, make_product, add_to_cart, checkout, monkeypatch
    ):
        product = make_product(stock=10)
        add_to_cart(customer_id, product, 1)

        def failing_add(self, item):
            raise RuntimeError("cart store unavailable")

        # Products and the order are added before the cart
        monkeypatch.setattr(CartRepository, "add", failing_add)

        with pytest.raises(RuntimeError):
            checkout(customer_id)

        assert current_domain.repository_for(Order)._dao.query.all().total == 0
        assert _product(product.id).stock == 10
        assert len(_cart(customer_id).items) == 1


class TestConcurrentCheckout:
    def test_stale_cart_checkout_raises_conflict(self, customer_id, make_product, add_to_cart, checkout, monkeypatch):
        product = make_product(stock=10)
        add_to_cart(customer_id, product, 2)
        stale_cart = _cart(customer_id)

        first_order = checkout(customer_id)

        # A second request that read the cart before the first one committed
        monkeypatch.setattr("ordering.checkout.checkout.cart_for", lambda _customer_id: stale_cart)
        with pytest.raises(Conflict):
            checkout(customer_id)

        orders = current_domain.repository_for(Order)._dao.query.all().items
        assert [str(o.id) for o in orders] == [first_order]
        assert _product(product.id).stock == 8
        assert len(_cart(customer_id).items) == 0
