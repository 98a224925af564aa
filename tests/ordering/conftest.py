import pytest
from protean.integrations.pytest import DomainFixture

ADMIN_ID = "admin-001"
CUSTOMER_ID = "cust-001"


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture()
def admin_id():
    from ordering.access.management import assign_role

    assign_role(ADMIN_ID, "admin")
    return ADMIN_ID


@pytest.fixture()
def customer_id():
    return CUSTOMER_ID


@pytest.fixture()
def make_product():
    """Factory: persist a product and return it."""
    from protean import current_domain

    from ordering.catalogue.product import Product

    def _make(name="Linen Shirt", price=1000, stock=10, **kwargs):
        product = Product.create(name=name, price=price, stock=stock, **kwargs)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def email_channel():
    """The fake email adapter the dispatcher sends through."""
    from ordering.notification.channel import get_channel
    from ordering.notification.notification import NotificationChannel

    return get_channel(NotificationChannel.EMAIL.value)


@pytest.fixture()
def contacts():
    """The fake contact directory notifications resolve customer emails through."""
    from ordering.notification.channel import get_contact_directory

    return get_contact_directory()


@pytest.fixture()
def add_to_cart():
    """Factory: add a product to a customer's cart through the command."""
    from protean import current_domain

    from ordering.cart.items import AddToCart

    def _add(customer_id, product, quantity=1, size=None, color=None):
        return current_domain.process(
            AddToCart(
                customer_id=customer_id,
                product_id=str(product.id),
                quantity=quantity,
                size=size,
                color=color,
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def checkout():
    """Factory: check out a customer's cart with a valid delivery address."""
    from protean import current_domain

    from ordering.checkout.checkout import Checkout

    def _checkout(customer_id, payment_method="cash-on-delivery", **overrides):
        fields = {
            "customer_id": customer_id,
            "payment_method": payment_method,
            "full_name": "Aye Aye",
            "phone": "09-123456789",
            "address": "12 Bogyoke Road, Yangon",
        }
        fields.update(overrides)
        return current_domain.process(Checkout(**fields), asynchronous=False)

    return _checkout


@pytest.fixture()
def place_order(make_product, add_to_cart, checkout):
    """Factory: put one product in the cart and check out. Returns the order id."""

    def _place(customer_id=CUSTOMER_ID, payment_method="cash-on-delivery", price=1000, quantity=2):
        product = make_product(price=price)
        add_to_cart(customer_id, product, quantity)
        return checkout(customer_id, payment_method)

    return _place
