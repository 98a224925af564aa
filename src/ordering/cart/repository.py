"""Repository for the Cart aggregate."""

from ordering.cart.cart import Cart
from ordering.domain import ordering


@ordering.repository(part_of=Cart)
class CartRepository:
    def for_customer(self, customer_id) -> Cart | None:
        """The customer's cart, or None if they never had one."""
        if not customer_id:
            return None
        return self._dao.query.filter(customer_id=str(customer_id)).all().first
