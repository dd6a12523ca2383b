from datetime import UTC, datetime

from storefront.domain import storefront
from storefront.order.order import Order

_EPOCH = datetime.min.replace(tzinfo=UTC)


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_user(self, user_id: str) -> list[Order]:
        """The user's orders, newest first."""
        orders = self._dao.query.filter(user_id=user_id).limit(None).all().items
        return sorted(orders, key=lambda o: o.created_at or _EPOCH, reverse=True)
