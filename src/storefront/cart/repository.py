from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_by_user(self, user_id: str) -> Cart | None:
        return self._dao.query.filter(user_id=user_id).all().first
