"""Static mappers for domain entities ↔ database models."""

from typing import List

from core.domain.entities import CartItem, LineItem, Order, Product, StatusHistory, User
from core.domain.value_objects import Money, StatusEntry, StatusType, UserRole

from .models import (
    CartModel,
    OrderItemModel,
    OrderModel,
    OrderStatusModel,
    ProductModel,
    UserModel,
)


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested children."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate.

        Args:
            model: OrderModel with ``items`` and ``statuses`` loaded

        Returns:
            Order domain aggregate
        """
        line_items = tuple(
            LineItem(product_id=item.product_id, quantity=item.quantity)
            for item in model.items
        )
        history = StatusHistory(
            StatusEntry(type=StatusType(status.type), date=status.date)
            for status in model.statuses
        )
        return Order(
            id=model.id,
            user_id=model.user_id,
            merchant_id=model.merchant_id,
            courier_id=model.courier_id,
            price=Money(amount=model.price),
            line_items=line_items,
            status=history,
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )

    @staticmethod
    def to_persistence(order: Order) -> OrderModel:
        """Convert a newly placed Order to ORM models (order, items, history)."""
        model = OrderModel(
            id=order.id,
            user_id=order.user_id,
            merchant_id=order.merchant_id,
            courier_id=order.courier_id,
            price=order.price.amount,
            current_status=order.current_status().value,
            version=order.version,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        model.items = [
            OrderItemModel(position=position, product_id=item.product_id, quantity=item.quantity)
            for position, item in enumerate(order.line_items)
        ]
        model.statuses = OrderMapper.status_models(order.id, list(order.status), start=0)
        return model

    @staticmethod
    def status_models(order_id: str, entries: List[StatusEntry], start: int) -> List[OrderStatusModel]:
        """History rows for ``entries``, numbered from ``start``."""
        return [
            OrderStatusModel(order_id=order_id, position=start + offset, type=entry.type.value, date=entry.date)
            for offset, entry in enumerate(entries)
        ]


class ProductMapper:

    @staticmethod
    def to_domain(model: ProductModel) -> Product:
        return Product(
            id=model.id,
            user_id=model.user_id,
            name=model.name,
            description=model.description or "",
            price=Money(amount=model.price),
            stock=model.stock,
            created_at=model.created_at,
            updated_at=model.updated_at,
            deleted_at=model.deleted_at,
        )

    @staticmethod
    def to_persistence(product: Product) -> ProductModel:
        return ProductModel(
            id=product.id,
            user_id=product.user_id,
            name=product.name,
            description=product.description,
            price=product.price.amount,
            stock=product.stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
            deleted_at=product.deleted_at,
        )


class UserMapper:

    @staticmethod
    def to_domain(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
            balance=Money(amount=model.balance),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(user: User) -> UserModel:
        return UserModel(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role.value,
            balance=user.balance.amount,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class CartMapper:

    @staticmethod
    def to_domain(model: CartModel) -> CartItem:
        return CartItem(
            id=model.id,
            user_id=model.user_id,
            product_id=model.product_id,
            merchant_id=model.merchant_id,
            quantity=model.quantity,
        )

    @staticmethod
    def to_persistence(item: CartItem) -> CartModel:
        return CartModel(
            id=item.id,
            user_id=item.user_id,
            product_id=item.product_id,
            merchant_id=item.merchant_id,
            quantity=item.quantity,
        )
