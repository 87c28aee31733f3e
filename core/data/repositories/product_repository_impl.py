"""SQLAlchemy implementation of ProductRepository."""

from typing import Dict, Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.product import Product
from core.domain.repositories.product_repository import ProductRepository

from ..mappers import ProductMapper
from ..models.product_model import ProductModel


class SqlAlchemyProductRepository(ProductRepository):
    """Products, hiding soft-deleted rows."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, product: Product) -> None:
        self._session.add(ProductMapper.to_persistence(product))
        await self._session.flush()

    async def find_by_id(self, product_id: str) -> Optional[Product]:
        result = await self._session.execute(
            select(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return ProductMapper.to_domain(model) if model else None

    async def find_many(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        ids = set(product_ids)
        if not ids:
            return {}
        result = await self._session.execute(
            select(ProductModel)
            .where(ProductModel.id.in_(ids), ProductModel.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )
        return {model.id: ProductMapper.to_domain(model) for model in result.scalars().all()}

    async def read_stock(self, product_id: str) -> Optional[int]:
        result = await self._session.execute(
            select(ProductModel.stock)
            .where(ProductModel.id == product_id, ProductModel.deleted_at.is_(None))
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def compare_and_set_stock(self, product_id: str, expected: int, new_stock: int) -> bool:
        result = await self._session.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock == expected)
            .values(stock=new_stock)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
