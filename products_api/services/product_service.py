import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from products_api.models.product import Product
from products_api.validation import as_text, is_boolean, to_bool

logger = logging.getLogger(__name__)


class ProductService:
    """Service for product CRUD operations.

    Every method performs a single persistence operation (plus the lookup it
    needs) and commits it.
    """

    @staticmethod
    async def list_products(session: AsyncSession) -> List[Product]:
        """All products, most expensive first."""
        result = await session.execute(
            select(Product).order_by(Product.price.desc(), Product.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_product(session: AsyncSession, product_id: int) -> Optional[Product]:
        return await session.get(Product, product_id)

    @staticmethod
    async def create_product(session: AsyncSession, data: Dict[str, Any]) -> Product:
        """Create a product from a validated body. Availability defaults to true."""
        product = Product(
            name=as_text(data["name"]),
            price=float(as_text(data["price"])),
        )
        if "availability" in data and is_boolean(data["availability"]):
            product.availability = to_bool(data["availability"])
        session.add(product)
        await session.commit()
        await session.refresh(product)
        return product

    @staticmethod
    async def update_product(
        session: AsyncSession,
        product_id: int,
        data: Dict[str, Any]
    ) -> Optional[Product]:
        """Replace every field of a product. Returns None if it does not exist."""
        product = await ProductService.get_product(session, product_id)
        if not product:
            return None

        product.name = as_text(data["name"])
        product.price = float(as_text(data["price"]))
        product.availability = to_bool(data["availability"])

        await session.commit()
        await session.refresh(product)
        return product

    @staticmethod
    async def toggle_availability(
        session: AsyncSession,
        product_id: int
    ) -> Optional[Product]:
        product = await ProductService.get_product(session, product_id)
        if not product:
            return None

        product.availability = not product.availability
        await session.commit()
        await session.refresh(product)
        logger.info("Product %s availability is now %s", product.id, product.availability)
        return product

    @staticmethod
    async def delete_product(session: AsyncSession, product_id: int) -> bool:
        product = await ProductService.get_product(session, product_id)
        if not product:
            return False

        await session.delete(product)
        await session.commit()
        return True
