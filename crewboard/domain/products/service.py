"""Product service - Business logic for the product catalogue"""

import logging

from ...events import EventBus, ScheduleEvent
from ...exceptions import NotFoundError
from ...schemas import Product
from ..store.base import StoreAdapter
from .schemas import ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    def __init__(self, store: StoreAdapter, bus: EventBus):
        self.store = store
        self.bus = bus

    async def get_products(self) -> list[Product]:
        return await self.store.list_products()

    async def get_product(self, product_id: str) -> Product:
        for product in await self.store.list_products():
            if product.id == product_id:
                return product
        raise NotFoundError("Product", product_id)

    async def create_product(self, data: Product) -> Product:
        product = await self.store.create_product(data)
        logger.info(f"📥 Created product {product.id} ({product.name})")
        await self.bus.publish(ScheduleEvent.PRODUCTS_UPDATED)
        return product

    async def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        existing = await self.get_product(product_id)
        product = Product(**{**existing.model_dump(), **data.model_dump(exclude_none=True), "id": product_id})
        saved = await self.store.update_product(product)
        await self.bus.publish(ScheduleEvent.PRODUCTS_UPDATED)
        return saved

    async def delete_product(self, product_id: str) -> dict:
        """Delete a catalogue product; booking lines that reference it are left as they are"""
        await self.store.delete_product(product_id)
        await self.bus.publish(ScheduleEvent.PRODUCTS_UPDATED)
        return {"message": "Product deleted successfully"}
