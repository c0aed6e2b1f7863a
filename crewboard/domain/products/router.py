"""Product router - FastAPI endpoints for the product catalogue"""

from fastapi import APIRouter, Depends

from ...dependencies import get_event_bus, get_store
from ...events import EventBus
from ...schemas import Product
from ..store.base import StoreAdapter
from .schemas import ProductUpdate
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_service(
    store: StoreAdapter = Depends(get_store), bus: EventBus = Depends(get_event_bus)
) -> ProductService:
    """Dependency injection for ProductService"""
    return ProductService(store, bus)


@router.get("", response_model=list[Product])
async def get_products(service: ProductService = Depends(get_product_service)):
    return await service.get_products()


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    return await service.get_product(product_id)


@router.post("", response_model=Product)
async def create_product(data: Product, service: ProductService = Depends(get_product_service)):
    return await service.create_product(data)


@router.patch("/{product_id}", response_model=Product)
async def update_product(
    product_id: str, data: ProductUpdate, service: ProductService = Depends(get_product_service)
):
    return await service.update_product(product_id, data)


@router.delete("/{product_id}")
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)):
    return await service.delete_product(product_id)
