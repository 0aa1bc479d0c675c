# app/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_identity, get_optional_identity
from app.data.database import get_db
from app.domain.identity import Identity
from app.domain.schemas import (
    ProductListOut,
    ProductOut,
    ReviewIn,
    ReviewListOut,
    ReviewOut,
)
from app.services.catalog_service import CatalogService
from app.services.review_service import ReviewService

router = APIRouter(tags=["products"])


def get_service(db: Session = Depends(get_db)):
    return CatalogService(db)


def get_review_service(db: Session = Depends(get_db)):
    return ReviewService(db)


@router.get("/products", response_model=ProductListOut)
def list_products(
    identity: Optional[Identity] = Depends(get_optional_identity),
    svc: CatalogService = Depends(get_service),
):
    """Lista produktow, dla zalogowanego rekomendowane (wspolne tagi) na poczatku."""
    products = svc.list_products(identity)
    return ProductListOut(products=[ProductOut.model_validate(p) for p in products])


@router.get("/product/search", response_model=List[ProductOut])
def search_products(query: Optional[str] = None, svc: CatalogService = Depends(get_service)):
    return [ProductOut.model_validate(p) for p in svc.search(query)]


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, svc: CatalogService = Depends(get_service)):
    return ProductOut.model_validate(svc.get_product(product_id))


@router.post("/products/{product_id}/review", response_model=ReviewOut, status_code=201)
def add_review(
    product_id: int,
    payload: ReviewIn,
    identity: Identity = Depends(get_identity),
    svc: ReviewService = Depends(get_review_service),
):
    return ReviewOut.model_validate(svc.add_review(identity, product_id, payload))


@router.get("/products/{product_id}/reviews", response_model=ReviewListOut)
def list_reviews(product_id: int, svc: ReviewService = Depends(get_review_service)):
    return svc.list_reviews(product_id)
