# app/services/catalog_service.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from app.data.models.product import ProductModel
from app.domain.errors import InvalidArgument, NotFound
from app.domain.identity import Identity
from app.domain.schemas import ProductCreate, ProductUpdate
from app.repos.entitlement_repo import EntitlementRepo
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """
    Katalog produktow:
    query - lista z rekomendacjami, szczegoly, wyszukiwanie
    commands (tylko admin) - create, update, delete
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)
        self.entitlements = EntitlementRepo(db)

    #query - odczyt
    def list_products(self, identity: Identity | None = None) -> List[ProductModel]:
        products = self.repo.list_products()
        if identity is None:
            return products

        recommended_ids = self._recommended_ids(identity.user_id)
        if not recommended_ids:
            return products

        # rekomendowane na poczatek, kolejnosc w obu grupach bez zmian
        recommended = [p for p in products if p.id in recommended_ids]
        rest = [p for p in products if p.id not in recommended_ids]
        return recommended + rest

    def _recommended_ids(self, user_id: int) -> set[int]:
        entitlements = self.entitlements.list_for_user(user_id)
        if not entitlements:
            return set()

        entitled = self.repo.get_many(e.product_id for e in entitlements)
        tags: set[str] = set()
        for product in entitled.values():
            tags.update(product.tags or [])

        if not tags:
            return set()

        return {p.id for p in self.repo.with_any_tag(tags)}

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFound("Product not found.")
        return product

    def search(self, query) -> List[ProductModel]:
        if not query or not isinstance(query, str) or not query.strip():
            raise InvalidArgument("Query parameter is required and must be a string.")

        products = self.repo.text_search(query)
        if products:
            return products

        # brak trafien pelnotekstowych -> fragment nazwy, bez rozroznienia wielkosci liter
        logger.info(f"No full-text hits for {query!r}, falling back to name match")
        return self.repo.name_contains(query)

    #commands
    def create_product(self, payload: ProductCreate) -> ProductModel:
        product = ProductModel(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            category=payload.category,
            rating=0,
            tags=list(payload.tags),
            image_url=str(payload.image_url),
            sizes=[s.value for s in payload.sizes],
            creation_date=datetime.now(timezone.utc),
        )
        created = self.repo.create_product(product)
        logger.info(f"Product {created.id} ({created.name}) created")
        return created

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)

        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "image_url" in changes:
            changes["image_url"] = str(payload.image_url)
        if "sizes" in changes:
            changes["sizes"] = [s.value for s in payload.sizes]

        for field, value in changes.items():
            setattr(product, field, value)

        updated = self.repo.save(product)
        logger.info(f"Product {product_id} updated: {sorted(changes)}")
        return updated

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        self.repo.delete_product(product)
        logger.info(f"Product {product_id} deleted")
