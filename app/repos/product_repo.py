# app/repos/product_repo.py
import re
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.product import ProductModel

_WORD = re.compile(r"\w+", re.UNICODE)

# wagi pol w wyszukiwaniu pelnotekstowym
_WEIGHTS = (("name", 3.0), ("tags", 2.0), ("description", 1.0))


def _terms(text: str) -> List[str]:
    terms = []
    for word in _WORD.findall(text.lower()):
        # proste sprowadzenie liczby mnogiej: shirts -> shirt
        if len(word) > 3 and word.endswith("s") and not word.endswith("ss"):
            word = word[:-1]
        terms.append(word)
    return terms


def escape_like(value: str, escape: str = "\\") -> str:
    return (
        value.replace(escape, escape * 2)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def relevance(product: ProductModel, query_terms: Iterable[str]) -> float:
    fields = {
        "name": _terms(product.name or ""),
        "tags": _terms(" ".join(product.tags or [])),
        "description": _terms(product.description or ""),
    }
    score = 0.0
    for term in set(query_terms):
        for field, weight in _WEIGHTS:
            score += weight * fields[field].count(term)
    return score


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> List[ProductModel]:
        return list(
            self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars()
        )

    def get_many(self, product_ids: Iterable[int]) -> dict[int, ProductModel]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(ids))
        ).scalars()
        return {p.id: p for p in rows}

    def with_any_tag(self, tags: set[str]) -> List[ProductModel]:
        # tagi sa w kolumnie JSON, filtr po stronie aplikacji
        return [p for p in self.list_products() if tags.intersection(p.tags or [])]

    def text_search(self, query: str) -> List[ProductModel]:
        """
        Wyszukiwanie pelnotekstowe po name/description/tags.
        Zwraca tylko trafienia, posortowane malejaco po wyniku (stabilnie).
        """
        query_terms = _terms(query)
        if not query_terms:
            return []

        scored = []
        for product in self.list_products():
            score = relevance(product, query_terms)
            if score > 0:
                scored.append((score, product))

        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [product for _, product in scored]

    def name_contains(self, fragment: str) -> List[ProductModel]:
        pattern = f"%{escape_like(fragment)}%"
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.name.ilike(pattern, escape="\\"))
                .order_by(ProductModel.id)
            ).scalars()
        )

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()
