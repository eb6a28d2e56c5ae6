"""A price edit and a review landing on the same product at the same time."""

import pytest

from storefront.application.add_review import AddReviewHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_product_repository import JsonProductRepository
from storefront.infrastructure.persistence.json_review_repository import JsonReviewRepository
from tests.fakes import ADMIN, CUSTOMER


class _InterleavingRepository(ProductRepository):
    """Runs *between* on the first read or write, before touching the store."""

    def __init__(self, inner: ProductRepository, between) -> None:
        self._inner = inner
        self._between = between

    def _run_between(self):
        if self._between is not None:
            between, self._between = self._between, None
            between()

    def get_by_id(self, product_id):
        product = self._inner.get_by_id(product_id)
        self._run_between()
        return product

    def get_by_name(self, name):
        return self._inner.get_by_name(name)

    def list_all(self, category=None):
        return self._inner.list_all(category)

    def save(self, product):
        self._inner.save(product)

    def modify(self, product_id, change):
        self._run_between()
        return self._inner.modify(product_id, change)


@pytest.fixture
def products(tmp_path):
    repo = JsonProductRepository(tmp_path / "products.json")
    repo.save(Product(id="1", name="Jeedi Pappu", price=Money(100)))
    return repo


@pytest.fixture
def reviews(tmp_path):
    return JsonReviewRepository(tmp_path / "reviews.json")


def test_price_edit_keeps_review_that_landed_meanwhile(products, reviews):
    racing = _InterleavingRepository(
        products, lambda: AddReviewHandler(reviews, products).handle(CUSTOMER, "1", 4)
    )

    UpdateProductHandler(racing).handle(ADMIN, "1", new_price="120")

    saved = products.get_by_id("1")
    assert saved.price == Money(120)
    assert saved.rating == 4.0
    assert saved.review_count == 1


def test_review_keeps_price_edit_that_landed_meanwhile(products, reviews):
    racing = _InterleavingRepository(
        products, lambda: UpdateProductHandler(products).handle(ADMIN, "1", new_price="120")
    )

    AddReviewHandler(reviews, racing).handle(CUSTOMER, "1", 5)

    saved = products.get_by_id("1")
    assert saved.price == Money(120)
    assert saved.rating == 5.0
    assert saved.review_count == 1


def test_modify_unknown_product_writes_nothing(products):
    assert products.modify("9", lambda p: p.update_price(Money(1))) is None
    assert [p.id for p in products.list_all()] == ["1"]
