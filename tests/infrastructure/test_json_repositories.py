"""Tests for the JSON-file repositories against a temporary directory."""

import json

from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.model.payment_settings import PaymentSettings
from storefront.domain.model.product import Product
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import JsonProductRepository
from storefront.infrastructure.persistence.json_review_repository import JsonReviewRepository
from storefront.infrastructure.persistence.json_settings_repository import JsonSettingsRepository
from tests.fakes import make_order


class TestJsonOrderRepository:

    def test_round_trip_preserves_snapshot(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = make_order([("1", 2, 250), ("2", 1, 100)])
        repo.save(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)
        assert loaded.id == 1
        assert loaded.total_price == Money(600)
        assert [i.product_id for i in loaded.items] == ["1", "2"]
        assert loaded.shipping == order.shipping
        assert loaded.created_at == order.created_at

    def test_save_if_applies_when_expectation_holds(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(make_order())

        order = repo.get_by_id(1)
        order.verify_payment()
        assert repo.save_if(order, payment_status=PaymentStatus.PENDING)
        assert repo.get_by_id(1).status == OrderStatus.CONFIRMED

    def test_save_if_refuses_stale_write(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(make_order())

        first = repo.get_by_id(1)
        second = repo.get_by_id(1)
        first.verify_payment()
        second.reject_payment()

        assert repo.save_if(first, payment_status=PaymentStatus.PENDING)
        assert not repo.save_if(second, payment_status=PaymentStatus.PENDING)
        assert repo.get_by_id(1).payment_status == PaymentStatus.VERIFIED

    def test_save_if_missing_order(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = make_order()
        order.id = 5
        assert not repo.save_if(order, status=OrderStatus.PENDING)

    def test_file_is_plain_json(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        repo.save(make_order())
        raw = json.loads((tmp_path / "orders.json").read_text(encoding="utf-8"))
        assert raw[0]["status"] == "pending"
        assert raw[0]["total_price"] == 250


class TestJsonProductRepository:

    def test_filter_by_category(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(id="1", name="Pickle", price=Money(250), category="pickles"))
        repo.save(Product(id="2", name="Cashews", price=Money(900), mrp=Money(1000)))

        assert [p.id for p in repo.list_all("Pickles")] == ["1"]
        assert repo.get_by_id("2").mrp == Money(1000)
        assert repo.get_by_name("CASHEWS").id == "2"
        assert len(repo.raw_snapshot()) == 2


def test_review_ids_are_sequential(tmp_path):
    repo = JsonReviewRepository(tmp_path / "reviews.json")
    first = repo.add(Review.create("1", "customer-1", "Lakshmi", 5))
    second = repo.add(Review.create("1", "customer-2", "Ravi", 3, "too salty"))
    assert (first.id, second.id) == (1, 2)
    assert [r.rating for r in repo.list_for_product("1")] == [5, 3]


def test_settings_default_then_saved(tmp_path):
    repo = JsonSettingsRepository(tmp_path / "site_settings.json")
    assert repo.get_payment_settings() == PaymentSettings()
    repo.save_payment_settings(PaymentSettings(upi_id="shop@okaxis"))
    assert JsonSettingsRepository(tmp_path / "site_settings.json").get_payment_settings().upi_id == "shop@okaxis"
