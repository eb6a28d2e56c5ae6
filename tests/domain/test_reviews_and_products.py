"""Unit tests for reviews, rating aggregation and product rules."""

from datetime import date

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.expense import Expense
from storefront.domain.model.payment_settings import PaymentSettings
from storefront.domain.model.product import Product, ProductStatus
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Money
from storefront.domain.service.review_aggregator import summarize, summarize_reviews


class TestSummarize:

    def test_no_ratings(self):
        assert summarize([]) == (None, 0)

    def test_average_of_three(self):
        assert summarize([4, 5, 3]) == (4.0, 3)

    def test_rounds_half_up(self):
        # 17 / 4 = 4.25
        assert summarize([4, 5, 3, 5]) == (4.3, 4)

    def test_from_reviews(self):
        reviews = [Review.create("1", "customer-1", "Lakshmi", r) for r in (5, 4)]
        assert summarize_reviews(reviews) == (4.5, 2)


class TestReview:

    @pytest.mark.parametrize("rating", [0, 6])
    def test_out_of_range_rejected(self, rating):
        with pytest.raises(ValidationError, match="between 1 and 5"):
            Review.create("1", "customer-1", "Lakshmi", rating)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="whole number"):
            Review.create("1", "customer-1", "Lakshmi", 4.5)


class TestProduct:

    def test_draft_is_not_available(self):
        product = Product(id="1", name="Pickle", price=Money(250), status=ProductStatus.DRAFT)
        assert not product.is_available

    def test_apply_rating(self):
        product = Product(id="1", name="Pickle", price=Money(250))
        product.apply_rating(4.3, 4)
        assert (product.rating, product.review_count) == (4.3, 4)

    def test_rating_without_reviews_rejected(self):
        product = Product(id="1", name="Pickle", price=Money(250))
        with pytest.raises(ValidationError, match="exactly when reviews exist"):
            product.apply_rating(4.0, 0)


class TestExpense:

    def test_category_lowercased(self):
        expense = Expense.create(" Packaging ", 120, "boxes", date(2026, 1, 5))
        assert expense.category == "packaging"
        assert not expense.is_income

    def test_zero_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be zero"):
            Expense.create("rent", 0, "", date(2026, 1, 5))


class TestPaymentSettings:

    def test_upi_link(self):
        settings = PaymentSettings(upi_id="shop@okaxis", payee_name="Sikkolu Specials")
        uri = settings.upi_payment_uri(Money(250))
        assert uri == "upi://pay?pa=shop%40okaxis&pn=Sikkolu+Specials&am=250&cu=INR"

    def test_no_link_without_upi_id(self):
        assert PaymentSettings().upi_payment_uri(Money(250)) is None

    def test_invalid_upi_id(self):
        with pytest.raises(ValidationError, match="Invalid UPI id"):
            PaymentSettings(upi_id="shop").validate()
