"""
==============================================================================
Service Layer Tests
==============================================================================

Tests for user, product and bidding services against the test database.

==============================================================================
"""

import threading
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.exceptions import AppException
from app.db.database import Base, configure_sqlite_engine
from app.db.models import Bid, Product, User
from app.services import AuthService, BiddingService, ProductService, UserService


class TestUserService:
    """Tests for account creation and credential checks."""

    def test_password_is_hashed(self, db: Session):
        user = UserService(db).create_user("Ann", "ann@example.com", "pw123456")
        assert user.password_hash != "pw123456"
        assert user.password_hash.startswith("$2")

    def test_duplicate_email(self, db: Session, seller: User):
        with pytest.raises(AppException) as exc_info:
            UserService(db).create_user("Dup", seller.email, "pw123456")
        assert exc_info.value.code == "EMAIL_EXISTS"

    def test_verify_credentials(self, db: Session, seller: User, password: str):
        users = UserService(db)
        assert users.verify_credentials(seller.email, password).id == seller.id
        assert users.verify_credentials(seller.email, "wrong") is None
        assert users.verify_credentials("ghost@example.com", password) is None


class TestAuthService:
    """Tests for registration and login rules."""

    @pytest.mark.parametrize("name,email,password", [
        (None, "a@b.c", "pw"),
        ("Ann", "", "pw"),
        ("Ann", "a@b.c", None),
    ])
    def test_register_missing_fields(self, db: Session, name, email, password):
        with pytest.raises(AppException) as exc_info:
            AuthService(db).register(name, email, password)
        assert exc_info.value.code == "MISSING_FIELDS"

    def test_resolve_user_without_identity(self, db: Session):
        assert AuthService(db).resolve_user(None) is None


class TestProductService:
    """Tests for product creation and listing."""

    def test_requires_owner(self, db: Session):
        with pytest.raises(AppException) as exc_info:
            ProductService(db).create_product(None, "Lamp", "Brass", 10)
        assert exc_info.value.status_code == 401

    def test_blank_title_is_missing(self, db: Session, seller: User):
        with pytest.raises(AppException) as exc_info:
            ProductService(db).create_product(seller.id, "   ", "Brass", 10)
        assert exc_info.value.code == "MISSING_FIELDS"

    def test_starting_bid_stored_as_decimal(self, db: Session, seller: User):
        product = ProductService(db).create_product(seller.id, " Lamp ", "Brass", 7.5)
        assert product.title == "Lamp"
        assert product.starting_bid == Decimal("7.50")

    def test_list_newest_first(self, db: Session, seller: User):
        service = ProductService(db)
        first = service.create_product(seller.id, "First", "One", 1)
        second = service.create_product(seller.id, "Second", "Two", 2)
        assert [p.id for p in service.list_products()] == [second.id, first.id]

    def test_highest_bid_tie_keeps_earliest(
        self, db: Session, product: Product, bidder: User, rival: User
    ):
        # Bypass the service to create a tie that placement would reject
        db.add_all([
            Bid(amount=Decimal("20.00"), product_id=product.id, user_id=bidder.id),
            Bid(amount=Decimal("20.00"), product_id=product.id, user_id=rival.id),
        ])
        db.commit()

        summary = ProductService(db).get_product(product.id)
        assert summary.highest_bid.user.id == bidder.id

    def test_get_missing_product(self, db: Session):
        assert ProductService(db).get_product(12345) is None


class TestBiddingService:
    """Tests for the strictly increasing bid rule."""

    def test_first_bid_must_beat_starting_bid(
        self, db: Session, product: Product, bidder: User
    ):
        service = BiddingService(db)
        with pytest.raises(AppException) as exc_info:
            service.place_bid(product.id, bidder.id, 10)
        assert exc_info.value.code == "BID_TOO_LOW"
        assert exc_info.value.message == "Bid must be higher than current highest (10)"

    def test_accepted_bids_strictly_increase(
        self, db: Session, product: Product, bidder: User, rival: User
    ):
        service = BiddingService(db)
        attempts = [
            (bidder, 11), (rival, 11), (rival, 12.5), (bidder, 12),
            (bidder, 12.51), (rival, 100), (bidder, 99.99),
        ]

        for user, amount in attempts:
            try:
                service.place_bid(product.id, user.id, amount)
            except AppException as e:
                assert e.code == "BID_TOO_LOW"

        accepted = [b.amount for b in service.list_bids(product.id)]
        assert accepted == [Decimal("100.00"), Decimal("12.51"), Decimal("12.50"), Decimal("11.00")]
        assert service.current_highest(product) == Decimal("100.00")

    def test_missing_user(self, db: Session, product: Product):
        with pytest.raises(AppException) as exc_info:
            BiddingService(db).place_bid(product.id, None, 20)
        assert exc_info.value.status_code == 401

    def test_unknown_product(self, db: Session, bidder: User):
        with pytest.raises(AppException) as exc_info:
            BiddingService(db).place_bid(999, bidder.id, 20)
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"

    def test_rejected_bid_is_not_stored(
        self, db: Session, product: Product, bidder: User
    ):
        service = BiddingService(db)
        with pytest.raises(AppException):
            service.place_bid(product.id, bidder.id, 5)
        assert db.query(Bid).count() == 0


class TestConcurrentBidding:
    """Two bidders racing on the same product over a file-backed database."""

    @pytest.fixture
    def file_engine(self, tmp_path):
        engine = configure_sqlite_engine(create_engine(
            f"sqlite:///{tmp_path / 'race.db'}",
            connect_args={"check_same_thread": False},
        ))
        Base.metadata.create_all(bind=engine)
        yield engine
        engine.dispose()

    def test_only_one_of_two_equal_bids_is_stored(self, file_engine):
        factory = sessionmaker(bind=file_engine, expire_on_commit=False)

        with factory() as setup:
            first = User(name="First", email="first@example.com", password_hash="x")
            second = User(name="Second", email="second@example.com", password_hash="x")
            setup.add_all([first, second])
            setup.flush()
            item = Product(
                title="Clock",
                description="Wall clock",
                starting_bid=Decimal("10"),
                owner_id=first.id,
            )
            setup.add(item)
            setup.commit()
            user_ids = [first.id, second.id]
            product_id = item.id

        # Both bidders have read the same highest bid before either inserts
        barrier = threading.Barrier(2, timeout=10)

        class SynchronizedBiddingService(BiddingService):
            def current_highest(self, product):
                highest = super().current_highest(product)
                barrier.wait()
                return highest

        outcomes = []

        def bid(user_id):
            with factory() as session:
                try:
                    SynchronizedBiddingService(session).place_bid(product_id, user_id, 20)
                    outcomes.append("ok")
                except AppException as e:
                    outcomes.append(e.code)

        threads = [threading.Thread(target=bid, args=(uid,)) for uid in user_ids]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert sorted(outcomes) == ["BID_CONFLICT", "ok"]

        with factory() as check:
            assert check.query(Bid).filter(Bid.product_id == product_id).count() == 1
