"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints.

==============================================================================
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.models import Product, User


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check returns status."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["details"] == {"users": 0, "products": 0, "bids": 0}

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True


class TestAuthEndpoints:
    """Tests for authentication endpoints."""

    def test_signup_success(self, client: TestClient):
        """Signup returns the public user and sets no cookie."""
        response = client.post(
            "/api/v1/auth/signup",
            json={"name": "Ann", "email": "ann@example.com", "password": "pw123456"}
        )
        assert response.status_code == 200
        user = response.json()["user"]
        assert user["name"] == "Ann"
        assert user["email"] == "ann@example.com"
        assert "passwordHash" not in user
        assert get_settings().session_cookie_name not in response.cookies

    def test_signup_missing_fields(self, client: TestClient):
        """Blank fields are rejected."""
        response = client.post(
            "/api/v1/auth/signup",
            json={"name": "  ", "email": "ann@example.com", "password": "pw"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Missing fields", "code": "MISSING_FIELDS"}

    def test_signup_duplicate_email(self, client: TestClient, seller: User):
        """An email can only be registered once."""
        response = client.post(
            "/api/v1/auth/signup",
            json={"name": "Other", "email": seller.email, "password": "pw123456"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_EXISTS"

    def test_login_sets_cookie(self, client: TestClient, seller: User, password: str):
        """Login returns the user and a session cookie usable by /me."""
        response = client.post(
            "/api/v1/auth/login",
            json={"email": seller.email, "password": password}
        )
        assert response.status_code == 200
        assert response.json()["user"]["id"] == seller.id

        set_cookie = response.headers["set-cookie"].lower()
        assert get_settings().session_cookie_name in set_cookie
        assert "httponly" in set_cookie
        assert "samesite=lax" in set_cookie

        me = client.get("/api/v1/auth/me")
        assert me.json()["user"]["email"] == seller.email

    def test_login_invalid_password(self, client: TestClient, seller: User):
        """Wrong password and unknown email answer the same."""
        wrong = client.post(
            "/api/v1/auth/login",
            json={"email": seller.email, "password": "nope"}
        )
        unknown = client.post(
            "/api/v1/auth/login",
            json={"email": "ghost@example.com", "password": "nope"}
        )
        assert wrong.status_code == unknown.status_code == 400
        assert wrong.json() == unknown.json() == {
            "error": "Invalid credentials",
            "code": "INVALID_CREDENTIALS",
        }

    def test_login_missing_fields(self, client: TestClient):
        """Login without a password is rejected."""
        response = client.post("/api/v1/auth/login", json={"email": "a@b.c"})
        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"

    def test_me_anonymous(self, client: TestClient):
        """No cookie means no user, not an error."""
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 200
        assert response.json() == {"user": None}

    def test_me_forged_cookie(self, client: TestClient):
        """A garbage cookie is treated as anonymous."""
        client.cookies.set(get_settings().session_cookie_name, "not-a-token")
        response = client.get("/api/v1/auth/me")
        assert response.json() == {"user": None}

    def test_logout_clears_session(self, client: TestClient, seller: User, password: str):
        """Logout succeeds and the client is anonymous afterwards."""
        client.post(
            "/api/v1/auth/login",
            json={"email": seller.email, "password": password}
        )
        response = client.post("/api/v1/auth/logout")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        assert client.get("/api/v1/auth/me").json() == {"user": None}


class TestProductEndpoints:
    """Tests for product endpoints."""

    def test_create_requires_login(self, client: TestClient, db: Session):
        """Anonymous product creation is refused and stores nothing."""
        response = client.post(
            "/api/v1/products",
            json={"title": "Lamp", "description": "Brass", "startingBid": 10}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized", "code": "UNAUTHENTICATED"}
        assert db.query(Product).count() == 0

    def test_create_product(self, login_as, seller: User):
        """Created product is owned by the caller."""
        client = login_as(seller)
        response = client.post(
            "/api/v1/products",
            json={
                "title": "Lamp",
                "description": "Brass",
                "startingBid": 10.5,
                "imageUrl": "  ",
            }
        )
        assert response.status_code == 201
        product = response.json()["product"]
        assert product["ownerId"] == seller.id
        assert product["startingBid"] == 10.5
        assert product["imageUrl"] is None

    def test_create_sub_cent_starting_bid(self, login_as, seller: User):
        """Fractions of a cent are kept."""
        client = login_as(seller)
        response = client.post(
            "/api/v1/products",
            json={"title": "Lamp", "description": "Brass", "startingBid": 1.234}
        )
        assert response.status_code == 201
        assert response.json()["product"]["startingBid"] == 1.234

    @pytest.mark.parametrize("starting_bid", [0, -5, 1e-7, 1e12])
    def test_create_invalid_starting_bid(self, login_as, seller: User, starting_bid):
        """Starting bid must be a positive amount."""
        client = login_as(seller)
        response = client.post(
            "/api/v1/products",
            json={"title": "Lamp", "description": "Brass", "startingBid": starting_bid}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Starting bid must be a positive number"

    def test_create_missing_fields(self, login_as, seller: User):
        """A non-numeric starting bid counts as missing."""
        client = login_as(seller)
        response = client.post(
            "/api/v1/products",
            json={"title": "Lamp", "description": "Brass", "startingBid": "10"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "MISSING_FIELDS"

    def test_list_products(self, client: TestClient, product: Product, seller: User):
        """Listing includes owner and no highest bid yet."""
        response = client.get("/api/v1/products")
        assert response.status_code == 200
        products = response.json()["products"]
        assert len(products) == 1
        assert products[0]["id"] == product.id
        assert products[0]["owner"] == {"id": seller.id, "name": seller.name}
        assert products[0]["highestBid"] is None

    def test_get_product(self, client: TestClient, product: Product):
        """Single product lookup."""
        response = client.get(f"/api/v1/products/{product.id}")
        assert response.status_code == 200
        assert response.json()["product"]["title"] == product.title

    def test_get_unknown_product(self, client: TestClient):
        """Unknown id is a 404."""
        response = client.get("/api/v1/products/999")
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found", "code": "PRODUCT_NOT_FOUND"}

    @pytest.mark.parametrize("raw_id", ["abc", "0", "-1", "1.5", "²", "99999999999999999999"])
    def test_get_invalid_product_id(self, client: TestClient, raw_id):
        """Non-positive or non-numeric ids are a 400."""
        response = client.get(f"/api/v1/products/{raw_id}")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PRODUCT_ID"


class TestBidEndpoints:
    """Tests for bidding endpoints."""

    def _bid(self, client: TestClient, product: Product, amount):
        return client.post(f"/api/v1/products/{product.id}/bids", json={"amount": amount})

    def test_bid_requires_login(self, client: TestClient, product: Product):
        """Anonymous bids are refused."""
        response = self._bid(client, product, 20)
        assert response.status_code == 401

    def test_bid_requires_login_before_id_check(self, client: TestClient):
        """Authentication is checked before the product id."""
        response = client.post("/api/v1/products/abc/bids", json={"amount": 20})
        assert response.status_code == 401

    def test_bidding_sequence(self, login_as, bidder: User, rival: User, product: Product):
        """Each accepted bid must beat the current highest."""
        client = login_as(bidder)

        response = self._bid(client, product, 10)
        assert response.status_code == 400
        assert response.json() == {
            "error": "Bid must be higher than current highest (10)",
            "code": "BID_TOO_LOW",
        }

        response = self._bid(client, product, 10.01)
        assert response.status_code == 201
        bid = response.json()["bid"]
        assert bid["amount"] == 10.01
        assert bid["productId"] == product.id
        assert bid["userId"] == bidder.id

        client = login_as(rival)
        response = self._bid(client, product, 10.01)
        assert response.status_code == 400
        assert response.json()["error"] == "Bid must be higher than current highest (10.01)"

        response = self._bid(client, product, 15)
        assert response.status_code == 201

        bids = client.get(f"/api/v1/products/{product.id}/bids").json()["bids"]
        assert [b["amount"] for b in bids] == [15, 10.01]
        assert bids[0]["user"] == {"id": rival.id, "name": rival.name}

        detail = client.get(f"/api/v1/products/{product.id}").json()["product"]
        assert detail["highestBid"]["amount"] == 15
        assert detail["highestBid"]["user"]["id"] == rival.id

    def test_sub_cent_bids(self, login_as, bidder: User, rival: User, product: Product):
        """Any positive increment wins, including fractions of a cent."""
        client = login_as(bidder)
        response = self._bid(client, product, 10.005)
        assert response.status_code == 201
        assert response.json()["bid"]["amount"] == 10.005

        client = login_as(rival)
        response = self._bid(client, product, 10.005)
        assert response.status_code == 400
        assert response.json()["error"] == "Bid must be higher than current highest (10.005)"

    @pytest.mark.parametrize("amount", [None, "20", True, 0, -3, 1e-9])
    def test_invalid_amount(self, login_as, bidder: User, product: Product, amount):
        """Amounts must be positive numbers."""
        client = login_as(bidder)
        response = self._bid(client, product, amount)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid bid amount", "code": "INVALID_AMOUNT"}

    def test_bid_unknown_product(self, login_as, bidder: User):
        """Bidding on a missing product is a 404."""
        client = login_as(bidder)
        response = client.post("/api/v1/products/999/bids", json={"amount": 20})
        assert response.status_code == 404

    def test_bid_invalid_product_id(self, login_as, bidder: User):
        """Bidding on a malformed id is a 400."""
        client = login_as(bidder)
        response = client.post("/api/v1/products/abc/bids", json={"amount": 20})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PRODUCT_ID"

    def test_list_bids_unknown_product(self, client: TestClient):
        """Unknown products simply have no bids."""
        response = client.get("/api/v1/products/999/bids")
        assert response.status_code == 200
        assert response.json() == {"bids": []}

    @pytest.mark.parametrize("raw_id", ["x", "²", "99999999999999999999"])
    def test_list_bids_invalid_id(self, client: TestClient, raw_id):
        """Malformed or out-of-range id is a 400."""
        response = client.get(f"/api/v1/products/{raw_id}/bids")
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PRODUCT_ID"

    def test_bid_out_of_range_id(self, login_as, bidder: User):
        """Ids beyond 64 bits never reach the database."""
        client = login_as(bidder)
        response = client.post("/api/v1/products/99999999999999999999/bids", json={"amount": 20})
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_PRODUCT_ID"

    def test_malformed_body_rejected_before_login(self, client: TestClient, product: Product):
        """An unparseable body is refused before the session is checked."""
        response = client.post(
            f"/api/v1/products/{product.id}/bids",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_INPUT"
