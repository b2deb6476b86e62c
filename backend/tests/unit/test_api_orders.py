"""Tests for the catalog and order endpoints, plus app-level behavior.

GET  /v1/books   - catalog (bearer token required)
GET  /v1/orders  - caller's orders with items
POST /v1/orders  - create an order for the caller
"""

from httpx import AsyncClient

from bookstore.models import Book
from tests.conftest import TEST_PASSWORD

_BOOKS_URL = "/v1/books"
_ORDERS_URL = "/v1/orders"


async def _headers_for(client: AsyncClient, email: str) -> dict[str, str]:
    await client.post("/v1/users", json={"email": email, "password": TEST_PASSWORD})
    response = await client.post("/v1/login", auth=(email, TEST_PASSWORD))
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


class TestBooksEndpoint:
    """Tests for GET /v1/books."""

    async def test_requires_token(self, client: AsyncClient):
        response = await client.get(_BOOKS_URL)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_garbage_token_rejected(self, client: AsyncClient):
        response = await client.get(
            _BOOKS_URL, headers={"Authorization": "Bearer not-a-token"}
        )

        assert response.status_code == 401

    async def test_lists_catalog(
        self, client: AsyncClient, auth_headers: dict[str, str], books: list[Book]
    ):
        response = await client.get(_BOOKS_URL, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert [b["title"] for b in data] == [b.title for b in books]
        assert set(data[0]) == {"id", "title", "author"}


class TestCreateOrderEndpoint:
    """Tests for POST /v1/orders."""

    async def test_creates_order(
        self, client: AsyncClient, auth_headers: dict[str, str], books: list[Book]
    ):
        response = await client.post(
            _ORDERS_URL,
            headers=auth_headers,
            json={"items": [{"book_id": books[0].id, "quantity": 2}]},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["user"] == "budi@example.com"
        assert data["status"] == "pending"
        assert isinstance(data["id"], int)

    async def test_empty_items_returns_400(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.post(
            _ORDERS_URL, headers=auth_headers, json={"items": []}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

        listing = await client.get(_ORDERS_URL, headers=auth_headers)
        assert listing.json() == {"data": []}

    async def test_zero_quantity_returns_400(
        self, client: AsyncClient, auth_headers: dict[str, str], books: list[Book]
    ):
        response = await client.post(
            _ORDERS_URL,
            headers=auth_headers,
            json={"items": [{"book_id": books[0].id, "quantity": 0}]},
        )

        assert response.status_code == 400

    async def test_unknown_book_returns_500_and_persists_nothing(
        self, client: AsyncClient, auth_headers: dict[str, str], books: list[Book]
    ):
        response = await client.post(
            _ORDERS_URL,
            headers=auth_headers,
            json={
                "items": [
                    {"book_id": books[0].id, "quantity": 1},
                    {"book_id": 9999, "quantity": 1},
                ]
            },
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert "9999" not in response.text

        listing = await client.get(_ORDERS_URL, headers=auth_headers)
        assert listing.json() == {"data": []}

    async def test_user_comes_from_token_not_body(
        self, client: AsyncClient, auth_headers: dict[str, str], books: list[Book]
    ):
        """An owner field in the body is rejected, not honored."""
        response = await client.post(
            _ORDERS_URL,
            headers=auth_headers,
            json={
                "user": "siti@example.com",
                "items": [{"book_id": books[0].id, "quantity": 1}],
            },
        )

        assert response.status_code == 400

    async def test_requires_token(self, client: AsyncClient, books: list[Book]):
        response = await client.post(
            _ORDERS_URL, json={"items": [{"book_id": books[0].id, "quantity": 1}]}
        )

        assert response.status_code == 401


class TestListOrdersEndpoint:
    """Tests for GET /v1/orders."""

    async def test_lists_orders_with_items(
        self, client: AsyncClient, auth_headers: dict[str, str], books: list[Book]
    ):
        created = await client.post(
            _ORDERS_URL,
            headers=auth_headers,
            json={
                "items": [
                    {"book_id": books[0].id, "quantity": 1},
                    {"book_id": books[1].id, "quantity": 3},
                ]
            },
        )
        order_id = created.json()["data"]["id"]

        response = await client.get(_ORDERS_URL, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["id"] == order_id
        assert [(i["book_id"], i["quantity"]) for i in data[0]["items"]] == [
            (books[0].id, 1),
            (books[1].id, 3),
        ]
        assert all(i["order_id"] == order_id for i in data[0]["items"])

    async def test_no_orders_is_empty_list(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ):
        response = await client.get(_ORDERS_URL, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"data": []}

    async def test_other_users_orders_hidden(
        self, client: AsyncClient, auth_headers: dict[str, str], books: list[Book]
    ):
        other_headers = await _headers_for(client, "siti@example.com")
        await client.post(
            _ORDERS_URL,
            headers=other_headers,
            json={"items": [{"book_id": books[0].id, "quantity": 1}]},
        )

        response = await client.get(_ORDERS_URL, headers=auth_headers)

        assert response.json() == {"data": []}

    async def test_requires_token(self, client: AsyncClient):
        response = await client.get(_ORDERS_URL)

        assert response.status_code == 401


class TestAppLevel:
    """Health check and response headers."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    async def test_security_headers(self, client: AsyncClient):
        response = await client.get("/v1/health")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"].startswith("no-store")
        assert "Strict-Transport-Security" not in response.headers
