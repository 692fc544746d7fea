"""Pytest fixtures for storefront tests."""

import json
import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ORDER_EVENTS_ENABLED", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.deps import get_db
from storefront.core.auth import create_access_token
from storefront.db.models import Product, User
from storefront.db.session import Base
from storefront.kafka.producer import get_event_sink
from storefront.main import app
from storefront.services.paypal import PayPalClient, get_paypal


class FakePayPal:
    """Records requests and answers like the PayPal sandbox."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.orders: dict[str, dict] = {}
        self.create_status = 201
        self.create_body = None
        self.capture_status = 201
        self.capture_body = None

    def calls(self, suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/v1/oauth2/token":
            return httpx.Response(200, json={"access_token": "A21AA-test-token", "expires_in": 32400})
        if path == "/v2/checkout/orders":
            if self.create_status >= 400:
                return httpx.Response(self.create_status, text="UNPROCESSABLE_ENTITY")
            if self.create_body is not None:
                return httpx.Response(self.create_status, json=self.create_body)
            order_id = f"PP-{len(self.orders) + 1}"
            self.orders[order_id] = json.loads(request.content)
            return httpx.Response(self.create_status, json={"id": order_id, "status": "CREATED"})
        if path.endswith("/capture"):
            order_id = path.split("/")[-2]
            if self.capture_status >= 400:
                return httpx.Response(self.capture_status, json={"name": "UNPROCESSABLE_ENTITY"})
            body = self.capture_body or {"id": order_id, "status": "COMPLETED"}
            return httpx.Response(self.capture_status, json=body)
        return httpx.Response(404, json={"name": "RESOURCE_NOT_FOUND"})


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def users(db):
    customer = User(id="user-1", email="cust@example.com", name="cust", role="USER")
    other = User(id="user-2", email="other@example.com", name="other", role="USER")
    admin = User(id="admin-1", email="admin@example.com", name="admin", role="ADMIN")
    db.add_all([customer, other, admin])
    db.commit()
    return {"customer": customer, "other": other, "admin": admin}


@pytest.fixture
def products(db):
    items = [
        Product(id="p1", name="Berber Rug", price=100.0, discount=10.0),
        Product(id="p2", name="Argan Oil", price=24.0, weight=0.3),
        Product(id="p3", name="Ceramic Tagine", price=45.0, weight=2.0),
    ]
    db.add_all(items)
    db.commit()
    return {p.id: p for p in items}


@pytest.fixture
def fake_paypal():
    return FakePayPal()


@pytest.fixture
def paypal_client(fake_paypal):
    http = httpx.Client(base_url="https://paypal.test", transport=httpx.MockTransport(fake_paypal.handler))
    yield PayPalClient("client-id", "client-secret", http)
    http.close()


@pytest.fixture
def events():
    return []


@pytest.fixture
def client(session_factory, paypal_client, events):
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_paypal] = lambda: paypal_client
    app.dependency_overrides[get_event_sink] = lambda: events.append
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def bearer(user_id: str, role: str = "USER") -> dict:
    token, _ = create_access_token(user_id, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer_headers(users):
    return bearer("user-1")


@pytest.fixture
def admin_headers(users):
    return bearer("admin-1", "ADMIN")


@pytest.fixture
def headers_for():
    """Build auth headers for an arbitrary user id."""
    return bearer
