"""Shared fixtures: in-memory order store and fake storage/checkout adapters."""

import os

# Must be set before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = os.devnull
os.environ["PUBLIC_BASE_URL"] = "https://print.example.test"
os.environ.pop("BW_PRICE_CENTS", None)
os.environ.pop("COLOR_PRICE_CENTS", None)

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_checkout_client, get_storage_service
from app.core.config import settings
from app.core.database import Base, SessionLocal, engine
from app.models.order import PrintOrder  # noqa: F401  registers the table
from app.services.checkout import Checkout, YocoCheckoutClient
from app.services.order_store import OrderStore
from app.services.order_workflow import OrderWorkflow
from app.services.storage import StorageService
from main import app


def make_pdf(pages: int) -> bytes:
    """Minimal uncompressed PDF body with one page tree and `pages` page objects."""
    kids = " ".join(f"{n + 3} 0 R" for n in range(pages))
    parts = [
        b"%PDF-1.4\n",
        b"1 0 obj << /Type /Catalog /Pages 2 0 R >> endobj\n",
        f"2 0 obj << /Type /Pages /Kids [{kids}] /Count {pages} >> endobj\n".encode(),
    ]
    for n in range(pages):
        parts.append(f"{n + 3} 0 obj << /Type /Page /Parent 2 0 R >> endobj\n".encode())
    parts.append(b"%%EOF\n")
    return b"".join(parts)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def order_store(db_session):
    return OrderStore(db_session)


@pytest.fixture
def storage():
    fake = MagicMock(spec=StorageService)
    fake.upload_file.side_effect = lambda path, content, content_type="application/pdf": path
    return fake


@pytest.fixture
def checkout_client():
    fake = MagicMock(spec=YocoCheckoutClient)
    fake.create_checkout.return_value = Checkout(
        id="ch_test_123",
        redirect_url="https://c.yoco.com/checkout/ch_test_123"
    )
    return fake


@pytest.fixture
def workflow(order_store, storage, checkout_client):
    return OrderWorkflow(
        settings=settings,
        order_store=order_store,
        storage=storage,
        checkout_client=checkout_client
    )


@pytest.fixture
def client(db_session, storage, checkout_client):
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_checkout_client] = lambda: checkout_client
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def pdf_factory():
    return make_pdf
