"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from boiler_funnel.api.main import create_app
from boiler_funnel.infrastructure.database.models import Base, Product
from boiler_funnel.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def contact_form() -> dict:
    """Completed qualification form with contact details"""
    return {
        "fuel_type": "mains-gas",
        "boiler_type": "combi",
        "property_type": "detached",
        "bedroom_count": "3",
        "bathtub_count": "1",
        "shower_cubicle_count": "none",
        "flue_exit_type": "external-wall",
        "replacement_timing": "asap",
        "postcode": "SW1A 1AA",
        "address": "10 Downing Street, London",
        "first_name": "Alex",
        "last_name": "Taylor",
        "email": "alex@example.com",
        "phone": "07700 900123",
    }


@pytest.fixture
def product_payload() -> dict:
    """Catalog entry for a mid-range combi package"""
    return {
        "name": "Worcester Bosch Greenstar 4000",
        "brand": "Worcester Bosch",
        "description": "Compact combi boiler for 2-4 bedroom homes",
        "price": "£2,600",
        "original_price": "£2,900",
        "rating": 4.8,
        "category": "better",
        "warranty": "10 years",
        "features": ["Wireless thermostat", "Magnetic filter"],
        "expert_opinion": "Reliable and quiet.",
        "monthly_payment": "£26.90",
        "zero_apr": "0% APR available",
        "suitable_bedrooms": ["2", "3", "4"],
        "boiler_type": "combi",
    }


@pytest.fixture
def product(db: Session, product_payload: dict) -> Product:
    """Product stored in the test database"""
    product = Product(**product_payload)
    db.add(product)
    db.commit()
    return product


@pytest.fixture
def submission_id(client: TestClient, contact_form: dict) -> str:
    """ID of a freshly submitted form"""
    response = client.post("/api/forms/submit", json=contact_form)
    assert response.status_code == 201
    return response.json()["id"]
