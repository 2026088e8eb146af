import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("SQLALCHEMY_DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.database import get_session
from app.main import app
from app.models import (
    Address,
    Discount,
    DiscountType,
    Product,
    ProductVariant,
    Role,
    User,
)
from app.schemas.order_schemas import OrderCreate
from app.utils.token import create_access_token


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _add(session: Session, obj):
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


@pytest.fixture
def user(session):
    return _add(session, User(name="Asha", email="asha@example.com", password="x"))


@pytest.fixture
def other_user(session):
    return _add(session, User(name="Ravi", email="ravi@example.com", password="x"))


@pytest.fixture
def admin(session):
    return _add(session, User(name="Admin", email="admin@example.com", password="x", role=Role.ADMIN))


def make_address(session: Session, owner: User, **overrides) -> Address:
    data = dict(
        user_id=owner.id,
        name=owner.name or "Customer",
        phone="+91 98450 00000",
        address="12 MG Road",
        city="Bengaluru",
        state="KA",
        country="IN",
        zip_code="560001",
    )
    data.update(overrides)
    return _add(session, Address(**data))


@pytest.fixture
def address(session, user):
    return make_address(session, user)


@pytest.fixture
def other_address(session, other_user):
    return make_address(session, other_user)


@pytest.fixture
def product(session):
    return _add(session, Product(name="Linen Shirt", slug="linen-shirt", price=20.0))


@pytest.fixture
def variant(session, product):
    """Stock 10, price 20, no discounted price."""
    return _add(
        session,
        ProductVariant(product_id=product.id, sku="LS-M", size="M", price=20.0, stock=10),
    )


@pytest.fixture
def sale_variant(session, product):
    """Stock 2, price 50, discounted to 45."""
    return _add(
        session,
        ProductVariant(
            product_id=product.id, sku="LS-L", size="L", price=50.0, discounted_price=45.0, stock=2
        ),
    )


def make_discount(session: Session, **overrides) -> Discount:
    data = dict(code="SAVE10", type=DiscountType.PERCENTAGE, value=10.0)
    data.update(overrides)
    return _add(session, Discount(**data))


def checkout_payload(address: Address, lines, **overrides) -> OrderCreate:
    """``lines`` is a list of (variant, quantity) pairs."""
    data = dict(
        items=[
            {"product_id": v.product_id, "variant_id": v.id, "quantity": q}
            for v, q in lines
        ],
        address_id=address.id,
        email="asha@example.com",
        phone="+91 98450 00000",
    )
    data.update(overrides)
    return OrderCreate(**data)


def auth_headers(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}
