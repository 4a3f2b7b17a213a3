import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import init_db, make_engine
from main import create_app
from schemas.order import Address
from schemas.product import InsertProduct
from storage.memory import MemStorage
from storage.sql import SqlStorage


@pytest.fixture
def mem_storage():
    return MemStorage()


@pytest.fixture
def sql_storage(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'storefront_test.db'}")
    init_db(bind=engine)
    yield SqlStorage(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    engine.dispose()


@pytest.fixture(params=["mem", "sql"])
def storage(request):
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture
def client(mem_storage):
    app = create_app(storage=mem_storage)
    with TestClient(app) as c:
        yield c


# Same app over each storage backend
@pytest.fixture(params=["mem", "sql"])
def backend_client(request):
    app = create_app(storage=request.getfixturevalue(f"{request.param}_storage"))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def address():
    return Address(
        full_name="Jane Doe",
        street_address="1 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
        country="US",
        phone_number="555-0100",
    )


@pytest.fixture
def make_product():
    def _make(**overrides):
        data = dict(name="Canvas Tote", price=20.0, category="Accessories", stock=10)
        data.update(overrides)
        return InsertProduct(**data)
    return _make
