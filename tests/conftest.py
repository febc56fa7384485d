import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app import models  # noqa: F401
from app.core.security import get_current_admin
from app.database import Base, get_db
from app.main import app
from app.functions import functions_app
from app.routers.admin import get_sweeper
from app.services.expiry_sweeper import ExpirySweeper
from app.services.reservation_store import ReservationStore
from app.services.supabase_storage import get_storage

FIELD = "saha-3"
OTHER_FIELD = "Etlik Halı Saha"


class FakeStorage:
    """Stands in for Supabase; records uploads instead of sending them."""

    def __init__(self):
        self.uploads = []

    async def upload_payment_proof(self, file, folder="payment-proofs", max_size_mb=None):
        content = await file.read()
        self.uploads.append((file.filename, content))
        return f"https://files.example/{folder}/{file.filename}"


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return ReservationStore(db)


@pytest.fixture
def make_reservation(store):
    def _make(date="2025-06-01", field=FIELD, time_slot="16-17", customer_name="Ali Veli"):
        return store.create(date=date, field=field, time_slot=time_slot, customer_name=customer_name)
    return _make


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(session_factory, storage):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_sweeper] = lambda: ExpirySweeper(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    app.dependency_overrides[get_current_admin] = lambda: {"email": "owner@halisaha.test", "rol": "admin"}
    return client


@pytest.fixture
def functions_client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    functions_app.dependency_overrides[get_db] = override_get_db
    yield TestClient(functions_app)
    functions_app.dependency_overrides.clear()
