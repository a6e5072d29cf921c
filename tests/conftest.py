import pytest
import os
from datetime import date
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

import jwt
from fastapi.testclient import TestClient

from posapp.core.config import settings
from posapp.database import Base, get_db
from posapp.main import app

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def tenant(db_session):
    from posapp.models.tenant import Tenant
    tenant = Tenant(name="Warung Maju")
    db_session.add(tenant)
    db_session.commit()
    return tenant


@pytest.fixture(scope="function")
def other_tenant(db_session):
    from posapp.models.tenant import Tenant
    tenant = Tenant(name="Toko Sebelah")
    db_session.add(tenant)
    db_session.commit()
    return tenant


@pytest.fixture(scope="function")
def staff(db_session, tenant):
    from posapp.models.staff import Staff
    staff = Staff(tenant_id=tenant.id, username="budi", full_name="Budi Santoso")
    db_session.add(staff)
    db_session.commit()
    return staff


@pytest.fixture(scope="function")
def payroll_setting(db_session, tenant):
    from posapp.models.payroll import PayrollSetting
    setting = PayrollSetting(
        tenant_id=tenant.id,
        basic_salary=Decimal("3000000"),
        fixed_allowance=Decimal("200000"),
        standard_hours=Decimal("160"),
        overtime_rate_multiplier=Decimal("1.5"),
    )
    db_session.add(setting)
    db_session.commit()
    return setting


@pytest.fixture(scope="function")
def period(db_session, tenant):
    from posapp.models.payroll import PayrollPeriod
    period = PayrollPeriod(
        tenant_id=tenant.id,
        period_start=date(2025, 1, 1),
        period_end=date(2025, 1, 31),
    )
    db_session.add(period)
    db_session.commit()
    return period


@pytest.fixture(scope="function")
def get_token():
    """Helper fixture to sign tenant tokens the way the login service does."""
    def _get_token(tenant_id, user_id="user-1", role="OWNER", **extra):
        payload = {"userId": user_id, "tenantId": tenant_id, "role": role, **extra}
        return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)
    return _get_token


@pytest.fixture(scope="function")
def auth_headers(tenant, get_token):
    return {"Authorization": f"Bearer {get_token(tenant.id)}"}


@pytest.fixture(scope="function")
def client(db_session):
    """Get a TestClient that uses the test database session via dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
