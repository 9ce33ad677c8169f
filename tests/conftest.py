"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from pawn_calculator.api.main import create_app
from pawn_calculator.api.dependencies import get_credential_verifier
from pawn_calculator.infrastructure.auth.credentials import Pbkdf2CredentialVerifier, hash_password
from pawn_calculator.infrastructure.database.models import Base
from pawn_calculator.infrastructure.database.session import get_db
from pawn_calculator.domain.models import (
    LoanRequest,
    RepaymentMode,
    VehicleCollateral,
    WeightTable,
)
from pawn_calculator.domain.weights import default_weight_table


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse battery staple"


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
def admin_auth() -> tuple[str, str]:
    """HTTP Basic credentials accepted by the test verifier"""
    return ADMIN_USERNAME, ADMIN_PASSWORD


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and admin account"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Low iteration count keeps the suite fast
    verifier = Pbkdf2CredentialVerifier(ADMIN_USERNAME, hash_password(ADMIN_PASSWORD, iterations=1_000))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_credential_verifier] = lambda: verifier
    return TestClient(app)


@pytest.fixture
def neutral_weights() -> WeightTable:
    """Weight table where every option is weighted 1.0"""
    return WeightTable(
        initial_rate=2.5,
        vehicle_weights={"汽車": 1.0, "機車": 1.0},
        usage_period_weights={"1年": 1.0, "3年": 1.0, "5年": 1.0, "10年以上": 1.0},
        check_weights={"支票": 1.0, "客票": 1.0},
        period_weights={str(p): 1.0 for p in (1, 3, 6, 12, 24, 36, 48, 60, 72)},
        repayment_condition_weights={"本利攤還": 1.0, "先還利息": 1.0},
    )


@pytest.fixture
def default_weights() -> WeightTable:
    """The documented fallback weight table"""
    return default_weight_table()


@pytest.fixture
def car_request() -> LoanRequest:
    """Car, used 1 year, 100,000 over 3 months, amortized"""
    return LoanRequest(
        collateral=VehicleCollateral(vehicle_type="汽車", usage_period="1年", model="Toyota Altis"),
        principal=100_000,
        periods=3,
        repayment_mode=RepaymentMode.AMORTIZED,
    )
