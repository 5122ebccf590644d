"""Shared test fixtures."""

import os

# Keep the app lifespan away from any on-disk database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GENERATE_ON_STARTUP"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import datetime
from decimal import Decimal
import uuid

from moneytrack.database import Base
from moneytrack.dependencies import get_db
from moneytrack.main import app
from moneytrack.models.enums import MoneyCategory, PaymentMethod, TransactionKind, RecurringInterval
from moneytrack.models.transaction import Transaction
from moneytrack.services.calendar_service import CalendarService
from moneytrack.services.recurring_service import RecurringEngine
from moneytrack.services.recurring_store import SqlAlchemyRecurringStore


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def calendar():
    """Calendar with Sunday-start weeks."""
    return CalendarService(first_weekday=6)


@pytest.fixture
def engine(db_session, calendar):
    """Recurring engine over the test session."""
    return RecurringEngine(SqlAlchemyRecurringStore(db_session), calendar)


@pytest.fixture
def make_template(db_session):
    """Factory that persists a recurring template."""
    def _make(
        date: datetime,
        interval: str = RecurringInterval.monthly.value,
        amount: Decimal = Decimal("1500.00"),
        category: str = MoneyCategory.housing.value,
        merchant: str = "Monthly Rent",
        group_id: str = None,
    ) -> Transaction:
        template = Transaction(
            id=str(uuid.uuid4()),
            date=date,
            amount=amount,
            category=category,
            merchant=merchant,
            payment_method=PaymentMethod.debit.value,
            notes=f"Recurring {interval}",
            kind=TransactionKind.expense.value,
            is_template=True,
            recurring_interval=interval,
            recurring_group_id=group_id or str(uuid.uuid4()),
            created_at=datetime.now(),
        )
        db_session.add(template)
        db_session.commit()
        db_session.refresh(template)
        return template

    return _make


@pytest.fixture
def generated_for(db_session):
    """Return instances generated for a group, oldest first."""
    def _generated(group_id: str) -> list[Transaction]:
        return db_session.query(Transaction).filter(
            Transaction.generated_from_recurring_id == group_id
        ).order_by(Transaction.date).all()

    return _generated


@pytest.fixture
def sample_transaction(db_session):
    """Create a plain expense."""
    txn = Transaction(
        id=str(uuid.uuid4()),
        date=datetime(2024, 1, 15, 12, 30),
        amount=Decimal("50.00"),
        category=MoneyCategory.food.value,
        merchant="Whole Foods",
        payment_method=PaymentMethod.credit.value,
        kind=TransactionKind.expense.value,
        is_template=False,
        created_at=datetime.now(),
    )
    db_session.add(txn)
    db_session.commit()
    db_session.refresh(txn)
    return txn
