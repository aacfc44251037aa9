# tests/conftest.py
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from transparency.main import app
from transparency.database import Base, get_db
from transparency.models import Project, Partner, Workspace, Donation, Expense

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return engine

@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture
def client(db_session):
    """Test client using the test database"""
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
def sample_project(db_session):
    """Create an active, partly funded project"""
    project = Project(
        title="Clean Water",
        description="Wells for three villages",
        category="water",
        goal=10000,
        raised=2500,
        supporters=40,
        is_active=True,
        sub_projects=[]
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project

@pytest.fixture
def completed_project(db_session):
    project = Project(
        title="School Roof",
        description="New roof for the primary school",
        category="education",
        goal=5000,
        raised=5200,
        supporters=75,
        is_active=False,
        is_completed=True,
        completion_data={
            "completed_date": "2024-03-15",
            "completion_story": "The roof was finished before the rains.",
            "before_images": ["http://img/before.jpg"],
            "after_images": [],
            "progress_images": [],
            "testimonials": [],
            "impact_stats": {"people_helped": 300, "items_distributed": 0, "custom_metric": ""}
        },
        sub_projects=[]
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project

@pytest.fixture
def parent_project(db_session):
    """Parent project with one completed and one open sub-project"""
    project = Project(
        title="Water Program",
        description="Boreholes across the district",
        category="water",
        goal=20000,
        raised=12000,
        supporters=120,
        is_parent=True,
        sub_projects=[
            {
                "id": "well-a",
                "title": "Well A",
                "community": "Kasese",
                "goal": 4000,
                "raised": 4000,
                "is_completed": True,
                "completion_data": {"completed_date": "2024-01-01", "completion_story": "Water flows."}
            },
            {
                "id": "well-b",
                "title": "Well B",
                "community": "Mbarara",
                "goal": 4000,
                "raised": 1000,
                "is_completed": False
            }
        ]
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project

@pytest.fixture
def sample_partner(db_session):
    partner = Partner(
        name="Acme Foundation",
        logo="http://img/acme.png",
        website="https://acme.org",
        amount=1500,
        project="Clean Water",
        date="2024-02-01"
    )
    db_session.add(partner)
    db_session.commit()
    db_session.refresh(partner)
    return partner

@pytest.fixture
def sample_workspace(db_session):
    workspace = Workspace(
        name="Globex Employees",
        total_received=1000,
        date="2024-05-01",
        expenses=[
            {"id": "exp_1", "description": "Water filters", "amount": 300, "date": "2024-05-10", "note": ""},
            {"id": "exp_2", "description": "Transport", "amount": 150, "date": "2024-05-12", "note": ""}
        ]
    )
    db_session.add(workspace)
    db_session.commit()
    db_session.refresh(workspace)
    return workspace

@pytest.fixture
def sample_ledger(db_session):
    """One donation and one expense"""
    donation = Donation(amount=100, donor_email="jane@example.com", project_id="clean-water")
    expense = Expense(amount=40, description="Pipes", category="materials", project="Clean Water",
                      receipt="http://img/receipt.jpg", date="2024-04-01")
    db_session.add_all([donation, expense])
    db_session.commit()
    db_session.refresh(donation)
    db_session.refresh(expense)
    return donation, expense

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up database files created by importing the app"""
    yield
    for file in ["transparency.db", "test.db"]:
        if os.path.exists(file):
            os.remove(file)
