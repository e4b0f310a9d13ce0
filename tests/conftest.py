import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from main import app
from app.database import get_session
from app.models import Challenge

# Create in-memory database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)

@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()

@pytest.fixture(name="challenge")
def challenge_fixture(session: Session):
    """A stored challenge nobody has joined yet."""
    challenge = Challenge(
        title="Plastic-Free Week",
        category="Waste Reduction",
        description="Avoid single-use plastic for seven days",
        duration=7,
        target="Zero plastic bags",
        impact_metric="kg plastic saved",
        created_by="admin@ecotrack.io",
        image_url="https://img.example/plastic.png"
    )
    session.add(challenge)
    session.commit()
    session.refresh(challenge)
    return challenge
