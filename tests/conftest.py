"""
Sanchalana - Test Configuration and Fixtures
"""
import os
import tempfile
import uuid
from typing import AsyncGenerator, Generator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Set testing environment
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['UPLOAD_DIR'] = tempfile.mkdtemp(prefix='sanchalana-uploads-')
os.environ['PUBLIC_BASE_URL'] = 'http://test'

from sanchalana.main import app
from sanchalana.database import Base, get_db
from sanchalana.cryptography import encrypt_password, create_access_token
from sanchalana.controller.ws_manager import registration_manager, live_count_manager, session_manager
from sanchalana.models.user_model import User
from sanchalana.models.profile_model import Profile
from sanchalana.models.session_model import AuthSession
from sanchalana.models.admin_model import Admin, AdminRole
from sanchalana.models.department_model import Department
from sanchalana.models.event_model import Event
from sanchalana.models.registration_model import Registration, PaymentMethod, PaymentStatus
from tests.helpers import fake, fake_member, fake_email, TEST_PASSWORD

# Test database setup
test_engine = create_engine(
    'sqlite://',
    connect_args={'check_same_thread': False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(autouse=True)
def reset_sockets():
    yield
    registration_manager.active_connections.clear()
    live_count_manager.active_connections.clear()
    session_manager.active_connections.clear()


@pytest.fixture(scope='function')
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


def override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
async def client(db_session: Session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def ws_client(db_session: Session):
    """Synchronous client for websocket endpoints"""
    from fastapi.testclient import TestClient

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


# ----------------------- Factories -----------------------

@pytest.fixture
def make_user(db_session: Session):
    def _make_user(email: str = None, password: str = TEST_PASSWORD, with_profile: bool = True) -> User:
        user = User(email=email or fake_email(), password=encrypt_password(password) if password else None)
        if with_profile:
            member = fake_member()
            user.profile = Profile(name=member['name'], usn=member['usn'], phone=member['phone'])
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_admin(db_session: Session, make_user):
    def _make_admin(role: AdminRole, department: Department = None, event: Event = None) -> Admin:
        user = make_user()
        department_id = department.id if department else None
        if event is not None:
            department_id = event.department_id
        admin = Admin(
            id=user.id,
            role=role.value,
            department_id=department_id,
            event_id=event.id if event else None,
            username=user.email,
        )
        db_session.add(admin)
        db_session.commit()
        db_session.refresh(admin)
        return admin
    return _make_admin


@pytest.fixture
def make_department(db_session: Session):
    def _make_department(name: str = None, short_name: str = None) -> Department:
        department = Department(name=name or fake.company(), short_name=short_name or fake.lexify('???').upper())
        db_session.add(department)
        db_session.commit()
        db_session.refresh(department)
        return department
    return _make_department


@pytest.fixture
def make_event(db_session: Session):
    def _make_event(department: Department, title: str = None, team_size: int = 2, **kwargs) -> Event:
        event = Event(
            department_id=department.id,
            title=title or fake.catch_phrase(),
            team_size=team_size,
            registration_fee=kwargs.pop('registration_fee', 100.0),
            event_type=kwargs.pop('event_type', 'Technical'),
            **kwargs
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event
    return _make_event


@pytest.fixture
def make_registration(db_session: Session):
    def _make_registration(user: User, event: Event, members: int = 1,
                           payment_status: PaymentStatus = PaymentStatus.PENDING) -> Registration:
        registration = Registration(
            event_id=event.id,
            user_id=user.id,
            team_id=f"TEAM-{uuid.uuid4().hex[:8]}",
            team_members=[fake_member() for _ in range(members)],
            payment_method=PaymentMethod.CASH.value,
            payment_status=payment_status.value,
        )
        db_session.add(registration)
        db_session.commit()
        db_session.refresh(registration)
        return registration
    return _make_registration


@pytest.fixture
def auth_headers_for(db_session: Session):
    """Open a session for the user and return its bearer header"""
    def _auth_headers_for(user_id: str) -> dict:
        auth_session = AuthSession(user_id=user_id, method='password')
        db_session.add(auth_session)
        db_session.commit()
        token = create_access_token(user_id, auth_session.id)
        return {'Authorization': f'Bearer {token}'}
    return _auth_headers_for


# ----------------------- Common data -----------------------

@pytest.fixture
def department(make_department) -> Department:
    return make_department('Computer Science', 'CSE')


@pytest.fixture
def other_department(make_department) -> Department:
    return make_department('Mechanical Engineering', 'ME')


@pytest.fixture
def event(make_event, department) -> Event:
    return make_event(department, 'Code Sprint', team_size=2, payment_qr_url='http://test/uploads/qr_codes/pay.png')


@pytest.fixture
def other_event(make_event, department) -> Event:
    return make_event(department, 'Bug Hunt', team_size=3)


@pytest.fixture
def test_user(make_user) -> User:
    return make_user()


@pytest.fixture
def auth_headers(test_user, auth_headers_for) -> dict:
    return auth_headers_for(test_user.id)


@pytest.fixture
def main_admin(make_admin) -> Admin:
    return make_admin(AdminRole.MAIN_ADMIN)


@pytest.fixture
def department_admin(make_admin, department) -> Admin:
    return make_admin(AdminRole.DEPARTMENT_ADMIN, department=department)


@pytest.fixture
def event_admin(make_admin, event) -> Admin:
    return make_admin(AdminRole.EVENT_ADMIN, event=event)


@pytest.fixture
def main_admin_headers(main_admin, auth_headers_for) -> dict:
    return auth_headers_for(main_admin.id)


@pytest.fixture
def department_admin_headers(department_admin, auth_headers_for) -> dict:
    return auth_headers_for(department_admin.id)


@pytest.fixture
def event_admin_headers(event_admin, auth_headers_for) -> dict:
    return auth_headers_for(event_admin.id)
