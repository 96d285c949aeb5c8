import pytest
from django.test import Client

from aicte_portal.core.roles import Role
from aicte_portal.institutions.models import Institution
from aicte_portal.institutions.tests.factories import InstitutionFactory
from aicte_portal.users.models import User
from aicte_portal.users.tests.factories import UserFactory

PASSWORD = "testpass123"


def make_user(email: str, name: str, role: Role) -> User:
    user = UserFactory(email=email, name=name, role=role)
    user.set_password(PASSWORD)
    user.save()
    return user


def login_client(user: User) -> Client:
    """Return a client logged in as ``user`` through the auth API."""
    client = Client()
    response = client.get("/api/auth/csrf")
    csrf_token = response.json()["csrf_token"]
    response = client.post(
        "/api/auth/login",
        data={"email": user.email, "password": PASSWORD},
        content_type="application/json",
        HTTP_X_CSRFTOKEN=csrf_token,
    )
    assert response.status_code == 200, response.json()
    # Store CSRF token for later use
    client.csrf_token = csrf_token
    return client


@pytest.fixture
def admin_user(db) -> User:
    return make_user("admin@aicte.example.org", "Admin User", Role.ADMIN)


@pytest.fixture
def evaluator_user(db) -> User:
    return make_user("evaluator@aicte.example.org", "Dr. Rajesh Kumar", Role.EVALUATOR)


@pytest.fixture
def institution_user(db) -> User:
    return make_user("iit@institution.example.org", "IIT Mumbai", Role.INSTITUTION)


@pytest.fixture
def institution(institution_user) -> Institution:
    return InstitutionFactory(
        user=institution_user,
        name="Indian Institute of Technology, Mumbai",
        address="Powai, Mumbai",
        state="Maharashtra",
    )


@pytest.fixture
def admin_client(admin_user) -> Client:
    return login_client(admin_user)


@pytest.fixture
def evaluator_client(evaluator_user) -> Client:
    return login_client(evaluator_user)


@pytest.fixture
def institution_client(institution_user) -> Client:
    return login_client(institution_user)


@pytest.fixture
def anonymous_client() -> Client:
    """Return an unauthenticated client."""
    client = Client()
    response = client.get("/api/auth/csrf")
    client.csrf_token = response.json()["csrf_token"]
    return client
