"""
Tests for the permission classes.
"""

import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory

from aicte_portal.core.api.permissions import AllowAny
from aicte_portal.core.api.permissions import IsAdmin
from aicte_portal.core.api.permissions import IsAuthenticated
from aicte_portal.core.api.permissions import IsEvaluator
from aicte_portal.core.api.permissions import IsInstitution
from aicte_portal.core.roles import Role
from aicte_portal.users.tests.factories import UserFactory


@pytest.fixture
def request_factory():
    """Return a Django RequestFactory."""
    return RequestFactory()


def make_request(request_factory, user=None):
    """Create a request with the given user."""
    request = request_factory.get("/")
    request.user = user if user else AnonymousUser()
    return request


@pytest.mark.django_db
class TestIsAuthenticated:
    def test_anonymous_user_denied(self, request_factory):
        request = make_request(request_factory)
        assert IsAuthenticated().has_permission(request, None) is False

    def test_authenticated_user_allowed(self, request_factory):
        request = make_request(request_factory, UserFactory())
        assert IsAuthenticated().has_permission(request, None) is True


@pytest.mark.django_db
class TestRolePermissions:
    @pytest.mark.parametrize(
        ("permission", "role", "expected"),
        [
            (IsInstitution, Role.INSTITUTION, True),
            (IsInstitution, Role.EVALUATOR, False),
            (IsInstitution, Role.ADMIN, False),
            (IsEvaluator, Role.EVALUATOR, True),
            (IsEvaluator, Role.INSTITUTION, False),
            (IsAdmin, Role.ADMIN, True),
            (IsAdmin, Role.EVALUATOR, False),
            (IsAdmin, Role.INSTITUTION, False),
        ],
    )
    def test_role_gate(self, request_factory, permission, role, expected):
        request = make_request(request_factory, UserFactory(role=role))
        assert permission().has_permission(request, None) is expected

    def test_superuser_passes_admin_gate(self, request_factory):
        user = UserFactory(role=Role.INSTITUTION, is_superuser=True)
        assert IsAdmin().has_permission(make_request(request_factory, user), None) is True

    @pytest.mark.parametrize("permission", [IsInstitution, IsEvaluator, IsAdmin])
    def test_anonymous_denied(self, request_factory, permission):
        assert permission().has_permission(make_request(request_factory), None) is False


class TestAllowAny:
    def test_always_allowed(self, request_factory):
        assert AllowAny().has_permission(make_request(request_factory), None) is True
