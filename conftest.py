"""
Alpha Inventory — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

import pytest
from rest_framework.test import APIClient

from tests.factories import AdminUserFactory, SupervisorFactory, UserFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Active OPERATOR with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def supervisor(db):
    return SupervisorFactory()


@pytest.fixture
def admin_user(db):
    """Active ADMIN with default password TestPass2026!"""
    return AdminUserFactory()


@pytest.fixture
def authenticated_client(user):
    """API client authenticated as an operator."""
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def supervisor_client(supervisor):
    client = APIClient()
    client.force_authenticate(user=supervisor)
    return client


@pytest.fixture
def admin_client(admin_user):
    """API client authenticated as a plant ADMIN."""
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client
