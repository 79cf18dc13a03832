"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from ccb_ops.exceptions import AuthError, StoreError
from ccb_ops.lifecycle import OperationController
from ccb_ops.models import Actor, Identity, Modality, OperationInput, OperationStatus, RoleInfo
from ccb_ops.store import InMemoryRecordStore, Predicate


class FakeIdentityProvider:
    """Identity provider keeping accounts in memory."""

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, Identity, str]] = {}
        self.current: Identity | None = None
        self.fail_with: str | None = None

    def current_identity(self) -> Identity | None:
        return self.current

    def sign_in(self, email: str, password: str) -> Identity:
        if self.fail_with:
            raise AuthError(self.fail_with)
        account = self.accounts.get(email)
        if account is None or account[0] != password:
            raise AuthError("Invalid login credentials")
        self.current = account[1]
        return self.current

    def sign_up(self, email: str, password: str, full_name: str, pa: str) -> Identity:
        if self.fail_with:
            raise AuthError(self.fail_with)
        if email in self.accounts:
            raise AuthError("User already registered")
        identity = Identity(id=f"user-{len(self.accounts) + 1}", email=email, display_name=full_name)
        self.accounts[email] = (password, identity, pa)
        self.current = identity
        return identity


class FakeRoleResolver:
    """Role resolver backed by a dict."""

    def __init__(self, roles: dict[str, str] | None = None, fail: bool = False) -> None:
        self.roles = roles or {}
        self.fail = fail

    def resolve(self, actor_id: str) -> RoleInfo:
        if self.fail:
            raise StoreError("roles unavailable")
        role = self.roles.get(actor_id, "user")
        return RoleInfo(role=role, is_admin=role == "admin")


class FailingStore(InMemoryRecordStore):
    """In-memory store whose calls fail after being recorded."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    def select(self, table: str, predicate: Predicate, order_by: str | None = None, descending: bool = False) -> list[dict[str, Any]]:
        self.calls.append("select")
        raise StoreError("connection refused")

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        self.calls.append("insert")
        raise StoreError("connection refused")

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        self.calls.append("update")
        raise StoreError("connection refused")

    def delete(self, table: str, row_id: str) -> None:
        self.calls.append("delete")
        raise StoreError("connection refused")


class GarblingStore(InMemoryRecordStore):
    """In-memory store that saves rows but returns them with an unknown modality."""

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        return {**super().insert(table, row), "modalidade": "leasing"}

    def update(self, table: str, row_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        return {**super().update(table, row_id, patch), "modalidade": "leasing"}


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def store() -> InMemoryRecordStore:
    """Create a fresh store for each test."""
    return InMemoryRecordStore()


@pytest.fixture
def controller(store: InMemoryRecordStore) -> OperationController:
    """Controller over the in-memory store."""
    return OperationController(store)


@pytest.fixture
def failing_store() -> FailingStore:
    """Store that fails every call."""
    return FailingStore()


@pytest.fixture
def garbling_store() -> GarblingStore:
    """Store whose writes succeed but come back undecodable."""
    return GarblingStore()


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    """In-memory identity provider."""
    return FakeIdentityProvider()


@pytest.fixture
def admin() -> Actor:
    """Administrator without branch restriction."""
    return Actor(id="admin-001", email="admin@coop.com.br", display_name="Ana Admin", role="admin", is_admin=True)


@pytest.fixture
def branch_actor() -> Actor:
    """Agency user of branch 05."""
    return Actor(id="user-005", email="pa05@coop.com.br", display_name="Bruno Agência", branch_code="05")


@pytest.fixture
def unassigned_actor() -> Actor:
    """Agency user with no branch assigned."""
    return Actor(id="user-000", email="semPA@coop.com.br", display_name="Carla Sem PA")


@pytest.fixture
def sample_form() -> OperationInput:
    """Valid operation form as typed by a user."""
    return OperationInput(
        pa="05",
        produto="Consignado INSS",
        limite="15.000,00",
        conta_corrente="12345-6",
        nome="Maria Silva",
        cpf_cnpj="123.456.789-01",
        numero_ccb="2024000123",
        modalidade=Modality.CONSIGNADO,
        status=OperationStatus.PENDENTE,
    )


@pytest.fixture
def role_resolver() -> FakeRoleResolver:
    """Role resolver where everyone is a plain user."""
    return FakeRoleResolver()


@pytest.fixture
def failing_role_resolver() -> FakeRoleResolver:
    """Role resolver that fails, even for a configured admin."""
    return FakeRoleResolver({"admin-001": "admin"}, fail=True)
