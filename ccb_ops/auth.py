"""Identity and role collaborators, credential validation."""

import logging
import re
from typing import Protocol

from ccb_ops.exceptions import AuthError, ValidationError
from ccb_ops.models.actor import Identity, RoleInfo
from ccb_ops.store.base import Predicate, RecordStore

logger = logging.getLogger(__name__)

# Branch codes offered at sign-up
PA_OPTIONS: tuple[str, ...] = (
    "00", "02", "03", "05", "06", "07", "09", "10", "11", "12", "15",
    "16", "17", "18", "20", "21", "22", "23", "24", "25", "26", "97",
)

ADMIN_ROLE = "admin"
DEFAULT_ROLE = "user"
MIN_PASSWORD_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Provider message fragment -> (error kind, friendly message)
_KNOWN_AUTH_ERRORS: list[tuple[str, str, str]] = [
    ("Invalid login credentials", AuthError.INVALID_CREDENTIALS, "Email ou senha incorretos."),
    ("User already registered", AuthError.ALREADY_REGISTERED, "Este email já está cadastrado."),
]


class IdentityProvider(Protocol):
    """External identity provider.

    ``sign_in`` and ``sign_up`` raise :class:`AuthError` on failure.
    """

    def current_identity(self) -> Identity | None:
        ...

    def sign_in(self, email: str, password: str) -> Identity:
        ...

    def sign_up(self, email: str, password: str, full_name: str, pa: str) -> Identity:
        ...


class RoleResolver(Protocol):
    """Maps an actor id to its role."""

    def resolve(self, actor_id: str) -> RoleInfo:
        ...


class TableRoleResolver:
    """Role resolver reading a ``user_roles`` table from the record store."""

    def __init__(self, store: RecordStore, table: str = "user_roles") -> None:
        self.store = store
        self.table = table

    def resolve(self, actor_id: str) -> RoleInfo:
        """Return the actor's role; actors without a row are plain users."""
        rows = self.store.select(self.table, Predicate.where(user_id=actor_id))
        if not rows:
            return RoleInfo(role=DEFAULT_ROLE, is_admin=False)
        role = rows[0].get("role") or DEFAULT_ROLE
        return RoleInfo(role=role, is_admin=role == ADMIN_ROLE)


def _check_email(email: str) -> str:
    email = (email or "").strip()
    if not _EMAIL_RE.match(email):
        raise ValidationError("email", "Email inválido")
    return email


def _check_password(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError("password", "Senha deve ter pelo menos 6 caracteres")


def validate_login(email: str, password: str) -> str:
    """Validate sign-in input and return the normalized email."""
    email = _check_email(email)
    _check_password(password)
    return email


def validate_registration(
    full_name: str,
    email: str,
    password: str,
    confirm_password: str,
    pa: str,
) -> tuple[str, str, str]:
    """Validate sign-up input, failing on the first violated field.

    Returns
    -------
    tuple[str, str, str]
        Normalized full name, email and branch code.
    """
    full_name = (full_name or "").strip()
    if len(full_name) < 2:
        raise ValidationError("full_name", "Nome deve ter pelo menos 2 caracteres")
    email = _check_email(email)
    _check_password(password)
    pa = (pa or "").strip()
    if not pa:
        raise ValidationError("pa", "Selecione uma agência")
    if password != confirm_password:
        raise ValidationError("confirm_password", "Senhas não conferem")
    if pa not in PA_OPTIONS:
        raise ValidationError("pa", "Selecione uma agência")
    return full_name, email, pa


def classify_auth_error(message: str) -> AuthError:
    """Turn a provider error message into a typed :class:`AuthError`.

    Known messages get a friendlier text; anything else keeps the
    provider's own message.
    """
    for fragment, kind, friendly in _KNOWN_AUTH_ERRORS:
        if fragment.lower() in message.lower():
            return AuthError(friendly, kind=kind)
    logger.debug("Unrecognized auth error: %s", message)
    return AuthError(message)
