"""Actor (signed-in user) models."""

from dataclasses import dataclass


@dataclass
class Identity:
    """Signed-in user as reported by the identity provider."""

    id: str
    email: str
    display_name: str = ""


@dataclass
class RoleInfo:
    """Role of an actor from the roles mapping."""

    role: str = "user"
    is_admin: bool = False


@dataclass
class Actor:
    """Identity enriched with role and branch, used for visibility scoping."""

    id: str
    email: str = ""
    display_name: str = ""
    role: str = "user"
    is_admin: bool = False
    branch_code: str | None = None  # None when no branch is assigned

    @property
    def first_name(self) -> str:
        """First word of the display name, for greetings."""
        parts = self.display_name.split()
        return parts[0] if parts else "Usuário"
