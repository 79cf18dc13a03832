"""Role- and branch-scoped visibility of CCB operations.

Administrators see every branch. Everyone else sees the operations of their
own branch (``pa``). An actor without a branch is treated differently per
view kind:

- aggregate views (stats) fall back to the actor's own operations;
- list views show nothing.

The two fallbacks differ on purpose and are kept apart until product
decides on a single behavior.
"""

import logging
from enum import Enum

from ccb_ops.auth import IdentityProvider, RoleResolver
from ccb_ops.exceptions import StoreError
from ccb_ops.models.actor import Actor, RoleInfo
from ccb_ops.models.enums import OperationStatus
from ccb_ops.store.base import Predicate, RecordStore

logger = logging.getLogger(__name__)


class ViewFilter(str, Enum):
    """Mutually exclusive selectors for list views."""

    ABERTO = "aberto"
    PENDENTE = "pendente"
    EM_ANALISE = "em_analise"
    APROVADO = "aprovado"
    REJEITADO = "rejeitado"
    CANCELADO = "cancelado"
    LIQUIDADO = "liquidado"
    PREJUIZO_QUITADO = "prejuizo_quitado"
    TRANSFERENCIA_PREJUIZO = "transferencia_prejuizo"
    REPACTUADO = "repactuado"
    PENDENTE_MALOTE = "pendente_malote"
    PENDENCIA_REGULARIZACAO = "pendencia_regularizacao"


# Views that select a flag instead of a status
FLAG_VIEWS = frozenset({ViewFilter.PENDENTE_MALOTE, ViewFilter.PENDENCIA_REGULARIZACAO})

ADMIN_VIEWS: tuple[ViewFilter, ...] = (
    ViewFilter.ABERTO,
    ViewFilter.PENDENTE_MALOTE,
    ViewFilter.PENDENCIA_REGULARIZACAO,
    ViewFilter.LIQUIDADO,
    ViewFilter.PREJUIZO_QUITADO,
    ViewFilter.TRANSFERENCIA_PREJUIZO,
    ViewFilter.REPACTUADO,
)

AGENCY_VIEWS: tuple[ViewFilter, ...] = (
    ViewFilter.PENDENTE_MALOTE,
    ViewFilter.PENDENCIA_REGULARIZACAO,
)


def base_filter(view: ViewFilter | str) -> Predicate:
    """Return the single equality a view selects on."""
    view = ViewFilter(view)
    if view in FLAG_VIEWS:
        return Predicate.where(**{view.value: True})
    return Predicate.where(status=OperationStatus(view.value))


def scope_query(actor: Actor, base: Predicate, aggregate: bool = False) -> Predicate:
    """Restrict a base predicate to what ``actor`` may see.

    Parameters
    ----------
    actor : Actor
        Actor issuing the query.
    base : Predicate
        View selector, or an empty predicate for aggregate views.
    aggregate : bool
        True for aggregate views (stats), False for list views.

    Returns
    -------
    Predicate
        ``base`` for administrators, ``base AND pa = branch`` for branch
        actors, and the no-branch fallback otherwise.
    """
    if actor.is_admin:
        return base
    if actor.branch_code:
        return base.and_("pa", actor.branch_code)
    if aggregate:
        logger.debug("Actor %s has no branch; scoping aggregate to own operations", actor.id)
        return base.and_("user_id", actor.id)
    logger.debug("Actor %s has no branch; list view is empty", actor.id)
    return Predicate.nothing()


def views_for(actor: Actor) -> tuple[ViewFilter, ...]:
    """Return the list views offered to an actor."""
    return ADMIN_VIEWS if actor.is_admin else AGENCY_VIEWS


def default_view(actor: Actor) -> ViewFilter:
    """Return the view shown first to an actor."""
    return views_for(actor)[0]


def lookup_branch(store: RecordStore, actor_id: str, profiles_table: str = "profiles") -> str | None:
    """Return the branch code on the actor's profile.

    A failing lookup is logged and reported as "no branch" so it never
    blocks rendering.
    """
    try:
        rows = store.select(profiles_table, Predicate.where(id=actor_id))
    except StoreError as e:
        logger.warning("Branch lookup failed for %s: %s", actor_id, e)
        return None
    if not rows:
        return None
    return rows[0].get("pa") or None


def resolve_actor(
    identity_provider: IdentityProvider,
    role_resolver: RoleResolver,
    store: RecordStore,
    profiles_table: str = "profiles",
) -> Actor | None:
    """Build the current actor from identity, role and profile.

    Returns None when nobody is signed in. A failing role lookup yields a
    non-admin actor.
    """
    identity = identity_provider.current_identity()
    if identity is None:
        return None

    try:
        role = role_resolver.resolve(identity.id)
    except StoreError as e:
        logger.warning("Role lookup failed for %s: %s", identity.id, e)
        role = RoleInfo()

    return Actor(
        id=identity.id,
        email=identity.email,
        display_name=identity.display_name,
        role=role.role,
        is_admin=role.is_admin,
        branch_code=lookup_branch(store, identity.id, profiles_table),
    )
