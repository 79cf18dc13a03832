"""Submit handlers: the boundary where every outcome becomes a notification.

Each handler catches the library's errors, returns exactly one
:class:`Notification` and resets ``SubmitState.is_loading`` whatever
happens. Nothing is retried; the user resubmits.
"""

import logging
from dataclasses import dataclass

from ccb_ops.auth import IdentityProvider, classify_auth_error, validate_login, validate_registration
from ccb_ops.exceptions import AuthError, SavedRecordDecodeError, StoreError, ValidationError
from ccb_ops.lifecycle import OperationController
from ccb_ops.models.actor import Actor
from ccb_ops.models.operation import OperationInput
from ccb_ops.paste import apply_pasted_fields, parse_pasted_text

logger = logging.getLogger(__name__)

SUCCESS = "default"
DESTRUCTIVE = "destructive"


@dataclass
class Notification:
    """Message shown to the user after a submit."""

    title: str
    description: str
    variant: str = SUCCESS

    @property
    def is_error(self) -> bool:
        return self.variant == DESTRUCTIVE


@dataclass
class SubmitState:
    """Loading flag of a form."""

    is_loading: bool = False


def _validation_failed(error: ValidationError) -> Notification:
    return Notification("Erro de validação", error.message, DESTRUCTIVE)


def _saved_but_unreadable() -> Notification:
    return Notification(
        "Operação salva",
        "A operação foi registrada, mas não pôde ser exibida. Atualize a lista antes de enviar novamente.",
        DESTRUCTIVE,
    )


def submit_create(
    controller: OperationController,
    actor: Actor | None,
    form: OperationInput,
    state: SubmitState,
) -> Notification:
    """Create an operation from a submitted form."""
    if actor is None:
        return Notification(
            "Erro", "Você precisa estar logado para criar uma operação.", DESTRUCTIVE
        )

    state.is_loading = True
    try:
        controller.create(actor.id, form)
        return Notification("Sucesso!", "Operação CCB cadastrada com sucesso.")
    except ValidationError as e:
        return _validation_failed(e)
    except SavedRecordDecodeError:
        return _saved_but_unreadable()
    except StoreError as e:
        logger.error("Create failed for actor %s: %s", actor.id, e)
        return Notification("Erro", "Erro ao cadastrar operação. Tente novamente.", DESTRUCTIVE)
    finally:
        state.is_loading = False


def submit_update(
    controller: OperationController,
    operation_id: str | None,
    form: OperationInput,
    state: SubmitState,
) -> Notification | None:
    """Save an edited operation. Returns None when no operation is open."""
    if not operation_id:
        return None

    state.is_loading = True
    try:
        controller.update(operation_id, form)
        return Notification("Sucesso!", "Operação CCB atualizada com sucesso.")
    except ValidationError as e:
        return _validation_failed(e)
    except SavedRecordDecodeError:
        return _saved_but_unreadable()
    except StoreError as e:
        logger.error("Update of %s failed: %s", operation_id, e)
        return Notification("Erro", "Erro ao atualizar operação. Tente novamente.", DESTRUCTIVE)
    finally:
        state.is_loading = False


def submit_delete(
    controller: OperationController,
    operation_id: str | None,
    state: SubmitState,
) -> Notification | None:
    """Delete a confirmed operation. Returns None when nothing is selected."""
    if not operation_id:
        return None

    state.is_loading = True
    try:
        controller.delete(operation_id)
        return Notification("Sucesso!", "Operação CCB excluída com sucesso.")
    except StoreError as e:
        logger.error("Delete of %s failed: %s", operation_id, e)
        return Notification("Erro", "Erro ao excluir operação. Tente novamente.", DESTRUCTIVE)
    finally:
        state.is_loading = False


def import_pasted_text(form: OperationInput, text: str) -> tuple[OperationInput, Notification]:
    """Fill a form from pasted spreadsheet data.

    Returns the form unchanged together with an error notification when the
    text is empty or no field is recognized.
    """
    if not text.strip():
        return form, Notification(
            "Dados vazios", "Cole os dados do Excel na caixa de texto.", DESTRUCTIVE
        )

    fields = parse_pasted_text(text)
    if not fields:
        return form, Notification(
            "Formato não reconhecido",
            "Não foi possível identificar os campos. Verifique o formato dos dados.",
            DESTRUCTIVE,
        )

    return apply_pasted_fields(form, fields), Notification(
        "Dados importados!", f"{len(fields)} campos preenchidos automaticamente."
    )


def submit_sign_in(
    provider: IdentityProvider,
    email: str,
    password: str,
    state: SubmitState,
) -> Notification:
    """Sign in with email and password."""
    state.is_loading = True
    try:
        email = validate_login(email, password)
        provider.sign_in(email, password)
        return Notification("Bem-vindo!", "Login realizado com sucesso.")
    except ValidationError as e:
        return _validation_failed(e)
    except AuthError as e:
        error = classify_auth_error(e.message)
        return Notification("Erro ao entrar", error.message, DESTRUCTIVE)
    finally:
        state.is_loading = False


def submit_sign_up(
    provider: IdentityProvider,
    full_name: str,
    email: str,
    password: str,
    confirm_password: str,
    pa: str,
    state: SubmitState,
) -> Notification:
    """Register a new account bound to a branch."""
    state.is_loading = True
    try:
        full_name, email, pa = validate_registration(full_name, email, password, confirm_password, pa)
        provider.sign_up(email, password, full_name, pa)
        return Notification("Conta criada!", "Cadastro realizado com sucesso.")
    except ValidationError as e:
        return _validation_failed(e)
    except AuthError as e:
        error = classify_auth_error(e.message)
        return Notification("Erro ao cadastrar", error.message, DESTRUCTIVE)
    finally:
        state.is_loading = False
