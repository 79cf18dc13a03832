"""CCB operation models: stored record, form input and validation."""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from ccb_ops.exceptions import RecordDecodeError, ValidationError
from ccb_ops.formatting import (
    cents_of,
    format_currency,
    format_tax_id,
    is_valid_tax_id_length,
    parse_currency_display,
    strip_tax_id,
)
from ccb_ops.models.enums import Modality, OperationStatus

FLAG_FIELDS = ("pendencia", "pendente_malote", "pendencia_regularizacao")


@dataclass
class OperationRecord:
    """Credit-instrument operation as persisted in ``ccb_operations``."""

    id: str
    user_id: str  # Owner (creating actor)
    pa: str  # Branch code
    produto: str
    limite: Decimal
    conta_corrente: str
    nome: str
    cpf_cnpj: str  # Digits only, 11 (CPF) or 14 (CNPJ)
    numero_ccb: str
    modalidade: Modality
    status: OperationStatus
    pendencia: bool = False
    pendente_malote: bool = False
    pendencia_regularizacao: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "OperationRecord":
        """Decode a store row, rejecting values outside the known vocabulary.

        Raises
        ------
        RecordDecodeError
            If a column is missing or holds an unknown enum value.
        """
        row_id = row.get("id")
        try:
            modalidade = Modality(row["modalidade"])
            status = OperationStatus(row["status"])
            limite = Decimal(str(row["limite"]))
            return cls(
                id=str(row_id),
                user_id=str(row["user_id"]),
                pa=row["pa"],
                produto=row["produto"],
                limite=limite,
                conta_corrente=row["conta_corrente"],
                nome=row["nome"],
                cpf_cnpj=row["cpf_cnpj"],
                numero_ccb=row["numero_ccb"],
                modalidade=modalidade,
                status=status,
                pendencia=bool(row.get("pendencia", False)),
                pendente_malote=bool(row.get("pendente_malote", False)),
                pendencia_regularizacao=bool(row.get("pendencia_regularizacao", False)),
                created_at=_parse_timestamp(row.get("created_at")),
            )
        except KeyError as e:
            raise RecordDecodeError(f"Operation {row_id} is missing column {e.args[0]}") from e
        except (ValueError, InvalidOperation) as e:
            raise RecordDecodeError(f"Operation {row_id} has an invalid value: {e}") from e

    def flags(self) -> dict[str, bool]:
        """Return the three independent flags."""
        return {name: getattr(self, name) for name in FLAG_FIELDS}


@dataclass
class OperationPayload:
    """Validated, canonical column values ready for the store."""

    pa: str
    produto: str
    limite: Decimal
    conta_corrente: str
    nome: str
    cpf_cnpj: str
    numero_ccb: str
    modalidade: Modality
    status: OperationStatus
    pendencia: bool
    pendente_malote: bool
    pendencia_regularizacao: bool

    def to_row(self) -> dict[str, Any]:
        """Convert to a store row with enum values as plain strings."""
        return {
            "pa": self.pa,
            "produto": self.produto,
            "limite": self.limite,
            "conta_corrente": self.conta_corrente,
            "nome": self.nome,
            "cpf_cnpj": self.cpf_cnpj,
            "numero_ccb": self.numero_ccb,
            "modalidade": self.modalidade.value,
            "status": self.status.value,
            "pendencia": self.pendencia,
            "pendente_malote": self.pendente_malote,
            "pendencia_regularizacao": self.pendencia_regularizacao,
        }


@dataclass
class OperationInput:
    """Operation form as entered by a person.

    ``limite`` holds the currency display string (``"1.234,56"``) and
    ``cpf_cnpj`` may carry separators.
    """

    pa: str = ""
    produto: str = ""
    limite: str = ""
    conta_corrente: str = ""
    nome: str = ""
    cpf_cnpj: str = ""
    numero_ccb: str = ""
    modalidade: Modality | str = Modality.CAPITAL_GIRO
    status: OperationStatus | str = OperationStatus.PENDENTE
    pendencia: bool = False
    pendente_malote: bool = False
    pendencia_regularizacao: bool = False

    @classmethod
    def from_record(cls, record: OperationRecord) -> "OperationInput":
        """Build the edit form for an existing record."""
        return cls(
            pa=record.pa,
            produto=record.produto,
            limite=format_currency(str(cents_of(record.limite))),
            conta_corrente=record.conta_corrente,
            nome=record.nome,
            cpf_cnpj=format_tax_id(record.cpf_cnpj),
            numero_ccb=record.numero_ccb,
            modalidade=record.modalidade,
            status=record.status,
            pendencia=record.pendencia,
            pendente_malote=record.pendente_malote,
            pendencia_regularizacao=record.pendencia_regularizacao,
        )

    def with_changes(self, **changes: Any) -> "OperationInput":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def _require(value: str, field_name: str, message: str, min_length: int = 1) -> str:
    text = (value or "").strip()
    if len(text) < min_length:
        raise ValidationError(field_name, message)
    return text


def _parse_limit(display: str) -> Decimal:
    text = _require(display, "limite", "Limite é obrigatório")
    try:
        amount = parse_currency_display(text)
    except ValueError as e:
        raise ValidationError("limite", "Limite inválido") from e
    if amount < 0:
        raise ValidationError("limite", "Limite não pode ser negativo")
    return amount


def validate_operation_input(form: OperationInput) -> OperationPayload:
    """Validate a form, failing on the first violated field.

    Fields are checked in form order: pa, produto, limite, conta_corrente,
    nome, cpf_cnpj, numero_ccb, modalidade, status.

    Parameters
    ----------
    form : OperationInput
        Form content.

    Returns
    -------
    OperationPayload
        Canonical values: Decimal limit, digits-only tax ID, enum members.

    Raises
    ------
    ValidationError
        For the first field that violates the schema.
    """
    pa = _require(form.pa, "pa", "PA é obrigatório")
    produto = _require(form.produto, "produto", "Produto é obrigatório")
    limite = _parse_limit(form.limite)
    conta_corrente = _require(form.conta_corrente, "conta_corrente", "Conta corrente é obrigatória")
    nome = _require(form.nome, "nome", "Nome é obrigatório", min_length=2)

    cpf_cnpj = strip_tax_id(form.cpf_cnpj)
    if not is_valid_tax_id_length(cpf_cnpj):
        raise ValidationError("cpf_cnpj", "CPF/CNPJ inválido")

    numero_ccb = _require(form.numero_ccb, "numero_ccb", "Número CCB é obrigatório")

    try:
        modalidade = Modality(form.modalidade)
    except ValueError as e:
        raise ValidationError("modalidade", "Modalidade inválida") from e
    try:
        status = OperationStatus(form.status)
    except ValueError as e:
        raise ValidationError("status", "Status inválido") from e

    return OperationPayload(
        pa=pa,
        produto=produto,
        limite=limite,
        conta_corrente=conta_corrente,
        nome=nome,
        cpf_cnpj=cpf_cnpj,
        numero_ccb=numero_ccb,
        modalidade=modalidade,
        status=status,
        pendencia=bool(form.pendencia),
        pendente_malote=bool(form.pendente_malote),
        pendencia_regularizacao=bool(form.pendencia_regularizacao),
    )


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))
