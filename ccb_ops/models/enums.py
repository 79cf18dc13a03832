"""Enumeration types for CCB operations."""

from enum import Enum


class _LabeledEnum(str, Enum):
    """String enum with a pt-BR display label per member."""

    @property
    def label(self) -> str:
        return self._labels()[self.value]

    @classmethod
    def _labels(cls) -> dict[str, str]:
        raise NotImplementedError

    @classmethod
    def parse(cls, raw: "str | _LabeledEnum") -> "_LabeledEnum":
        """Resolve a stored value or display label, case-insensitively.

        Raises
        ------
        ValueError
            If ``raw`` matches no member.
        """
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip().lower()
        for member in cls:
            if text in (member.value, member.label.lower()):
                return member
        raise ValueError(f"{raw!r} is not a valid {cls.__name__}")


class Modality(_LabeledEnum):
    CAPITAL_GIRO = "capital_giro"
    FINANCIAMENTO = "financiamento"
    EMPRESTIMO = "emprestimo"
    CREDITO_PESSOAL = "credito_pessoal"
    CONSIGNADO = "consignado"

    @classmethod
    def _labels(cls) -> dict[str, str]:
        return MODALITY_LABELS


class OperationStatus(_LabeledEnum):
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

    @classmethod
    def _labels(cls) -> dict[str, str]:
        return STATUS_LABELS


MODALITY_LABELS: dict[str, str] = {
    "capital_giro": "Capital de Giro",
    "financiamento": "Financiamento",
    "emprestimo": "Empréstimo",
    "credito_pessoal": "Crédito Pessoal",
    "consignado": "Consignado",
}

STATUS_LABELS: dict[str, str] = {
    "aberto": "Aberto",
    "pendente": "Pendente",
    "em_analise": "Em Análise",
    "aprovado": "Aprovado",
    "rejeitado": "Rejeitado",
    "cancelado": "Cancelado",
    "liquidado": "Liquidado",
    "prejuizo_quitado": "Prejuízo Quitado",
    "transferencia_prejuizo": "Transf. Prejuízo",
    "repactuado": "Repactuado",
}
