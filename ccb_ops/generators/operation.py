"""Sample CCB operation forms for seeding and tests."""

from __future__ import annotations

import random
from decimal import Decimal
from typing import Iterator

from ccb_ops.auth import PA_OPTIONS
from ccb_ops.formatting import cents_of, format_currency, format_tax_id
from ccb_ops.generators.base import BaseGenerator
from ccb_ops.models.enums import Modality, OperationStatus
from ccb_ops.models.operation import OperationInput


def _check_digit(digits: list[int], weights: list[int]) -> int:
    total = sum(d * w for d, w in zip(digits, weights))
    digit = 11 - (total % 11)
    return 0 if digit >= 10 else digit


def generate_cpf(rng: random.Random | None = None) -> str:
    """Generate a valid Brazilian CPF (11 digits, unformatted)."""
    rng = rng or random.Random()
    digits = [rng.randint(0, 9) for _ in range(9)]
    digits.append(_check_digit(digits, list(range(10, 1, -1))))
    digits.append(_check_digit(digits, list(range(11, 1, -1))))
    return "".join(str(d) for d in digits)


def generate_cnpj(rng: random.Random | None = None) -> str:
    """Generate a valid Brazilian CNPJ (14 digits, unformatted, head office)."""
    rng = rng or random.Random()
    digits = [rng.randint(0, 9) for _ in range(8)] + [0, 0, 0, 1]
    digits.append(_check_digit(digits, [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]))
    digits.append(_check_digit(digits, [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]))
    return "".join(str(d) for d in digits)


class OperationGenerator(BaseGenerator):
    """Generate valid operation forms with realistic pt-BR data."""

    MODALITIES = list(Modality)
    MODALITY_WEIGHTS = [0.30, 0.15, 0.20, 0.15, 0.20]

    STATUSES = list(OperationStatus)
    STATUS_WEIGHTS = [0.25, 0.15, 0.10, 0.15, 0.05, 0.05, 0.15, 0.03, 0.02, 0.05]

    # Modalities granted to companies (CNPJ holders)
    COMPANY_MODALITIES = frozenset({Modality.CAPITAL_GIRO, Modality.FINANCIAMENTO})

    # Limit ranges by modality (BRL)
    LIMIT_RANGES = {
        Modality.CAPITAL_GIRO: (20_000, 500_000),
        Modality.FINANCIAMENTO: (30_000, 800_000),
        Modality.EMPRESTIMO: (5_000, 150_000),
        Modality.CREDITO_PESSOAL: (1_000, 50_000),
        Modality.CONSIGNADO: (2_000, 120_000),
    }

    PRODUCTS = {
        Modality.CAPITAL_GIRO: ["Capital de Giro Pré", "Capital de Giro Pós", "Giro Rotativo"],
        Modality.FINANCIAMENTO: ["Financiamento de Veículos", "Financiamento de Máquinas", "Crédito Rural"],
        Modality.EMPRESTIMO: ["Empréstimo com Garantia", "Empréstimo Parcelado"],
        Modality.CREDITO_PESSOAL: ["Crédito Pessoal Pré-Aprovado", "Crédito Pessoal Parcelado"],
        Modality.CONSIGNADO: ["Consignado INSS", "Consignado Público", "Consignado Privado"],
    }

    def generate(self) -> OperationInput:
        """Generate a single operation form.

        Returns
        -------
        OperationInput
            Form that passes validation.
        """
        return self._generate_one()

    def generate_batch(self, count: int) -> Iterator[OperationInput]:
        """Generate multiple operation forms.

        Parameters
        ----------
        count : int
            Number of forms to generate.

        Yields
        ------
        OperationInput
            Generated forms.
        """
        for _ in range(count):
            yield self._generate_one()

    def _generate_one(self) -> OperationInput:
        modality = self.rng.choices(self.MODALITIES, weights=self.MODALITY_WEIGHTS, k=1)[0]
        status = self.rng.choices(self.STATUSES, weights=self.STATUS_WEIGHTS, k=1)[0]

        is_company = modality in self.COMPANY_MODALITIES and self.rng.random() < 0.6
        if is_company:
            holder = self.fake.company()
            tax_id = generate_cnpj(self.rng)
        else:
            holder = self.fake.name()
            tax_id = generate_cpf(self.rng)

        low, high = self.LIMIT_RANGES[modality]
        limit = Decimal(self.rng.randint(low * 100, high * 100)) / 100

        return OperationInput(
            pa=self.rng.choice(PA_OPTIONS),
            produto=self.rng.choice(self.PRODUCTS[modality]),
            limite=format_currency(str(cents_of(limit))),
            conta_corrente=f"{self.rng.randint(10000, 999999)}-{self.rng.randint(0, 9)}",
            nome=holder,
            cpf_cnpj=format_tax_id(tax_id),
            numero_ccb=f"{self.fake.date_this_decade().year}{self.rng.randint(1, 999999):06d}",
            modalidade=modality,
            status=status,
            pendencia=self.rng.random() < 0.10,
            pendente_malote=self.rng.random() < 0.15,
            pendencia_regularizacao=self.rng.random() < 0.08,
        )
