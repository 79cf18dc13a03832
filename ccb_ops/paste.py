"""Parse spreadsheet clipboard data into operation fields.

Two interpretations are tried, in order:

1. Label/value pairs: every line with at least two tab-separated cells is
   read as ``label<TAB>value`` and the label is matched against
   ``LABEL_KEYWORDS``.
2. Single row: only when no label matched, the input is a single line and
   it has at least seven cells, the cells are assigned by position to
   ``POSITIONAL_FIELDS``.

The parser never raises; an empty result means the format was not
recognized.
"""

import logging

from ccb_ops.formatting import format_currency, format_tax_id, parse_flag
from ccb_ops.models.enums import Modality, OperationStatus
from ccb_ops.models.operation import OperationInput

logger = logging.getLogger(__name__)

# Evaluated top to bottom, first match wins. Reordering changes the result
# for labels that contain several keywords.
LABEL_KEYWORDS: list[tuple[str, str]] = [
    ("pa", "pa"),
    ("produto", "produto"),
    ("limite", "limite"),
    ("conta", "conta_corrente"),
    ("corrente", "conta_corrente"),
    ("nome", "nome"),
    ("cpf", "cpf_cnpj"),
    ("cnpj", "cpf_cnpj"),
    ("ccb", "numero_ccb"),
    ("número", "numero_ccb"),
    ("modalidade", "modalidade"),
    ("status", "status"),
    ("pendência", "pendencia"),
    ("pendencia", "pendencia"),
]

POSITIONAL_FIELDS: tuple[str, ...] = (
    "pa",
    "produto",
    "limite",
    "conta_corrente",
    "nome",
    "cpf_cnpj",
    "numero_ccb",
)

# Text fields copied verbatim from a parsed map onto a form
_TEXT_FIELDS = ("pa", "produto", "conta_corrente", "nome", "numero_ccb")


def match_label(label: str) -> str | None:
    """Return the field a label refers to, or None."""
    key = label.strip().lower()
    for keyword, field_name in LABEL_KEYWORDS:
        if keyword in key:
            return field_name
    return None


def _parse_label_pairs(rows: list[list[str]]) -> dict[str, str]:
    result: dict[str, str] = {}
    for cells in rows:
        if len(cells) < 2:
            continue
        field_name = match_label(cells[0])
        if field_name is not None:
            result[field_name] = cells[1].strip()
    return result


def _parse_single_row(rows: list[list[str]]) -> dict[str, str]:
    if len(rows) != 1 or len(rows[0]) < len(POSITIONAL_FIELDS):
        return {}
    cells = rows[0]
    return {name: cells[i].strip() for i, name in enumerate(POSITIONAL_FIELDS)}


def parse_pasted_text(text: str) -> dict[str, str]:
    """Convert pasted tabular text into a map of raw field values.

    Parameters
    ----------
    text : str
        Clipboard content copied from a spreadsheet.

    Returns
    -------
    dict[str, str]
        Field name to raw (unnormalized) value. Empty when nothing was
        recognized.
    """
    lines = text.strip().split("\n")
    rows = [line.split("\t") for line in lines]

    result = _parse_label_pairs(rows)
    if result:
        logger.debug("Paste parsed as label/value pairs: %s", sorted(result))
        return result

    result = _parse_single_row(rows)
    if result:
        logger.debug("Paste parsed as a single positional row")
    return result


def apply_pasted_fields(form: OperationInput, fields: dict[str, str]) -> OperationInput:
    """Merge parsed paste values into a form.

    Empty values keep the form's current content. Currency and CPF/CNPJ are
    normalized for display, modality and status are applied only when they
    name a known value, and the pending-issue flag is coerced from text.
    """
    changes: dict = {}
    for name in _TEXT_FIELDS:
        if fields.get(name):
            changes[name] = fields[name]

    if fields.get("limite"):
        changes["limite"] = format_currency(fields["limite"])
    if fields.get("cpf_cnpj"):
        changes["cpf_cnpj"] = format_tax_id(fields["cpf_cnpj"])

    if fields.get("modalidade"):
        try:
            changes["modalidade"] = Modality.parse(fields["modalidade"])
        except ValueError:
            logger.debug("Ignoring unknown pasted modality %r", fields["modalidade"])
    if fields.get("status"):
        try:
            changes["status"] = OperationStatus.parse(fields["status"])
        except ValueError:
            logger.debug("Ignoring unknown pasted status %r", fields["status"])

    changes["pendencia"] = parse_flag(fields.get("pendencia")) or form.pendencia
    return form.with_changes(**changes)
