"""Domain models for CCB operations."""

from ccb_ops.models.actor import Actor, Identity, RoleInfo
from ccb_ops.models.enums import MODALITY_LABELS, STATUS_LABELS, Modality, OperationStatus
from ccb_ops.models.operation import (
    FLAG_FIELDS,
    OperationInput,
    OperationPayload,
    OperationRecord,
    validate_operation_input,
)

__all__ = [
    "Actor",
    "FLAG_FIELDS",
    "Identity",
    "MODALITY_LABELS",
    "Modality",
    "OperationInput",
    "OperationPayload",
    "OperationRecord",
    "OperationStatus",
    "RoleInfo",
    "STATUS_LABELS",
    "validate_operation_input",
]
