"""Sample data generators for CCB operations."""

from ccb_ops.generators.operation import OperationGenerator, generate_cnpj, generate_cpf

__all__ = ["OperationGenerator", "generate_cnpj", "generate_cpf"]
