"""CCB operations: lifecycle tracking of credit-instrument records."""

__version__ = "0.1.0"
