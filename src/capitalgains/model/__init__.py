from .operations import (
    Operation,
    OperationType,
    operation_from_dict,
    parse_operations,
)

__all__ = [
    "Operation",
    "OperationType",
    "operation_from_dict",
    "parse_operations",
]
