# src/node_dataflow/normalization/__init__.py
"""
Normalização de metadados: operações elementares e o interpretador da
cadeia de operações usado pelo `NormalizeMetadataProcessor`.
"""

from .engine import NormalizationEngine, OperationDescriptor, parse_operations

__all__ = ["NormalizationEngine", "OperationDescriptor", "parse_operations"]
