"""Compression module: parameters, algorithm selection, and entry points."""

from ..algorithms.importance import DataType, ImportanceWeights
from .params import CompressionMethod, CompressionMode, CompressionParams
from .result import CompressionResult
from .selector import (
    DataCharacteristics,
    AlgorithmSelection,
    analyze_data_characteristics,
    score_methods,
    select_best_algorithm,
)
from .router import (
    compress,
    compress_data,
    compress_adaptive,
    compress_with_method,
)

__all__ = [
    # Parameters
    "CompressionMethod",
    "CompressionMode",
    "CompressionParams",
    "DataType",
    "ImportanceWeights",
    # Results
    "CompressionResult",
    # Selection
    "DataCharacteristics",
    "AlgorithmSelection",
    "analyze_data_characteristics",
    "score_methods",
    "select_best_algorithm",
    # Entry points
    "compress",
    "compress_data",
    "compress_adaptive",
    "compress_with_method",
]
