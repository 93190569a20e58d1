"""Response Normalizer - Repair JSON Mode output against a schema hint."""

from deepchat.core.normalizer.normalizer import (
    NormalizerResult,
    ResponseNormalizer,
    normalize_response,
)
from deepchat.core.normalizer.schema_hint import expects_array

__all__ = ["NormalizerResult", "ResponseNormalizer", "expects_array", "normalize_response"]
