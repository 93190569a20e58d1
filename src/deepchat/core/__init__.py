"""deepchat core - response normalization and envelope handling."""

from deepchat.core.completion import (
    CompletionError,
    CompletionOutput,
    build_output,
    extract_message_content,
)
from deepchat.core.normalizer import ResponseNormalizer, normalize_response

__all__ = [
    "CompletionError",
    "CompletionOutput",
    "ResponseNormalizer",
    "build_output",
    "extract_message_content",
    "normalize_response",
]
