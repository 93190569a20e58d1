"""
Response Normalizer - Bracket-level repair of JSON Mode output.

DeepSeek's JSON Mode is best-effort. When the caller's schema asks for a
top-level array, the model still sometimes answers with a bare object, or a
comma-joined list of objects missing one or both brackets.

Flow (first match wins):
1. No array expected -> return content unchanged
2. Starts with '[' -> trusted as an array, unchanged
3. Single {...} object -> wrap in one bracket pair
4. Parses as a JSON object -> wrap in one bracket pair
5. Ends with ']' but no '[' -> prepend '['
6. Fallback -> force both brackets

Known limitation: step 6 only forces bracket presence. Missing commas
between concatenated objects and broken interior structure are left for the
downstream parser to reject.
"""

import json
import logging
from dataclasses import dataclass

from deepchat.core.normalizer.schema_hint import expects_array

logger = logging.getLogger(__name__)


@dataclass
class NormalizerResult:
    """Result of a normalization pass."""

    content: str | None
    expect_array: bool = False
    repairs_applied: list[str] | None = None


class ResponseNormalizer:
    """
    Normalize raw model responses when the schema hint expects an array.

    Stateless: instances hold only the hint-sniffing mode and can be shared
    freely between threads.
    """

    def __init__(self, structural_hint: bool = True) -> None:
        self.structural_hint = structural_hint

    def normalize(self, content: str | None, schema_hint: str | None = None) -> str | None:
        """
        Normalize a raw model response.

        Args:
            content: Raw text returned by the model (may be malformed or None)
            schema_hint: JSON Schema string provided by the user (may be None)

        Returns:
            Normalized content, or the input unchanged if no repair applies
        """
        return self.repair(content, schema_hint).content

    def repair(self, content: str | None, schema_hint: str | None = None) -> NormalizerResult:
        """
        Normalize a raw model response and report which repairs were made.

        Args:
            content: Raw text returned by the model (may be malformed or None)
            schema_hint: JSON Schema string provided by the user (may be None)

        Returns:
            NormalizerResult with the normalized content
        """
        if content is None:
            return NormalizerResult(content=None)

        if not expects_array(schema_hint, structural=self.structural_hint):
            return NormalizerResult(content=content)

        trimmed = content.strip()

        if trimmed.startswith("["):
            return NormalizerResult(content=content, expect_array=True)

        if trimmed.startswith("{") and trimmed.endswith("}"):
            return self._result("[" + content + "]", ["wrapped_object"])

        if self._parses_as_object(trimmed):
            return self._result("[" + content + "]", ["wrapped_parsed_object"])

        if trimmed.endswith("]"):
            return self._result("[" + content, ["prepended_open_bracket"])

        # Fallback: ensure both brackets exist
        repaired = content
        repairs: list[str] = []
        if not trimmed.startswith("["):
            repaired = "[" + repaired
            repairs.append("prepended_open_bracket")
        if not repaired.strip().endswith("]"):
            repaired = repaired + "]"
            repairs.append("appended_close_bracket")

        return self._result(repaired, repairs)

    def _parses_as_object(self, text: str) -> bool:
        """Exploratory parse; failures fall through to the next heuristic."""
        try:
            return isinstance(json.loads(text), dict)
        except (ValueError, RecursionError):
            return False

    def _result(self, content: str, repairs: list[str]) -> NormalizerResult:
        logger.debug(f"Array expected, applied repairs: {repairs}")
        return NormalizerResult(
            content=content,
            expect_array=True,
            repairs_applied=repairs or None,
        )


_default_normalizer = ResponseNormalizer()


def normalize_response(content: str | None, schema_hint: str | None = None) -> str | None:
    """Normalize ``content`` against ``schema_hint`` with the default normalizer."""
    return _default_normalizer.normalize(content, schema_hint)
