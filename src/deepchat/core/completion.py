"""
Completion envelope handling.

Takes the body of a chat-completion response, pulls out the assistant
message and runs it through the normalizer. The normalized text becomes
the ``response``; the envelope itself is kept untouched as ``raw``.
"""

import json
from dataclasses import dataclass
from typing import Any

from deepchat.core.normalizer import ResponseNormalizer


class CompletionError(Exception):
    """Raised when a completion envelope is an error or cannot be read."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class CompletionOutput:
    """Output of a chat completion."""

    response: str | None
    raw: str


def extract_message_content(body: dict[str, Any] | str) -> str | None:
    """
    Extract the assistant message from a completion envelope.

    Path: ``choices`` -> first element -> ``message`` -> ``content``.

    Args:
        body: Response envelope as a dict or as JSON text

    Returns:
        Message content as text, or None if the model returned null

    Raises:
        CompletionError if the body is not JSON or the path is missing
    """
    envelope = _load_envelope(body)

    try:
        message = envelope["choices"][0]["message"]
        content = message["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise CompletionError(f"Malformed completion envelope: missing {e}") from e

    if content is None or isinstance(content, str):
        return content
    return json.dumps(content)


def build_output(
    body: dict[str, Any] | str,
    schema_hint: str | None = None,
    status_code: int = 200,
    normalizer: ResponseNormalizer | None = None,
) -> CompletionOutput:
    """
    Build the completion output from a response envelope.

    Args:
        body: Response envelope as a dict or as JSON text
        schema_hint: JSON Schema string the request was made with
        status_code: HTTP status of the completion response
        normalizer: Normalizer to use (defaults to a structural one)

    Returns:
        CompletionOutput with the normalized response and the raw envelope

    Raises:
        CompletionError on error statuses or unreadable envelopes
    """
    raw = body if isinstance(body, str) else json.dumps(body, separators=(",", ":"))

    if status_code >= 400:
        raise CompletionError(f"DeepSeek API error: {raw}", status_code=status_code)

    normalizer = normalizer or ResponseNormalizer()
    content = extract_message_content(body)

    return CompletionOutput(
        response=normalizer.normalize(content, schema_hint),
        raw=raw,
    )


def _load_envelope(body: dict[str, Any] | str) -> Any:
    if not isinstance(body, str):
        return body
    try:
        return json.loads(body)
    except ValueError as e:
        raise CompletionError(f"Completion envelope is not valid JSON: {e}") from e
