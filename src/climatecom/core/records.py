"""Normalize API response bodies into lists of records.

List endpoints don't agree on a response shape. A body may wrap its records
in a `results` or `data` envelope, be a bare JSON array, or be a single
object. Each shape decodes to the same list of records.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EnvelopeKind(Enum):
    RESULTS = "results"
    DATA = "data"
    SEQUENCE = "sequence"
    SINGLE = "single"


@dataclass(frozen=True)
class Envelope:
    kind: EnvelopeKind
    records: list[Any] = field(default_factory=list)


def decode_envelope(body: Any) -> Envelope:
    """Classify a response body and pull out its records."""
    if isinstance(body, dict):
        for kind in (EnvelopeKind.RESULTS, EnvelopeKind.DATA):
            wrapped = body.get(kind.value)
            if isinstance(wrapped, list):
                return Envelope(kind, list(wrapped))
        return Envelope(EnvelopeKind.SINGLE, [body])
    if isinstance(body, list):
        return Envelope(EnvelopeKind.SEQUENCE, list(body))
    if body is None:
        return Envelope(EnvelopeKind.SEQUENCE, [])
    return Envelope(EnvelopeKind.SINGLE, [body])


def extract_records(body: Any) -> list[Any]:
    """Get the list of records from a response body."""
    return decode_envelope(body).records
