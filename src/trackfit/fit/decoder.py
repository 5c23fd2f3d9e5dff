"""
FIT decoder: turns the raw bytes of a .fit upload into ActivityRecords.

fitparse validates the file header on open and the trailing CRC while it
reads the message stream. Those two failures (a body cut short counts as a
failed integrity check) are the only user-facing errors of the
upload pipeline, so they get their own exception types with the plain
messages shown to the user:

  NotAFitFileError   → "Not a valid FIT file."
  FitIntegrityError  → "FIT file failed integrity check."

Callers must not run the geometry builder when decode_fit() raises.
"""
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import fitparse
from fitparse.utils import FitCRCError, FitEOFError, FitHeaderError
from fitparse.utils import FitParseError as _FitparseError

from trackfit.fit.records import (
    ActivityRecord,
    SessionSummary,
    record_from_values,
    session_from_values,
)

logger = logging.getLogger(__name__)


class FitDecodeError(Exception):
    """Raised when a FIT file cannot be decoded."""


class NotAFitFileError(FitDecodeError):
    """The bytes do not start with a FIT file header."""

    def __init__(self, message: str = "Not a valid FIT file."):
        super().__init__(message)


class FitIntegrityError(FitDecodeError):
    """The FIT file CRC does not match its contents."""

    def __init__(self, message: str = "FIT file failed integrity check."):
        super().__init__(message)


@dataclass
class DecodedFit:
    """Messages pulled out of one FIT file."""

    records: List[ActivityRecord] = field(default_factory=list)
    sessions: List[SessionSummary] = field(default_factory=list)


def decode_fit(data: bytes, check_crc: bool = True) -> DecodedFit:
    """
    Decode FIT bytes into record and session messages.

    Args:
        data: Raw contents of a .fit file.
        check_crc: Verify the file CRC (disable only for known-truncated files).

    Returns:
        DecodedFit with records in file order. A valid file with no
        'record' messages yields an empty records list, not an error.

    Raises:
        NotAFitFileError: the header is missing, short or malformed.
        FitIntegrityError: the CRC check failed or the body is truncated.
        FitDecodeError: any other decoding failure (e.g. a data message
            with no preceding definition).
    """
    # FitFile reads the file header on open: running out of bytes there means
    # there is no complete header, running out later means a truncated body.
    try:
        fit = fitparse.FitFile(io.BytesIO(data), check_crc=check_crc)
    except (FitHeaderError, FitEOFError) as exc:
        raise NotAFitFileError() from exc

    try:
        records = [record_from_values(m.get_values()) for m in fit.get_messages("record")]
        sessions = [session_from_values(m.get_values()) for m in fit.get_messages("session")]
    except (FitCRCError, FitEOFError) as exc:
        raise FitIntegrityError() from exc
    except _FitparseError as exc:
        raise FitDecodeError(f"Failed to decode FIT file: {exc}") from exc

    logger.debug("Decoded %d record and %d session messages", len(records), len(sessions))
    return DecodedFit(records=records, sessions=sessions)


def read_fit_file(path: Path, check_crc: bool = True) -> DecodedFit:
    """Decode a .fit file from disk. Raises FitDecodeError if it doesn't exist."""
    if not path.exists():
        raise FitDecodeError(f"FIT file not found: {path}")
    return decode_fit(path.read_bytes(), check_crc=check_crc)
