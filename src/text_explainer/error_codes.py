"""Structured error codes for machine-readable error handling.

Error codes follow the format: {DOMAIN}-{CATEGORY}-{NUMBER}

Error Domains:
    CFG - Configuration errors
    LLM - Completion endpoint errors
    SEL - Selection capture errors
    DOC - Document relocation errors
    NOTE - Note creation errors
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes for machine-readable handling.

    All error codes inherit from str for JSON serialization compatibility.
    """

    CFG_INVALID = "CFG-INVALID-001"
    """Settings failed validation."""

    CFG_PARSE = "CFG-PARSE-001"
    """Settings file could not be parsed."""

    LLM_AUTH_MISSING = "LLM-AUTH-001"
    """No API key configured."""

    LLM_HTTP_STATUS = "LLM-HTTP-001"
    """Endpoint returned a non-success HTTP status."""

    LLM_EMPTY_RESPONSE = "LLM-EMPTY-001"
    """Response payload lacked choices[0].message."""

    LLM_CONNECTION = "LLM-CONN-001"
    """Endpoint could not be reached."""

    SEL_EMPTY = "SEL-EMPTY-001"
    """No text selected."""

    DOC_NOT_FOUND = "DOC-NOTFOUND-001"
    """Selection could not be relocated in the document."""

    NOTE_CREATE_FAILED = "NOTE-CREATE-001"
    """Storage backend failed while writing a note."""
