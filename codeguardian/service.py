"""Transport-independent scan service.

Wraps the engine with request validation and builds the response envelopes
that a web or CLI front end serialises as-is. Engine faults never leak their
details into a response.
"""

import logging
from dataclasses import dataclass

from codeguardian import __version__
from codeguardian.config import DEFAULT_MAX_CODE_SIZE
from codeguardian.engine import ScanEngine, split_lines

logger = logging.getLogger(__name__)

SERVICE_NAME = "CodeGuardian Scanner"
SERVICE_VERSION = __version__


class ValidationError(ValueError):
    """Raised when a scan request is rejected before reaching the engine."""


@dataclass
class ScanRequest:
    code: str
    language: str | None = None
    filename: str | None = None


def _size_label(max_code_size: int) -> str:
    if max_code_size % 1_000_000 == 0:
        return f"{max_code_size // 1_000_000}MB"
    if max_code_size % 1_000 == 0:
        return f"{max_code_size // 1_000}KB"
    return f"{max_code_size} characters"


def validate_request(request: ScanRequest, max_code_size: int = DEFAULT_MAX_CODE_SIZE) -> None:
    if not isinstance(request.code, str) or not request.code.strip():
        raise ValidationError("Code content cannot be empty")
    if len(request.code) > max_code_size:
        raise ValidationError(f"Code content too large (max {_size_label(max_code_size)})")


class ScanService:
    def __init__(self, engine: ScanEngine | None = None, max_code_size: int = DEFAULT_MAX_CODE_SIZE):
        self.engine = engine or ScanEngine()
        self.max_code_size = max_code_size

    def scan(self, request: ScanRequest) -> dict:
        try:
            validate_request(request, self.max_code_size)
        except ValidationError as exc:
            return _validation_failure(exc)

        try:
            findings = self.engine.scan(request.code)
            summary = self.engine.summarize(findings)
        except Exception:
            logger.exception("Scan failed for %s", request.filename or "<request>")
            return {
                "success": False,
                "error": "Scan failed",
                "message": "Internal error during scan",
                "results": [],
            }

        return {
            "success": True,
            "results": [f.to_dict() for f in findings],
            "summary": summary.to_dict(),
            "message": "Scan completed successfully",
        }

    def validate(self, request: ScanRequest) -> dict:
        try:
            validate_request(request, self.max_code_size)
        except ValidationError as exc:
            return _validation_failure(exc)

        return {
            "success": True,
            "validation": {
                "is_valid": True,
                "line_count": len(split_lines(request.code)),
                "character_count": len(request.code),
                "language": request.language or "auto-detected",
            },
        }

    def rules(self) -> dict:
        return {
            "categories": self.engine.registry.groups(),
            "total_rules": len(self.engine.registry),
        }

    def health(self) -> dict:
        return {"status": "UP", "service": SERVICE_NAME, "version": SERVICE_VERSION}


def _validation_failure(exc: ValidationError) -> dict:
    return {
        "success": False,
        "error": "Request validation failed",
        "message": str(exc),
    }
