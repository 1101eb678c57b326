"""Structured exception classes for openapi-deref.

Schema resolution itself never raises; these exceptions cover the
surrounding tooling (document loading, configuration).
"""

import json
from typing import Any, Dict, Optional


class OpenAPIDerefError(Exception):
    """Root of the errors raised around a resolution pass.

    Carries a stable ``code`` so the CLI can print a machine-readable
    error line, plus free-form ``details`` such as the offending path
    or setting name.

    :param message: What went wrong, suitable for the terminal
    :param code: Stable identifier, defaults to the class name
    :param details: Extra context serialized alongside the message
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Return the ``{"error", "message", "details"}`` payload."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Serialize :meth:`to_dict` for the CLI error stream."""
        return json.dumps(self.to_dict())


class DocumentError(OpenAPIDerefError):
    """Raised when an OpenAPI document cannot be loaded.

    Covers missing files, invalid JSON and documents whose top level
    is not a mapping.

    :param message: Description of the loading failure
    :param path: Optional path of the offending document
    """

    def __init__(self, message: str, path: Optional[str] = None):
        """Initialize document error with message and optional path."""
        details = {}
        if path:
            details["path"] = path
        super().__init__(message=message, code="DOCUMENT_ERROR", details=details)
        self.path = path


class ConfigurationError(OpenAPIDerefError):
    """Raised for configuration-related errors.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)
