"""
Custom exception hierarchy for the document export service.
Each layer raises an error carrying a structured error code and message.
"""

from typing import Optional, Any


class DocumentExportError(Exception):
    """Base exception for the document export service."""

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class AssetLoadError(DocumentExportError):
    """A logo or background image could not be read or decoded."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_ASSET_001", details=details)


class MeasurementError(DocumentExportError):
    """A raster surface or measuring context is unavailable."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_MEASURE_001", details=details)


class GenerationError(DocumentExportError):
    """Layout or drawing failed; the document is discarded."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_GEN_001", details=details)


class StorageError(DocumentExportError):
    """The finished document could not be persisted."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_STORE_001", details=details)


class InputValidationError(DocumentExportError):
    """Caller input rejected before generation (400 response)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_INPUT_001", details=details)
