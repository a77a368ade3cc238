"""Unit tests for the exception hierarchy."""

import pytest

from app.exceptions import (
    AssetLoadError,
    DocumentExportError,
    GenerationError,
    InputValidationError,
    MeasurementError,
    StorageError,
)


class TestDocumentExportError:
    def test_base_error_attributes(self):
        err = DocumentExportError("Something failed", error_code="ERR_TEST", details={"key": "value"})
        assert err.message == "Something failed"
        assert err.error_code == "ERR_TEST"
        assert err.details == {"key": "value"}
        assert str(err) == "Something failed"

    def test_base_error_defaults(self):
        err = DocumentExportError("Minimal error")
        assert err.error_code == "ERR_UNKNOWN"
        assert err.details is None


@pytest.mark.parametrize(
    "cls, code",
    [
        (AssetLoadError, "ERR_ASSET_001"),
        (MeasurementError, "ERR_MEASURE_001"),
        (GenerationError, "ERR_GEN_001"),
        (StorageError, "ERR_STORE_001"),
        (InputValidationError, "ERR_INPUT_001"),
    ],
)
def test_subclass_error_codes(cls, code):
    err = cls("failed", details={"k": 1})
    assert err.error_code == code
    assert err.details == {"k": 1}
    assert isinstance(err, DocumentExportError)


def test_catchable_as_base():
    with pytest.raises(DocumentExportError):
        raise GenerationError("boom")
