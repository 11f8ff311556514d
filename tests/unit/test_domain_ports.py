"""
Unit tests for domain ports, result values and exceptions.

Tests verify:
- Error kinds and their numeric codes
- Result success/failure construction and unwrap()
- Port interfaces are properly defined
- Domain purity (zero framework imports)
"""

import json
from enum import Enum
from pathlib import Path

import pytest

from src.domain.exceptions import OperationFailed, RegistryCorrupted, RegistryError
from src.domain.ports import Clock, ErrorKind, Ledger, Result

DOMAIN_DIR = Path(__file__).resolve().parents[2] / "src" / "domain"


class TestErrorKindEnum:
    """Tests for ErrorKind enum."""

    def test_error_kind_is_str_enum(self) -> None:
        """ErrorKind uses str mixin for JSON serialization."""
        assert issubclass(ErrorKind, Enum)
        assert issubclass(ErrorKind, str)
        assert json.dumps(ErrorKind.NOT_AUTHORIZED) == '"NOT_AUTHORIZED"'

    @pytest.mark.parametrize(
        ("kind", "code"),
        [
            (ErrorKind.NOT_AUTHORIZED, 100),
            (ErrorKind.INVALID_PSEUDONYM, 101),
            (ErrorKind.INVALID_PUBKEY, 102),
            (ErrorKind.INVALID_TIMESTAMP, 103),
            (ErrorKind.IDENTITY_ALREADY_EXISTS, 104),
            (ErrorKind.IDENTITY_NOT_FOUND, 105),
            (ErrorKind.INVALID_MAX_IDENTITIES, 106),
            (ErrorKind.MAX_IDENTITIES_EXCEEDED, 107),
            (ErrorKind.INVALID_METADATA, 109),
            (ErrorKind.AUTHORITY_NOT_VERIFIED, 110),
            (ErrorKind.INVALID_ATTRIBUTE, 111),
            (ErrorKind.INVALID_RECOVERY_KEY, 112),
        ],
    )
    def test_error_codes(self, kind: ErrorKind, code: int) -> None:
        """Each error kind exposes its stable numeric code."""
        assert kind.code == code

    def test_every_kind_has_a_unique_code(self) -> None:
        codes = [kind.code for kind in ErrorKind]
        assert len(codes) == len(set(codes))


class TestResult:
    """Tests for Result values."""

    def test_success_defaults_to_true(self) -> None:
        result = Result.success()
        assert result.ok is True
        assert result.value is True
        assert result.error is None

    def test_success_carries_value(self) -> None:
        assert Result.success(7).value == 7

    def test_failure_carries_error_kind(self) -> None:
        result = Result.failure(ErrorKind.IDENTITY_NOT_FOUND)
        assert result.ok is False
        assert result.error is ErrorKind.IDENTITY_NOT_FOUND

    def test_unwrap_returns_value_on_success(self) -> None:
        assert Result.success(3).unwrap() == 3

    def test_unwrap_raises_operation_failed(self) -> None:
        """unwrap() turns a failure into OperationFailed carrying the kind."""
        with pytest.raises(OperationFailed) as exc_info:
            Result.failure(ErrorKind.NOT_AUTHORIZED).unwrap()
        assert exc_info.value.kind is ErrorKind.NOT_AUTHORIZED
        assert "NOT_AUTHORIZED" in str(exc_info.value)

    def test_result_is_immutable(self) -> None:
        result = Result.success(1)
        with pytest.raises(AttributeError):
            result.ok = False  # type: ignore[misc]


class TestCollaboratorProtocols:
    """Tests for Ledger and Clock ports."""

    def test_ledger_has_transfer_method(self) -> None:
        assert hasattr(Ledger, "transfer")

    def test_clock_has_current_height_method(self) -> None:
        assert hasattr(Clock, "current_height")


class TestDomainExceptions:
    """Tests for domain exceptions."""

    def test_operation_failed_inherits_registry_error(self) -> None:
        assert issubclass(OperationFailed, RegistryError)

    def test_registry_corrupted_inherits_registry_error(self) -> None:
        assert issubclass(RegistryCorrupted, RegistryError)


class TestDomainPurity:
    """Tests for domain purity - zero framework imports."""

    @pytest.mark.parametrize("framework", ["fastapi", "pydantic", "pydantic_settings"])
    def test_no_framework_imports_in_domain(self, framework: str) -> None:
        """Domain layer imports no web or settings framework."""
        for source in DOMAIN_DIR.glob("*.py"):
            text = source.read_text()
            assert f"from {framework}" not in text, f"{framework} import in {source.name}"
            assert f"import {framework}" not in text, f"{framework} import in {source.name}"

    def test_no_wall_clock_reads_in_domain(self) -> None:
        """Domain layer never reads wall-clock time directly."""
        for source in DOMAIN_DIR.glob("*.py"):
            assert "import time" not in source.read_text(), source.name
