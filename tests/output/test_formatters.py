"""Tests for the format_result dispatcher and OutputSettings."""

import json

from setup_kced.output.formatters import OutputSettings, format_result
from setup_kced.services.result import ServiceError, ServiceResult


def _ok(op: str = "resolve", **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


class TestOutputSettings:
    def test_defaults(self) -> None:
        s = OutputSettings()
        assert s.json_output is False
        assert s.quiet is False
        assert s.verbose is False


class TestFormatResult:
    def test_json_mode(self) -> None:
        output = format_result(_ok(version="1.7.0"), settings=OutputSettings(json_output=True))
        data = json.loads(output)
        assert data["ok"] is True
        assert data["data"]["version"] == "1.7.0"

    def test_json_mode_error(self) -> None:
        result = ServiceResult(
            ok=False, op="install", error=ServiceError(code="NO_RELEASES", message="none")
        )
        data = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert data["error"]["code"] == "NO_RELEASES"

    def test_json_beats_quiet(self) -> None:
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(_ok(version="1.7.0"), settings=settings))["ok"] is True

    def test_quiet_mode(self) -> None:
        settings = OutputSettings(quiet=True)
        assert format_result(_ok(version="1.7.0"), settings=settings) == "1.7.0"

    def test_default_is_human(self) -> None:
        assert "OK" in format_result(_ok(version="1.7.0"))
