"""Tests for the composite action definition."""

import re
import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
ACTION = (ROOT / "action.yml").read_text(encoding="utf-8")


def _version_tuple(text: str) -> tuple[int, ...]:
    return tuple(int(part) for part in text.split("."))


class TestActionDefinition:
    def test_provisions_python_before_install(self) -> None:
        setup = ACTION.index("actions/setup-python@v5")
        assert setup < ACTION.index("pip install")
        assert setup < ACTION.index("-m setup_kced install")

    def test_python_satisfies_requires_python(self) -> None:
        pyproject = tomllib.loads((ROOT / "pyproject.toml").read_text(encoding="utf-8"))
        minimum = re.fullmatch(r">=\s*([\d.]+)", pyproject["project"]["requires-python"])
        assert minimum is not None
        match = re.search(r'python-version:\s*"([\d.]+)"', ACTION)
        assert match is not None
        assert _version_tuple(match.group(1)) >= _version_tuple(minimum.group(1))

    def test_installs_into_a_venv(self) -> None:
        """Never pip-install into the runner's externally managed system Python."""
        assert "-m venv" in ACTION
        assert "python3 -m pip" not in ACTION

    def test_passes_every_input(self) -> None:
        for name in ("kced-version", "token", "wrapper"):
            assert f"INPUT_{name.upper()}: ${{{{ inputs.{name} }}}}" in ACTION
