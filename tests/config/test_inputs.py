"""Tests for action input lookup."""

from setup_kced.config.inputs import input_env_name, read_input


class TestInputEnvName:
    def test_hyphens_kept(self) -> None:
        assert input_env_name("kced-version") == "INPUT_KCED-VERSION"

    def test_spaces_become_underscores(self) -> None:
        assert input_env_name("my input") == "INPUT_MY_INPUT"


class TestReadInput:
    def test_reads_and_trims(self) -> None:
        assert read_input("kced-version", {"INPUT_KCED-VERSION": " 0.1.11\n"}) == "0.1.11"

    def test_missing_is_empty(self) -> None:
        assert read_input("token", {}) == ""
