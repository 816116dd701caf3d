"""Allow ``python -m setup_kced``."""

from setup_kced.cli import cli

if __name__ == "__main__":
    cli(prog_name="setup-kced")
