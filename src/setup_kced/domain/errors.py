"""Exception hierarchy shared by every layer.

Services translate these into :class:`~setup_kced.services.result.ServiceError`
codes; nothing above the service layer catches them directly.
"""

from __future__ import annotations


class SetupKcedError(Exception):
    """Base class for all setup-kced failures."""

    code = "SETUP_FAILED"


class InvalidVersionError(SetupKcedError):
    """The requested or discovered version is not a usable semantic version."""

    code = "INVALID_VERSION"

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid version provided: '{raw}'")
        self.raw = raw


class NoReleasesError(SetupKcedError):
    """The releases listing came back empty."""

    code = "NO_RELEASES"

    def __init__(self, owner: str, repo: str) -> None:
        super().__init__(f"No releases found in {owner.lower()}/{repo.lower()}")
        self.owner = owner
        self.repo = repo
