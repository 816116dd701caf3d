"""BaseService — foundation for setup-kced services.

Every service receives a :class:`Toolkit` at construction time; all network,
filesystem and runner access goes through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from setup_kced.config.settings import SetupSettings
    from setup_kced.infrastructure.toolkit import Toolkit


class BaseService:
    def __init__(self, toolkit: Toolkit) -> None:
        self._toolkit = toolkit

    @property
    def settings(self) -> SetupSettings:
        return self._toolkit.settings
