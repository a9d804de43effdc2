# mtran_client/translators/base.py
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from mtran_client.config_management import ServerConfigLike


class Translator(ABC):
    """Abstract base class for all translator implementations."""

    def __init__(
        self,
        config: dict,
    ):
        self.config = config.get("translation", {})

    @abstractmethod
    async def check_api(self, server: ServerConfigLike = None) -> bool:
        """Performs a health check on the translation service."""

    @abstractmethod
    async def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str = "auto",
        *,
        detect: Optional[str] = None,
        server: ServerConfigLike = None,
    ) -> str:
        """Translates a single string of text."""

    @abstractmethod
    async def translate_batch(
        self,
        texts: Sequence[str],
        target_lang: str,
        source_lang: str = "auto",
        *,
        detect: Optional[str] = None,
        server: ServerConfigLike = None,
    ) -> list[str]:
        """Translates a list of strings."""
