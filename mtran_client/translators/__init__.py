from typing import Optional

from mtran_client.logger import Logger
from mtran_client.transport import Transport
from mtran_client.translators.base import Translator
from mtran_client.translators.mtran_translator import MTranTranslator

# A mapping of provider names (from config) to their classes
TRANSLATOR_PROVIDERS = {
    "mtran": MTranTranslator,
}


def translator_factory(
    logger: Logger, config: dict, transport: Optional[Transport] = None
) -> Translator:
    """Creates a translator instance based on the application config."""
    provider = config.get("translation", {}).get("provider", "mtran").lower()
    translator_cls = TRANSLATOR_PROVIDERS.get(provider)

    if translator_cls is None:
        logger.error(
            f"Unknown translator provider '{provider}'. Defaulting to MTranTranslator."
        )
        translator_cls = MTranTranslator
    else:
        logger.info(f"Initializing translator with provider: '{provider}'")

    return translator_cls(config, logger, transport)
