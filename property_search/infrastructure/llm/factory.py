import logging

from property_search.config import Settings
from .interface import EmbeddingProvider
from .openai_provider import OpenAIEmbeddingProvider

logger = logging.getLogger(__name__)


class EmbeddingProviderFactory:
    """
    Builds embedding provider instances. The caller owns the instance:
    nothing is cached here.
    """

    @staticmethod
    def create(settings: Settings, provider_type: str = "openai") -> EmbeddingProvider:
        """
        Returns a new provider of the requested type.
        Only 'openai' is supported for now.
        """
        if provider_type.lower() == "openai":
            logger.info(f"Initialising OpenAI embedding provider ({settings.embedding_model})")
            return OpenAIEmbeddingProvider.from_settings(settings)

        raise ValueError(f"Unknown embedding provider: {provider_type}")
