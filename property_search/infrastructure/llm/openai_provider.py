import logging
from typing import List, Optional
from openai import AsyncOpenAI

from property_search.config import Settings
from property_search.domain.entities import EMBEDDING_DIMENSIONS
from .interface import EmbeddingProvider

logger = logging.getLogger(__name__)


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """
    Embedding provider backed by the official OpenAI client.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-3-small",
        dimensions: int = EMBEDDING_DIMENSIONS,
        timeout: float = 20.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.dimensions = dimensions
        # max_retries=0: retry policy belongs to the caller
        self.client = client or AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIEmbeddingProvider":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
            dimensions=EMBEDDING_DIMENSIONS,
            timeout=settings.embedding_timeout_seconds,
        )

    async def generate_embeddings(self, text: str) -> List[float]:
        """Generates an embedding through the OpenAI API."""
        try:
            response = await self.client.embeddings.create(
                input=text,
                model=self.model,
                dimensions=self.dimensions,
            )
            return response.data[0].embedding
        except Exception as e:
            logger.error(f"OpenAI embeddings call failed: {e}")
            raise

    async def close(self) -> None:
        await self.client.close()
