from abc import ABC, abstractmethod
from typing import List


class EmbeddingProvider(ABC):
    """
    Abstract interface for hosted embedding models.
    Lets the search core switch between OpenAI, a local model, etc. without
    touching business code.
    """

    @abstractmethod
    async def generate_embeddings(self, text: str) -> List[float]:
        """
        Returns the embedding vector for a text.

        Implementations let upstream errors propagate; validation of the
        returned vector happens in the embedding service.
        """

    async def close(self) -> None:
        """Releases network resources. Optional."""
        return None
