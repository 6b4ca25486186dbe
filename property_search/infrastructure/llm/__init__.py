from .interface import EmbeddingProvider
from .openai_provider import OpenAIEmbeddingProvider
from .factory import EmbeddingProviderFactory

__all__ = ["EmbeddingProvider", "OpenAIEmbeddingProvider", "EmbeddingProviderFactory"]
