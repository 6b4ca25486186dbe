"""
Search core errors.

Each error records the stage that failed so the API layer can log and map
it without inspecting messages. An empty result is never an error.
"""


class SearchCoreError(Exception):
    """Base class for failures inside the search core."""

    stage = "unknown"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SearchValidationError(SearchCoreError):
    """Query text too short or a malformed filter. Client error, do not retry."""

    stage = "validation"


class EmbeddingServiceError(SearchCoreError):
    """Embedding model unreachable or returned unusable output. Retry with backoff."""

    stage = "embedding"


class StorageError(SearchCoreError):
    """Query execution failed (bad SQL, lost connection)."""

    stage = "storage"
