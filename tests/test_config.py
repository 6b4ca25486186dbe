import pytest

from property_search.config import Settings


@pytest.mark.parametrize(
    "url, expected",
    [
        ("postgresql://u:p@db:5432/app", "postgresql+asyncpg://u:p@db:5432/app"),
        ("postgres://u:p@db:5432/app", "postgresql+asyncpg://u:p@db:5432/app"),
        ("postgresql+asyncpg://u:p@db:5432/app", "postgresql+asyncpg://u:p@db:5432/app"),
    ],
)
def test_database_url_is_rewritten_for_asyncpg(url, expected):
    assert Settings(database_url=url).async_database_url == expected


def test_embedding_model_default():
    assert Settings().embedding_model == "text-embedding-3-small"


def test_embedding_width_is_not_configurable(monkeypatch):
    # The width is fixed by the vector column; an env override must not leak in
    monkeypatch.setenv("EMBEDDING_DIMENSIONS", "768")

    assert not hasattr(Settings(), "embedding_dimensions")


def test_environment_flags():
    assert Settings(environment="development").is_development
    assert not Settings(environment="production").is_development
    assert not Settings(environment="test").is_development
