"""add pgvector embedding columns to properties

Revision ID: 20261019_001
Revises:
Create Date: 2026-10-19 09:00:00

"""
from alembic import op
import sqlalchemy as sa
from pgvector.sqlalchemy import Vector
from sqlalchemy import text

revision = '20261019_001'
down_revision = None
branch_labels = None
depends_on = None


def column_exists(table_name: str, column_name: str) -> bool:
    conn = op.get_bind()
    result = conn.execute(text(
        "SELECT EXISTS (SELECT FROM information_schema.columns "
        "WHERE table_name = :table AND column_name = :column)"
    ), {"table": table_name, "column": column_name})
    return result.scalar()


def index_exists(index_name: str) -> bool:
    conn = op.get_bind()
    result = conn.execute(text(
        "SELECT EXISTS (SELECT FROM pg_indexes WHERE indexname = :name)"
    ), {"name": index_name})
    return result.scalar()


def upgrade():
    # 1. pgvector extension
    op.execute('CREATE EXTENSION IF NOT EXISTS vector')

    # 2. Embedding columns (NULL until the first maintenance run)
    if not column_exists('properties', 'embedding'):
        op.add_column('properties', sa.Column('embedding', Vector(1536), nullable=True))
    if not column_exists('properties', 'embedded_at'):
        op.add_column('properties', sa.Column('embedded_at', sa.DateTime(timezone=True), nullable=True))
    if not column_exists('properties', 'embedding_hash'):
        op.add_column('properties', sa.Column('embedding_hash', sa.String(64), nullable=True))

    # 3. HNSW index for cosine distance
    if not index_exists('idx_properties_embedding_hnsw'):
        op.execute(text("""
            CREATE INDEX IF NOT EXISTS idx_properties_embedding_hnsw
            ON properties
            USING hnsw (embedding vector_cosine_ops)
            WITH (m = 16, ef_construction = 64)
        """))


def downgrade():
    op.execute('DROP INDEX IF EXISTS idx_properties_embedding_hnsw')
    op.drop_column('properties', 'embedding_hash')
    op.drop_column('properties', 'embedded_at')
    op.drop_column('properties', 'embedding')
