"""create resources table for the postgres data source

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:12:41.204117
"""
from typing import Sequence, Union

from alembic import op

from resource_lists.config import settings


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Same table PostgresDataSource queries (RESOURCE_LISTS_TABLE)
TABLE = settings.RESOURCES_TABLE


def upgrade() -> None:
    # One row per resource; body holds the whole serialized record
    op.execute(f"""
        CREATE TABLE {TABLE} (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            body JSONB NOT NULL,
            position BIGSERIAL,
            created_at TIMESTAMPTZ DEFAULT now(),
            updated_at TIMESTAMPTZ DEFAULT now(),
            PRIMARY KEY (collection, id)
        );
    """)

    # get_resources reads a collection in insertion order
    op.execute(f"""
        CREATE INDEX idx_{TABLE}_collection_position ON {TABLE}(collection, position);
    """)


def downgrade() -> None:
    op.execute(f"DROP TABLE IF EXISTS {TABLE} CASCADE;")
