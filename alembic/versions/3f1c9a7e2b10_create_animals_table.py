"""Create animals table

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-17 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from src.infrastructure.db.orm.animal import StringList


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """One row per animal; the ledger lives in the JSON history column."""
    op.create_table(
        'animals',
        sa.Column('owner_id', sa.String(length=128), nullable=False),
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('tag_number', sa.String(length=128), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('farm', sa.String(length=32), nullable=False),
        sa.Column('insemination_date', sa.Date(), nullable=True),
        sa.Column('semen_name', sa.String(length=255), nullable=True),
        sa.Column('expected_calving_date', sa.Date(), nullable=True),
        sa.Column('calving_date', sa.Date(), nullable=True),
        sa.Column('mother_id', sa.String(length=64), nullable=True),
        sa.Column('calves_ids', StringList(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('medications', sa.Text(), nullable=True),
        sa.Column('image', sa.String(length=1024), nullable=True),
        sa.Column('images', StringList(), nullable=False),
        sa.Column('last_updated', sa.DateTime(timezone=True), nullable=False),
        sa.Column('history', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('owner_id', 'id'),
    )
    op.create_index('ix_animals_owner_tag', 'animals', ['owner_id', 'tag_number'], unique=False)
    op.create_index('ix_animals_last_updated', 'animals', ['last_updated'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_animals_last_updated', table_name='animals')
    op.drop_index('ix_animals_owner_tag', table_name='animals')
    op.drop_table('animals')
