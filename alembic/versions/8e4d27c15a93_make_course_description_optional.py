"""Make course description optional

Revision ID: 8e4d27c15a93
Revises: 3f1c9a2b7d40
Create Date: 2026-10-14 17:02:51.220915

"""
from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision = '8e4d27c15a93'
down_revision = '3f1c9a2b7d40'
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table('courses') as batch_op:
        batch_op.alter_column('description',
                   existing_type=sqlmodel.sql.sqltypes.AutoString(length=1500),
                   nullable=True)


def downgrade() -> None:
    # First, update NULL values to empty string
    op.execute("UPDATE courses SET description = '' WHERE description IS NULL")
    with op.batch_alter_table('courses') as batch_op:
        batch_op.alter_column('description',
                   existing_type=sqlmodel.sql.sqltypes.AutoString(length=1500),
                   nullable=False)
