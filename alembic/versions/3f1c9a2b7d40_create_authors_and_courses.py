"""create authors and courses tables

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-12 09:14:27.512304

"""
from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision = '3f1c9a2b7d40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'authors',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('date_of_birth', sa.DateTime(timezone=True), nullable=False),
        sa.Column('date_of_death', sa.DateTime(timezone=True), nullable=True),
        sa.Column('main_category', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'courses',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=1500), nullable=False),
        sa.Column('author_id', sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['authors.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_courses_author_id', 'courses', ['author_id'])


def downgrade() -> None:
    op.drop_index('ix_courses_author_id', table_name='courses')
    op.drop_table('courses')
    op.drop_table('authors')
