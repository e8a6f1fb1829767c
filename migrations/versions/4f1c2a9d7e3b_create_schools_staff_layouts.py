"""create schools, staff and organization_layouts tables

Revision ID: 4f1c2a9d7e3b
Revises:
Create Date: 2026-10-18 09:12:44.218730

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4f1c2a9d7e3b'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('schools',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('school_name', sa.String(length=128), nullable=False),
        sa.Column('contact_person', sa.String(length=128), nullable=False),
        sa.Column('share_token', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('share_token')
    )
    op.create_table('staff',
        sa.Column('school_id', sa.String(length=36), nullable=False),
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('department', sa.String(length=128), nullable=False),
        sa.Column('position', sa.Enum(
            'PRINCIPAL', 'VICE_PRINCIPAL', 'DEPARTMENT_HEAD', 'STAFF',
            name='staffposition', create_constraint=True,
        ), nullable=False),
        sa.Column('contact', sa.String(length=128), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('school_id', 'id')
    )
    op.create_table('organization_layouts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('school_id', sa.String(length=36), nullable=False),
        sa.Column('layout_data', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['school_id'], ['schools.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('school_id')
    )


def downgrade():
    op.drop_table('organization_layouts')
    op.drop_table('staff')
    op.execute("DROP TYPE IF EXISTS staffposition")
