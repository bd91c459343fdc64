"""Create inquiries and users tables

Revision ID: 3f1c9a2d7b10
Revises:
Create Date: 2026-10-18 10:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'inquiries',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('request_id', sa.String(), nullable=True, unique=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('subject', sa.String(), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('inquiry_type', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('priority', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('source', sa.String(), nullable=False),
        sa.Column('property_id', sa.String(), nullable=True),
        sa.Column('property_name', sa.String(), nullable=True),
        sa.Column('property_location', sa.String(), nullable=True),
        sa.Column('property_configurations', sa.JSON(), nullable=True),
        sa.Column('property_price_range', sa.String(), nullable=True),
        sa.Column('tour_date', sa.Date(), nullable=True),
        sa.Column('tour_time', sa.String(), nullable=True),
        sa.Column('tour_type', sa.JSON(), nullable=True),
        sa.Column('tour_status', sa.String(), nullable=True),
        sa.Column('assigned_to', sa.String(), nullable=True),
        sa.Column('response_notes', sa.Text(), nullable=True),
        sa.Column('response_method', sa.String(), nullable=True),
        sa.Column('responded_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_inquiries_property_id', 'inquiries', ['property_id'])
    op.create_index('ix_inquiries_status_type', 'inquiries', ['status', 'inquiry_type'])


def downgrade() -> None:
    op.drop_index('ix_inquiries_status_type', table_name='inquiries')
    op.drop_index('ix_inquiries_property_id', table_name='inquiries')
    op.drop_table('inquiries')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
