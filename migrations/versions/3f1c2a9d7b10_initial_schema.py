"""Initial schema: users, properties, payments, activity logs, settings

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2025-11-10 09:15:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a9d7b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('email', sa.String(length=120), nullable=False),
                    sa.Column('password_hash', sa.String(length=255), nullable=False),
                    sa.Column('role', sa.String(length=20), nullable=False),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.Column('is_active', sa.Boolean(), nullable=True),
                    sa.PrimaryKeyConstraint('id'),
                    sa.UniqueConstraint('email'))

    op.create_table('properties',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=False),
                    sa.Column('name', sa.String(length=200), nullable=False),
                    sa.Column('address', sa.String(length=300), nullable=True),
                    sa.Column('tenant_name', sa.String(length=200), nullable=False),
                    sa.Column('tenant_email', sa.String(length=120), nullable=True),
                    sa.Column('monthly_rent', sa.Float(), nullable=False),
                    sa.Column('start_date', sa.Date(), nullable=False),
                    sa.Column('months_paid', sa.Integer(), nullable=False, server_default='0'),
                    sa.Column('notes', sa.Text(), nullable=True),
                    sa.Column('last_reminder_on', sa.Date(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'))

    op.create_table('payments',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('property_id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=True),
                    sa.Column('months', sa.Integer(), nullable=False),
                    sa.Column('amount', sa.Float(), nullable=False),
                    sa.Column('paid_on', sa.Date(), nullable=False),
                    sa.Column('note', sa.Text(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['property_id'], ['properties.id'], ondelete='CASCADE'),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'))

    op.create_table('activity_logs',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('user_id', sa.Integer(), nullable=True),
                    sa.Column('action', sa.String(length=50), nullable=False),
                    sa.Column('details', sa.Text(), nullable=True),
                    sa.Column('created_at', sa.DateTime(), nullable=True),
                    sa.ForeignKeyConstraint(['user_id'], ['users.id']),
                    sa.PrimaryKeyConstraint('id'))
    op.create_index('ix_activity_logs_created_at', 'activity_logs', ['created_at'])

    op.create_table('settings',
                    sa.Column('id', sa.Integer(), nullable=False),
                    sa.Column('reminder_days', sa.Integer(), nullable=False, server_default='7'),
                    sa.Column('reminders_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
                    sa.Column('updated_at', sa.DateTime(), nullable=True),
                    sa.PrimaryKeyConstraint('id'))
    # Seed the single settings row
    op.execute("INSERT INTO settings (id, reminder_days, reminders_enabled) VALUES (1, 7, TRUE)")


def downgrade():
    op.drop_table('settings')
    op.drop_index('ix_activity_logs_created_at', table_name='activity_logs')
    op.drop_table('activity_logs')
    op.drop_table('payments')
    op.drop_table('properties')
    op.drop_table('users')
