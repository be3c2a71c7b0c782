"""
Initial migration - Create reports, confirmations and user stats tables

Revision ID: 001_initial
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

# Revision identifiers
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create all tables."""

    # Create reports table
    op.create_table(
        'reports',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('issue_type', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('image_url', sa.String(1024)),
        sa.Column('priority', sa.String(20), nullable=False, server_default='Low'),
        sa.Column('status', sa.String(20), nullable=False, server_default='Pending'),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('confirmation_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('confirmation_count >= 0', name='ck_report_confirmation_count'),
    )

    op.create_index('idx_report_created_at', 'reports', ['created_at'])
    op.create_index('ix_reports_user_id', 'reports', ['user_id'])

    # Create report_confirmations table
    op.create_table(
        'report_confirmations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            'report_id', sa.String(36),
            sa.ForeignKey('reports.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('report_id', 'user_id', name='uq_report_confirmation_report_user'),
    )

    op.create_index('idx_confirmation_user', 'report_confirmations', ['user_id'])

    # Create user_stats table
    op.create_table(
        'user_stats',
        sa.Column('user_id', sa.String(64), primary_key=True),
        sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('score >= 0', name='ck_user_stats_score'),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('user_stats')
    op.drop_index('idx_confirmation_user', table_name='report_confirmations')
    op.drop_table('report_confirmations')
    op.drop_index('ix_reports_user_id', table_name='reports')
    op.drop_index('idx_report_created_at', table_name='reports')
    op.drop_table('reports')
