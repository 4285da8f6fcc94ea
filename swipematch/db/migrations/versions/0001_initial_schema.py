"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17 09:12:44.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Byte-order collation so the pair CHECK agrees with Python string ordering
PAIR_ID = sa.String(length=64).with_variant(sa.String(length=64, collation='C'), 'postgresql')


def upgrade() -> None:
    op.create_table(
        'profiles',
        sa.Column('user_id', sa.String(length=64), nullable=False,
                  comment='Opaque user id from the identity provider'),
        sa.Column('display_name', sa.String(length=120), nullable=True),
        sa.Column('technical_expertise', sa.Text(), nullable=True),
        sa.Column('domain_expertise', sa.Text(), nullable=True),
        sa.Column('location_tz', sa.String(length=120), nullable=True,
                  comment='Location and timezone, combined'),
        sa.Column('skills_background', sa.Text(), nullable=True),
        sa.Column('interests_building', sa.Text(), nullable=True),
        sa.Column('linkedin_url', sa.String(length=255), nullable=True),
        sa.Column('photo_path', sa.String(length=512), nullable=True,
                  comment='Storage path of the profile photo'),
        sa.Column('is_complete', sa.Boolean(), nullable=False,
                  comment='Derived from required-field presence on every write'),
        sa.Column('is_live', sa.Boolean(), nullable=False,
                  comment="Visible in other users' discovery feeds"),
        sa.Column('is_admin', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  comment='Feed ordering key'),
        sa.CheckConstraint('NOT is_live OR is_complete', name='ck_profile_live_requires_complete'),
        sa.PrimaryKeyConstraint('user_id'),
    )
    op.create_index('idx_profile_feed', 'profiles', ['is_live', 'updated_at'])

    op.create_table(
        'swipes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('actor_id', sa.String(length=64), nullable=False,
                  comment='User who made the decision'),
        sa.Column('target_id', sa.String(length=64), nullable=False,
                  comment='User the decision is about'),
        sa.Column('direction', sa.String(length=8), nullable=False,
                  comment="'like' or 'pass'"),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("direction IN ('like', 'pass')", name='ck_swipe_direction'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('actor_id', 'target_id', name='uq_swipe_actor_target'),
    )
    op.create_index('ix_swipes_actor_id', 'swipes', ['actor_id'])
    op.create_index('idx_swipe_target_direction', 'swipes', ['target_id', 'direction'])

    op.create_table(
        'matches',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_low_id', PAIR_ID, nullable=False,
                  comment='Lower id of the canonical pair'),
        sa.Column('user_high_id', PAIR_ID, nullable=False,
                  comment='Higher id of the canonical pair'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('user_low_id < user_high_id', name='ck_match_pair_ordered'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_low_id', 'user_high_id', name='uq_match_pair'),
    )
    op.create_index('ix_matches_user_low_id', 'matches', ['user_low_id'])
    op.create_index('ix_matches_user_high_id', 'matches', ['user_high_id'])

    op.create_table(
        'user_contacts',
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('whatsapp', sa.String(length=32), nullable=True,
                  comment='E.164 phone number'),
        sa.Column('share', sa.Boolean(), nullable=False,
                  comment='Owner opt-in for disclosing (and receiving) contact values'),
        sa.Column('verified', sa.Boolean(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('user_id'),
    )

    op.create_table(
        'reports',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('reporter_id', sa.String(length=64), nullable=False),
        sa.Column('reported_id', sa.String(length=64), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=True),
        sa.Column('details', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False,
                  comment="'open', 'investigating' or 'resolved'"),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('open', 'investigating', 'resolved')", name='ck_report_status'
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_reports_reporter_id', 'reports', ['reporter_id'])
    op.create_index('ix_reports_reported_id', 'reports', ['reported_id'])
    op.create_index('idx_report_status_created', 'reports', ['status', 'created_at'])

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('level', sa.String(length=20), nullable=False),
        sa.Column('event', sa.String(length=100), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('component', sa.String(length=100), nullable=True),
        sa.Column('request_id', sa.String(length=100), nullable=True),
        sa.Column('actor_id', sa.String(length=64), nullable=True,
                  comment='User who performed the action'),
        sa.Column('details', sa.Text(), nullable=True,
                  comment='JSON blob with additional context'),
        sa.Column('match_id', sa.Integer(), nullable=True),
        sa.Column('report_id', sa.Integer(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    for column in ('level', 'event', 'request_id', 'actor_id', 'match_id', 'report_id', 'timestamp'):
        op.create_index(f'ix_logs_{column}', 'logs', [column])


def downgrade() -> None:
    for column in ('level', 'event', 'request_id', 'actor_id', 'match_id', 'report_id', 'timestamp'):
        op.drop_index(f'ix_logs_{column}', table_name='logs')
    op.drop_table('logs')

    op.drop_index('idx_report_status_created', table_name='reports')
    op.drop_index('ix_reports_reported_id', table_name='reports')
    op.drop_index('ix_reports_reporter_id', table_name='reports')
    op.drop_table('reports')

    op.drop_table('user_contacts')

    op.drop_index('ix_matches_user_high_id', table_name='matches')
    op.drop_index('ix_matches_user_low_id', table_name='matches')
    op.drop_table('matches')

    op.drop_index('idx_swipe_target_direction', table_name='swipes')
    op.drop_index('ix_swipes_actor_id', table_name='swipes')
    op.drop_table('swipes')

    op.drop_index('idx_profile_feed', table_name='profiles')
    op.drop_table('profiles')
