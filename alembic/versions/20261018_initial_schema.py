"""initial schema: users, habits, completions, streaks, journal, progress

Revision ID: 20261018_initial_schema
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261018_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=255), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=True, unique=True),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('profile_image_url', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'habits',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('display_name', sa.String(length=200), nullable=False),
        sa.Column('emoji', sa.String(length=20), nullable=False),
        sa.Column('initial_target', sa.String(length=50), nullable=False),
        sa.Column('current_target', sa.String(length=50), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_habits_user_id', 'habits', ['user_id'])
    op.create_index('ix_habits_name', 'habits', ['name'])

    op.create_table(
        'habit_completions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('habit_id', sa.Integer(), sa.ForeignKey('habits.id'), nullable=False),
        sa.Column('log_date', sa.Date(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('actual_value', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'habit_id', 'log_date', name='uq_habit_completions_user_habit_date'),
    )
    op.create_index('ix_habit_completions_user_id', 'habit_completions', ['user_id'])
    op.create_index('ix_habit_completions_habit_id', 'habit_completions', ['habit_id'])
    op.create_index('ix_habit_completions_log_date', 'habit_completions', ['log_date'])

    op.create_table(
        'habit_streaks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('habit_id', sa.Integer(), sa.ForeignKey('habits.id'), nullable=False),
        sa.Column('current_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('best_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_completed_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'habit_id', name='uq_habit_streaks_user_habit'),
    )
    op.create_index('ix_habit_streaks_user_id', 'habit_streaks', ['user_id'])
    op.create_index('ix_habit_streaks_habit_id', 'habit_streaks', ['habit_id'])

    op.create_table(
        'journal_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('entry_date', sa.Date(), nullable=False),
        sa.Column('mood', sa.String(length=20), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('ai_affirmation', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'entry_date', name='uq_journal_entries_user_date'),
    )
    op.create_index('ix_journal_entries_user_id', 'journal_entries', ['user_id'])
    op.create_index('ix_journal_entries_entry_date', 'journal_entries', ['entry_date'])

    op.create_table(
        'user_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.String(length=255), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('current_day', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('total_days_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('current_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('best_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_user_progress_user_id', 'user_progress', ['user_id'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_user_progress_user_id', table_name='user_progress')
    op.drop_table('user_progress')
    op.drop_index('ix_journal_entries_entry_date', table_name='journal_entries')
    op.drop_index('ix_journal_entries_user_id', table_name='journal_entries')
    op.drop_table('journal_entries')
    op.drop_index('ix_habit_streaks_habit_id', table_name='habit_streaks')
    op.drop_index('ix_habit_streaks_user_id', table_name='habit_streaks')
    op.drop_table('habit_streaks')
    op.drop_index('ix_habit_completions_log_date', table_name='habit_completions')
    op.drop_index('ix_habit_completions_habit_id', table_name='habit_completions')
    op.drop_index('ix_habit_completions_user_id', table_name='habit_completions')
    op.drop_table('habit_completions')
    op.drop_index('ix_habits_name', table_name='habits')
    op.drop_index('ix_habits_user_id', table_name='habits')
    op.drop_table('habits')
    op.drop_table('users')
