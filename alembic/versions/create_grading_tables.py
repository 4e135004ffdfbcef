"""Create users, simulations, questions, results and open answers tables

Revision ID: 4e1c2a9b7d10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4e1c2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the grading schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'simulations',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('creator_id', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('correct_points', sa.Float(), nullable=False),
        sa.Column('wrong_points', sa.Float(), nullable=False),
        sa.Column('blank_points', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_simulations_id', 'simulations', ['id'])
    op.create_index('ix_simulations_creator_id', 'simulations', ['creator_id'])

    op.create_table(
        'questions',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('text', sa.String(), nullable=False),
        sa.Column('text_latex', sa.String(), nullable=True),
        sa.Column('correct_explanation', sa.String(), nullable=True),
        sa.Column('keywords', sa.JSON(), nullable=True),
    )
    op.create_index('ix_questions_id', 'questions', ['id'])

    op.create_table(
        'simulation_results',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('simulation_id', sa.String(), sa.ForeignKey('simulations.id'), nullable=False),
        sa.Column('student_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('base_score', sa.Float(), nullable=False),
        sa.Column('max_score', sa.Float(), nullable=False),
        sa.Column('total_score', sa.Float(), nullable=False),
        sa.Column('percentage_score', sa.Float(), nullable=False),
        sa.Column('pending_open_answers', sa.Integer(), nullable=False),
    )
    op.create_index('ix_simulation_results_id', 'simulation_results', ['id'])
    op.create_index('ix_simulation_results_simulation_id', 'simulation_results', ['simulation_id'])
    op.create_index('ix_simulation_results_student_id', 'simulation_results', ['student_id'])
    op.create_index('ix_simulation_results_pending_open_answers', 'simulation_results', ['pending_open_answers'])

    op.create_table(
        'open_answers',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('result_id', sa.String(), sa.ForeignKey('simulation_results.id'), nullable=False),
        sa.Column('question_id', sa.String(), sa.ForeignKey('questions.id'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('answer_text', sa.String(), nullable=False),
        sa.Column('auto_score', sa.Float(), nullable=True),
        sa.Column('keywords_matched', sa.JSON(), nullable=False),
        sa.Column('keywords_missed', sa.JSON(), nullable=False),
        sa.Column('is_validated', sa.Boolean(), nullable=False),
        sa.Column('final_score', sa.Float(), nullable=True),
        sa.Column('validator_notes', sa.String(), nullable=True),
        sa.Column('validated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('validator_id', sa.String(), sa.ForeignKey('users.id'), nullable=True),
    )
    op.create_index('ix_open_answers_id', 'open_answers', ['id'])
    op.create_index('ix_open_answers_result_id', 'open_answers', ['result_id'])
    op.create_index('ix_open_answers_is_validated', 'open_answers', ['is_validated'])


def downgrade() -> None:
    """Drop the grading schema."""
    op.drop_table('open_answers')
    op.drop_table('simulation_results')
    op.drop_table('questions')
    op.drop_table('simulations')
    op.drop_table('users')
