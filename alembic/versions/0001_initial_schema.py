"""Create parents, teachers, students and payments tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'parents',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('contact_number', sa.String(length=20), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('payment_status', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_date', sa.Date(), nullable=True),
        sa.Column('payment_amount', sa.Numeric(10, 2), nullable=True),
        sa.Column('payment_method', sa.String(length=30), nullable=True),
        sa.Column('receipt_url', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_parents_id', 'parents', ['id'])
    op.create_index('ix_parents_name', 'parents', ['name'])
    op.create_index('ix_parents_email', 'parents', ['email'])
    op.create_index('ix_parents_created_at', 'parents', ['created_at'])

    op.create_table(
        'teachers',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('employee_id', sa.String(length=20), nullable=False),
        sa.Column('contact_number', sa.String(length=20), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=False),
        sa.Column('department', sa.String(length=100), nullable=False),
        sa.Column('position', sa.String(length=100), nullable=False),
        sa.Column('assigned_classes', sa.JSON(), nullable=False),
        sa.Column('salary', sa.Numeric(12, 2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        *_timestamps(),
    )
    op.create_index('ix_teachers_id', 'teachers', ['id'])
    op.create_index('ix_teachers_name', 'teachers', ['name'])
    op.create_index('ix_teachers_email', 'teachers', ['email'])
    op.create_index('ix_teachers_employee_id', 'teachers', ['employee_id'], unique=True)
    op.create_index('ix_teachers_created_at', 'teachers', ['created_at'])

    op.create_table(
        'students',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('parent_id', sa.Uuid(), sa.ForeignKey('parents.id', ondelete='SET NULL'), nullable=True),
        sa.Column('teacher_id', sa.Uuid(), sa.ForeignKey('teachers.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=False),
        sa.Column('contact_number', sa.String(length=20), nullable=False),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('class_name', sa.String(length=50), nullable=False),
        sa.Column('grade_level', sa.String(length=20), nullable=False),
        sa.Column('enrollment_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('payment_status', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_date', sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_parent_id', 'students', ['parent_id'])
    op.create_index('ix_students_teacher_id', 'students', ['teacher_id'])
    op.create_index('ix_students_name', 'students', ['name'])
    op.create_index('ix_students_class_name', 'students', ['class_name'])
    op.create_index('ix_students_created_at', 'students', ['created_at'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('parent_id', sa.Uuid(), sa.ForeignKey('parents.id'), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('receipt_url', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_payments_id', 'payments', ['id'])
    op.create_index('ix_payments_parent_id', 'payments', ['parent_id'])
    op.create_index('ix_payments_payment_date', 'payments', ['payment_date'])
    op.create_index('ix_payments_created_at', 'payments', ['created_at'])


def downgrade() -> None:
    op.drop_table('payments')
    op.drop_table('students')
    op.drop_table('teachers')
    op.drop_table('parents')
