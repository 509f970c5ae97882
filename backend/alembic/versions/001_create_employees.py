"""create employees and employee_phones

Revision ID: 001
Revises:
Create Date: 2026-01-29

Creates the employee roster with its self-referencing manager link and
seeds the bootstrap Director account (admin@company.com / Admin@123).
"""
import uuid
from datetime import date
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ADMIN_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
# bcrypt hash of "Admin@123"
ADMIN_PASSWORD_HASH = "$2a$11$Ey8TKH0BmJnmnsg1ei30OuG0.N9CdgxGWaDiTtCwFzLN9p2fBMIh6"
DIRECTOR_ROLE = 3


def upgrade() -> None:
    """Create employee tables and seed the first Director."""
    employees = op.create_table(
        'employees',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(200), nullable=False),
        sa.Column('doc_number', sa.String(50), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=False),
        sa.Column('role', sa.Integer(), nullable=False),
        sa.Column('manager_id', sa.Uuid(), nullable=True),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id', name='pk_employees'),
        sa.ForeignKeyConstraint(
            ['manager_id'], ['employees.id'],
            name='fk_employees_manager_id_employees',
            ondelete='RESTRICT',
        ),
    )
    op.create_index('ix_employees_email', 'employees', ['email'], unique=True)
    op.create_index('ix_employees_doc_number', 'employees', ['doc_number'], unique=True)
    op.create_index('ix_employees_manager_id', 'employees', ['manager_id'])

    op.create_table(
        'employee_phones',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('employee_id', sa.Uuid(), nullable=False),
        sa.Column('number', sa.String(20), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id', name='pk_employee_phones'),
        sa.ForeignKeyConstraint(
            ['employee_id'], ['employees.id'],
            name='fk_employee_phones_employee_id_employees',
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_employee_phones_employee_id', 'employee_phones', ['employee_id'])

    op.bulk_insert(
        employees,
        [
            {
                'id': ADMIN_ID,
                'first_name': 'Admin',
                'last_name': 'Director',
                'email': 'admin@company.com',
                'doc_number': '00000000001',
                'birth_date': date(1992, 4, 2),
                'role': DIRECTOR_ROLE,
                'manager_id': None,
                'password_hash': ADMIN_PASSWORD_HASH,
            }
        ],
    )


def downgrade() -> None:
    """Drop employee tables."""
    op.drop_index('ix_employee_phones_employee_id', table_name='employee_phones')
    op.drop_table('employee_phones')
    op.drop_index('ix_employees_manager_id', table_name='employees')
    op.drop_index('ix_employees_doc_number', table_name='employees')
    op.drop_index('ix_employees_email', table_name='employees')
    op.drop_table('employees')
