"""create patient and clinical_history"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f9c2a7d1b64'
down_revision = None
branch_labels = None
depends_on = None

BLOOD_TYPES = ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-')


def upgrade():
    op.create_table(
        'patient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('national_id', sa.String(length=20), nullable=False),
        sa.Column('first_name', sa.String(length=120), nullable=False),
        sa.Column('last_name', sa.String(length=120), nullable=False),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('patient', schema=None) as batch_op:
        batch_op.create_index(
            'ux_patient_national_id_active', ['national_id'], unique=True,
            sqlite_where=sa.text('deleted = 0'),
            postgresql_where=sa.text('NOT deleted'),
        )
        batch_op.create_index('ix_patient_last_name_first_name', ['last_name', 'first_name'], unique=False)

    op.create_table(
        'clinical_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('deleted', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('history_number', sa.String(length=50), nullable=False),
        sa.Column('blood_type', sa.Enum(*BLOOD_TYPES, name='bloodtype', native_enum=False), nullable=True),
        sa.Column('medical_history', sa.Text(), nullable=True),
        sa.Column('current_medication', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('opened_date', sa.Date(), nullable=True),
        sa.Column('patient_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['patient_id'], ['patient.id'],
            name='fk_clinical_history_patient',    # <- Name ist bei SQLite wichtig!
            ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('clinical_history', schema=None) as batch_op:
        batch_op.create_index('ix_clinical_history_patient_id', ['patient_id'], unique=False)
        batch_op.create_index(
            'ux_clinical_history_patient_active', ['patient_id'], unique=True,
            sqlite_where=sa.text('deleted = 0'),
            postgresql_where=sa.text('NOT deleted'),
        )


def downgrade():
    with op.batch_alter_table('clinical_history', schema=None) as batch_op:
        batch_op.drop_index('ux_clinical_history_patient_active')
        batch_op.drop_index('ix_clinical_history_patient_id')
    op.drop_table('clinical_history')

    with op.batch_alter_table('patient', schema=None) as batch_op:
        batch_op.drop_index('ix_patient_last_name_first_name')
        batch_op.drop_index('ux_patient_national_id_active')
    op.drop_table('patient')
