"""Create contract extraction tables

Revision ID: create_extraction_schema
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'create_extraction_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create contracts table
    op.create_table(
        'contracts',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('title', sa.Text, nullable=False),
        sa.Column('status', sa.String(50), nullable=False, server_default='DRAFT'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Create contract_files table
    op.create_table(
        'contract_files',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('contract_id', sa.Uuid, sa.ForeignKey('contracts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('storage_path', sa.Text, nullable=False),
        sa.Column('file_name', sa.Text, nullable=False),
        sa.Column('mime_type', sa.String(255), nullable=False),
        sa.Column('file_size_bytes', sa.BigInteger, nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Create contract_versions table
    op.create_table(
        'contract_versions',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('contract_id', sa.Uuid, sa.ForeignKey('contracts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('file_id', sa.Uuid, sa.ForeignKey('contract_files.id', ondelete='CASCADE'), nullable=False),
        sa.Column('version_number', sa.Integer, nullable=False),
        sa.Column('is_current', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('processing_status', sa.String(16), nullable=False, server_default='PENDING'),
        sa.Column('extracted_text', sa.Text, nullable=True),
        sa.Column('extracted_data', sa.JSON, nullable=True),
        sa.Column('page_count', sa.Integer, nullable=True),
        sa.Column('error_message', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('contract_id', 'version_number', name='uq_contract_version_number'),
    )
    op.create_index('ix_contract_versions_contract_id', 'contract_versions', ['contract_id'])

    # Create clauses table
    op.create_table(
        'clauses',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('contract_version_id', sa.Uuid, sa.ForeignKey('contract_versions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(128), nullable=False),
        sa.Column('category', sa.String(64), nullable=False),
        sa.Column('extracted_text', sa.Text, nullable=False),
        sa.Column('interpretation', sa.Text, nullable=True),
        sa.Column('risk_notes', sa.Text, nullable=True),
        sa.Column('page_ref', sa.String(64), nullable=True),
        sa.Column('sort_order', sa.Integer, nullable=False),
    )
    op.create_index('ix_clauses_contract_version_id', 'clauses', ['contract_version_id'])

    # Create obligations table
    op.create_table(
        'obligations',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('contract_version_id', sa.Uuid, sa.ForeignKey('contract_versions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('obligation', sa.Text, nullable=False),
        sa.Column('owner', sa.String(16), nullable=False),
        sa.Column('due_date', sa.Date, nullable=True),
        sa.Column('status', sa.String(16), nullable=False, server_default='pending'),
        sa.Column('sort_order', sa.Integer, nullable=False),
    )
    op.create_index('ix_obligations_contract_version_id', 'obligations', ['contract_version_id'])


def downgrade() -> None:
    op.drop_table('obligations')
    op.drop_table('clauses')
    op.drop_table('contract_versions')
    op.drop_table('contract_files')
    op.drop_table('contracts')
