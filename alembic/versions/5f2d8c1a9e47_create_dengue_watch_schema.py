"""create administrative areas, weather codes, daily weather and weekly dengue cases

Revision ID: 5f2d8c1a9e47
Revises:
Create Date: 2026-10-19 09:12:44.318205+00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2d8c1a9e47'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create administrative_areas table
    op.create_table(
        'administrative_areas',
        sa.Column('psgc_code', sa.String(length=10), nullable=False, comment='PSGC code of the area'),
        sa.Column('name', sa.String(length=200), nullable=False, comment='Area name'),
        sa.Column('geographic_level', sa.String(length=50), nullable=False, comment='Geographic level (Reg, Prov, City, Mun, Bgy)'),
        sa.Column('old_names', sa.String(length=500), nullable=True, comment='Former names, comma separated'),
        sa.Column('latitude', sa.Numeric(precision=9, scale=6), nullable=True, comment='Centroid latitude in degrees'),
        sa.Column('longitude', sa.Numeric(precision=9, scale=6), nullable=True, comment='Centroid longitude in degrees'),
        sa.PrimaryKeyConstraint('psgc_code')
    )
    op.create_index('idx_administrative_area_level', 'administrative_areas', ['geographic_level'], unique=False)

    # Create weather_codes table
    op.create_table(
        'weather_codes',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False, comment='WMO weather code'),
        sa.Column('main_description', sa.String(length=200), nullable=False, comment='Primary description'),
        sa.Column('sub_description', sa.String(length=400), nullable=True, comment='Optional detail'),
        sa.PrimaryKeyConstraint('id')
    )

    # Create daily_weather table
    op.create_table(
        'daily_weather',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False, comment='Observation date'),
        sa.Column('psgc_code', sa.String(length=10), nullable=False, comment='Reference to the administrative area'),
        sa.Column('weather_code_id', sa.Integer(), nullable=False, comment='WMO weather code of the day'),
        sa.Column('temperature', sa.Float(), nullable=False, comment='Mean temperature in °C'),
        sa.Column('precipitation', sa.Float(), nullable=False, comment='Precipitation sum in mm'),
        sa.Column('humidity', sa.Float(), nullable=False, comment='Mean relative humidity in %'),
        sa.ForeignKeyConstraint(['psgc_code'], ['administrative_areas.psgc_code'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['weather_code_id'], ['weather_codes.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('date', 'psgc_code', name='uq_daily_weather_date_psgc')
    )
    op.create_index(op.f('ix_daily_weather_id'), 'daily_weather', ['id'], unique=False)
    op.create_index(op.f('ix_daily_weather_date'), 'daily_weather', ['date'], unique=False)
    op.create_index(op.f('ix_daily_weather_psgc_code'), 'daily_weather', ['psgc_code'], unique=False)
    op.create_index('idx_daily_weather_psgc_date', 'daily_weather', ['psgc_code', 'date'], unique=False)

    # Create weekly_dengue_cases table
    op.create_table(
        'weekly_dengue_cases',
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('psgc_code', sa.String(length=10), nullable=False, comment='Reference to the administrative area'),
        sa.Column('year', sa.Integer(), nullable=False, comment='ISO 8601 year of the reporting week'),
        sa.Column('week_number', sa.Integer(), nullable=False, comment='ISO 8601 week number (1-53)'),
        sa.Column('case_count', sa.Integer(), nullable=False, comment='Reported dengue cases'),
        sa.CheckConstraint('week_number BETWEEN 1 AND 53', name='ck_weekly_dengue_week_range'),
        sa.ForeignKeyConstraint(['psgc_code'], ['administrative_areas.psgc_code'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('year', 'week_number', 'psgc_code', name='uq_weekly_dengue_year_week_psgc')
    )
    op.create_index(op.f('ix_weekly_dengue_cases_id'), 'weekly_dengue_cases', ['id'], unique=False)
    op.create_index(op.f('ix_weekly_dengue_cases_psgc_code'), 'weekly_dengue_cases', ['psgc_code'], unique=False)
    op.create_index('idx_weekly_dengue_psgc_year', 'weekly_dengue_cases', ['psgc_code', 'year'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_weekly_dengue_psgc_year', table_name='weekly_dengue_cases')
    op.drop_index(op.f('ix_weekly_dengue_cases_psgc_code'), table_name='weekly_dengue_cases')
    op.drop_index(op.f('ix_weekly_dengue_cases_id'), table_name='weekly_dengue_cases')
    op.drop_table('weekly_dengue_cases')

    op.drop_index('idx_daily_weather_psgc_date', table_name='daily_weather')
    op.drop_index(op.f('ix_daily_weather_psgc_code'), table_name='daily_weather')
    op.drop_index(op.f('ix_daily_weather_date'), table_name='daily_weather')
    op.drop_index(op.f('ix_daily_weather_id'), table_name='daily_weather')
    op.drop_table('daily_weather')

    op.drop_table('weather_codes')

    op.drop_index('idx_administrative_area_level', table_name='administrative_areas')
    op.drop_table('administrative_areas')
