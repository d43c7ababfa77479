"""create games

Revision ID: 5b1f0c2d9a41
Revises:
Create Date: 2025-06-01 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1f0c2d9a41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False, comment='主鍵，自動遞增'),
        sa.Column('title', sa.String(length=100), nullable=False, comment='遊戲標題'),
        sa.Column('rating', sa.Float(), nullable=False, comment='評分（0-10）'),
        sa.Column('timespent', sa.Float(), server_default='0', nullable=False, comment='遊玩時數'),
        sa.Column('email', sa.String(length=255), nullable=False, comment='擁有者 email'),
        sa.Column('dateadded', sa.DateTime(), server_default=sa.text('now()'), nullable=False, comment='新增時間'),
        sa.Column('image_path', sa.String(length=255), nullable=True, comment='封面圖片檔名'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_games_email', 'games', ['email'])
    op.create_index('ix_games_dateadded', 'games', ['dateadded'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_games_dateadded', table_name='games')
    op.drop_index('ix_games_email', table_name='games')
    op.drop_table('games')
