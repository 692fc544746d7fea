from alembic import op
import sqlalchemy as sa

revision = "20260912101500"
down_revision = None
branch_labels = None
depends_on = None

ORDER_STATUS = sa.Enum("PENDING", "PROCESSING", "SHIPPED", "DELIVERED", "CANCELLED", name="orderstatus")

def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(length=120), nullable=False, server_default=''),
        sa.Column('role', sa.String(length=32), nullable=False, server_default='USER'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        'products',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(length=240), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('discount', sa.Float(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_table(
        'orders',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('status', ORDER_STATUS, nullable=False, server_default='PENDING'),
        sa.Column('total', sa.Float(), nullable=False),
        sa.Column('payment_id', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('payment_provider', sa.String(length=32), nullable=False, server_default='PAYPAL'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        'order_items',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('order_id', sa.String(length=36), sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.String(length=36), sa.ForeignKey('products.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
    )

def downgrade():
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('products')
    op.drop_table('users')
    ORDER_STATUS.drop(op.get_bind(), checkfirst=True)
