"""initial dispensary schema

Revision ID: b7d1e0a4c2f9
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the relational backend's tables:
- products, customers, employees: master data with created_at/updated_at
- orders, order_items: order history (customer/employee/product references)
- inventory_transactions: stock movements per product
- weedmaps_products: external marketplace listings (no FK to products)
- dispensaries: directory entries

All tables use sqlite_autoincrement so deleted ids are never handed out again.
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b7d1e0a4c2f9'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True):
    cols = [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
    ]
    if updated:
        cols.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                      server_default=sa.text('CURRENT_TIMESTAMP'))
        )
    return cols


def upgrade():
    # ============================================================================
    # products: catalog master
    # ============================================================================
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('stock_quantity', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('strain_type', sa.String(length=32), nullable=True),
        sa.Column('thc_content', sa.Float(), nullable=True),
        sa.Column('cbd_content', sa.Float(), nullable=True),
        sa.Column('image_url', sa.String(length=512), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_category', 'products', ['category'])

    # ============================================================================
    # customers
    # ============================================================================
    op.create_table(
        'customers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=128), nullable=False),
        sa.Column('last_name', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column('date_of_birth', sa.String(length=10), nullable=True),
        sa.Column('license_number', sa.String(length=64), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_customers_email'),
        sqlite_autoincrement=True
    )

    # ============================================================================
    # employees
    # ============================================================================
    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sa.String(length=128), nullable=False),
        sa.Column('last_name', sa.String(length=128), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=32), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_employees_email'),
        sqlite_autoincrement=True
    )

    # ============================================================================
    # orders / order_items
    # ============================================================================
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_id', sa.Integer(), nullable=True),
        sa.Column('employee_id', sa.Integer(), nullable=True),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('payment_method', sa.String(length=32), nullable=False),
        sa.Column('payment_status', sa.String(length=16), nullable=False, server_default='pending'),
        sa.Column('stripe_payment_id', sa.String(length=128), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_orders_customer_id', 'orders', ['customer_id'])
    op.create_index('ix_orders_employee_id', 'orders', ['employee_id'])
    op.create_index('ix_orders_payment_status', 'orders', ['payment_status'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Float(), nullable=False),
        sa.Column('total_price', sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id']),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])

    # ============================================================================
    # inventory_transactions
    # ============================================================================
    op.create_table(
        'inventory_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.Integer(), nullable=True),
        sa.Column('transaction_type', sa.String(length=32), nullable=False),
        sa.Column('quantity_change', sa.Integer(), nullable=False),
        sa.Column('notes', sa.String(length=255), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.ForeignKeyConstraint(['employee_id'], ['employees.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_inventory_transactions_product_id', 'inventory_transactions', ['product_id'])
    op.create_index('ix_inventory_transactions_employee_id', 'inventory_transactions', ['employee_id'])
    op.create_index('ix_inventory_transactions_transaction_type', 'inventory_transactions', ['transaction_type'])

    # ============================================================================
    # weedmaps_products: marketplace listings, independent of products
    # ============================================================================
    op.create_table(
        'weedmaps_products',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('weedmaps_id', sa.String(length=64), nullable=True),
        sa.Column('external_id', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('picture', sa.String(length=512), nullable=True),
        sa.Column('gallery_images', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('tags', sa.String(length=255), nullable=True),
        sa.Column('strain', sa.String(length=128), nullable=True),
        sa.Column('genetics', sa.String(length=128), nullable=True),
        sa.Column('cbd_percentage', sa.Float(), nullable=True),
        sa.Column('thc_percentage', sa.Float(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_weedmaps_products_weedmaps_id', 'weedmaps_products', ['weedmaps_id'])

    # ============================================================================
    # dispensaries: directory
    # ============================================================================
    op.create_table(
        'dispensaries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=128), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False),
        sa.Column('hours', sa.String(length=128), nullable=False),
        sa.Column('license', sa.String(length=64), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='Active'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    op.create_index('ix_dispensaries_status', 'dispensaries', ['status'])


def downgrade():
    op.drop_index('ix_dispensaries_status', table_name='dispensaries')
    op.drop_table('dispensaries')
    op.drop_index('ix_weedmaps_products_weedmaps_id', table_name='weedmaps_products')
    op.drop_table('weedmaps_products')
    op.drop_index('ix_inventory_transactions_transaction_type', table_name='inventory_transactions')
    op.drop_index('ix_inventory_transactions_employee_id', table_name='inventory_transactions')
    op.drop_index('ix_inventory_transactions_product_id', table_name='inventory_transactions')
    op.drop_table('inventory_transactions')
    op.drop_index('ix_order_items_order_id', table_name='order_items')
    op.drop_table('order_items')
    op.drop_index('ix_orders_payment_status', table_name='orders')
    op.drop_index('ix_orders_employee_id', table_name='orders')
    op.drop_index('ix_orders_customer_id', table_name='orders')
    op.drop_table('orders')
    op.drop_table('employees')
    op.drop_table('customers')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_index('ix_products_name', table_name='products')
    op.drop_table('products')
