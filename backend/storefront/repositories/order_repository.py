"""
Order Repository - Data Access Layer for Orders

Handles all database queries for orders and returns Order domain models
with their line items (and, on reads, the current product of each item).
"""
from decimal import Decimal
from typing import Dict, List, Optional

from psycopg2.extras import execute_values

from storefront.domain.order import Order, OrderItem, ShippingAddress
from storefront.domain.product import Product
from storefront.repositories.base import BaseRepository

ORDER_COLUMNS = """
    o.id, o.user_id, o.total_amount,
    o.shipping_name, o.shipping_email, o.shipping_address,
    o.payment_method, o.payment_status, o.order_status, o.upi_transaction_id,
    o.created_at, o.updated_at
"""

# Line item plus the live product row (p_* columns are NULL when the product is gone)
ITEM_COLUMNS = """
    oi.id, oi.order_id, oi.product_id, oi.name, oi.price, oi.quantity, oi.image,
    p.id AS p_id, p.name AS p_name, p.description AS p_description,
    p.price AS p_price, p.image AS p_image, p.categories AS p_categories,
    p.brand AS p_brand, p.current_inventory AS p_current_inventory,
    p.sku AS p_sku, p.created_at AS p_created_at
"""


class OrderRepository(BaseRepository):
    """
    Repository for Order data access

    All SQL queries for orders are centralized here.
    """

    @staticmethod
    def _map_row_to_order(row: dict, items: List[OrderItem]) -> Order:
        return Order(
            id=row['id'],
            user_id=row['user_id'],
            total_amount=row['total_amount'],
            shipping_address=ShippingAddress(
                name=row['shipping_name'],
                email=row['shipping_email'],
                address=row['shipping_address'],
            ),
            payment_method=row['payment_method'],
            payment_status=row['payment_status'],
            order_status=row['order_status'],
            upi_transaction_id=row.get('upi_transaction_id'),
            created_at=row['created_at'],
            updated_at=row.get('updated_at'),
            items=items,
        )

    @staticmethod
    def _map_row_to_item(row: dict) -> OrderItem:
        product = None
        if row.get('p_id') is not None:
            product = Product(
                id=row['p_id'],
                name=row['p_name'],
                description=row['p_description'] or '',
                price=row['p_price'],
                image=row['p_image'],
                categories=list(row['p_categories'] or []),
                brand=row['p_brand'] or '',
                current_inventory=row['p_current_inventory'],
                sku=row['p_sku'],
                created_at=row['p_created_at'],
            )

        return OrderItem(
            id=row['id'],
            order_id=row['order_id'],
            product_id=row['product_id'],
            name=row['name'],
            price=row['price'],
            quantity=row['quantity'],
            image=row['image'],
            product=product,
        )

    def _fetch_items(self, cursor, order_ids: List[int]) -> Dict[int, List[OrderItem]]:
        """Load items for many orders in ONE query, grouped by order id"""
        cursor.execute(f"""
            SELECT {ITEM_COLUMNS}
            FROM order_items oi
            LEFT JOIN products p ON oi.product_id = p.id
            WHERE oi.order_id = ANY(%s)
            ORDER BY oi.order_id, oi.id
        """, (order_ids,))

        items_by_order: Dict[int, List[OrderItem]] = {}
        for row in cursor.fetchall():
            items_by_order.setdefault(row['order_id'], []).append(self._map_row_to_item(row))
        return items_by_order

    def create(
        self,
        user_id: int,
        items: List[dict],
        total_amount: Decimal,
        shipping_address: ShippingAddress,
        payment_method: str,
        conn=None
    ) -> Order:
        """
        Insert an order and its line items

        New orders always start as payment 'pending' / order 'processing'.

        Args:
            user_id: Owning user
            items: Snapshots with product_id, name, price, quantity, image (in order)
            total_amount: Client-submitted total
            shipping_address: Address snapshot
            payment_method: 'UPI' or 'COD'
            conn: Open connection (the caller's transaction)

        Returns:
            Created order (items not populated with products)
        """
        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                INSERT INTO orders AS o (
                    user_id, total_amount,
                    shipping_name, shipping_email, shipping_address,
                    payment_method, payment_status, order_status
                ) VALUES (%s, %s, %s, %s, %s, %s, 'pending', 'processing')
                RETURNING {ORDER_COLUMNS}
            """, (
                user_id,
                total_amount,
                shipping_address.name,
                shipping_address.email,
                shipping_address.address,
                payment_method,
            ))
            order_row = cursor.fetchone()

            item_rows = execute_values(
                cursor,
                """
                INSERT INTO order_items (order_id, product_id, name, price, quantity, image)
                VALUES %s
                RETURNING id, order_id, product_id, name, price, quantity, image
                """,
                [
                    (order_row['id'], item['product_id'], item['name'], item['price'],
                     item['quantity'], item.get('image'))
                    for item in items
                ],
                fetch=True,
            )

            # execute_values pages large inserts; keep submission order
            order_items = sorted((OrderItem(**dict(r)) for r in item_rows), key=lambda i: i.id)
            return self._map_row_to_order(order_row, order_items)

    def find_by_id(self, order_id: int, user_id: Optional[int] = None, conn=None,
                   for_update: bool = False) -> Optional[Order]:
        """
        Find order by ID with populated items

        Args:
            order_id: Internal order ID
            user_id: When given, only match an order owned by this user
            for_update: Lock the order row until the caller's transaction ends

        Returns:
            Order or None if not found (or not owned)
        """
        conditions = ["o.id = %s"]
        params: list = [order_id]
        if user_id is not None:
            conditions.append("o.user_id = %s")
            params.append(user_id)

        lock = " FOR UPDATE" if for_update else ""

        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders o
                WHERE {" AND ".join(conditions)}{lock}
            """, params)

            row = cursor.fetchone()
            if not row:
                return None

            items = self._fetch_items(cursor, [row['id']])
            return self._map_row_to_order(row, items.get(row['id'], []))

    def find_by_user(self, user_id: int, conn=None) -> List[Order]:
        """
        All orders of a user, newest first, items populated

        Returns:
            List of orders
        """
        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                SELECT {ORDER_COLUMNS}
                FROM orders o
                WHERE o.user_id = %s
                ORDER BY o.created_at DESC, o.id DESC
            """, (user_id,))

            order_rows = cursor.fetchall()
            if not order_rows:
                return []

            items_by_order = self._fetch_items(cursor, [r['id'] for r in order_rows])

            return [
                self._map_row_to_order(row, items_by_order.get(row['id'], []))
                for row in order_rows
            ]

    def update_order_status(self, order_id: int, order_status: str, conn=None) -> bool:
        with self._cursor(conn) as cursor:
            cursor.execute("""
                UPDATE orders
                SET order_status = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING id
            """, (order_status, order_id))
            return cursor.fetchone() is not None

    def update_payment_status(self, order_id: int, payment_status: str,
                              upi_transaction_id: Optional[str] = None, conn=None) -> bool:
        with self._cursor(conn) as cursor:
            cursor.execute("""
                UPDATE orders
                SET payment_status = %s,
                    upi_transaction_id = COALESCE(%s, upi_transaction_id),
                    updated_at = NOW()
                WHERE id = %s
                RETURNING id
            """, (payment_status, upi_transaction_id, order_id))
            return cursor.fetchone() is not None
