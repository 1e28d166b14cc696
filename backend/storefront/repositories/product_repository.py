"""
Product Repository - Data Access Layer for Products

Handles all database queries for products and returns Product domain models.
Also owns the inventory counter updates used by order placement.
"""
from typing import List, Optional

from psycopg2.extras import execute_values

from storefront.domain.product import Product
from storefront.repositories.base import BaseRepository

PRODUCT_COLUMNS = """
    id, name, description, price, image, categories, brand,
    current_inventory, sku, created_at
"""

# Columns a client may set through create/update
WRITABLE_COLUMNS = (
    'name', 'description', 'price', 'image', 'categories',
    'brand', 'current_inventory', 'sku',
)


class ProductRepository(BaseRepository):
    """
    Repository for Product data access

    All SQL queries for products are centralized here.
    Returns Product domain models, not raw dictionaries.
    """

    @staticmethod
    def _map_row_to_product(row: dict) -> Product:
        return Product(
            id=row['id'],
            name=row['name'],
            description=row['description'] or '',
            price=row['price'],
            image=row['image'],
            categories=list(row['categories'] or []),
            brand=row['brand'] or '',
            current_inventory=row['current_inventory'],
            sku=row.get('sku'),
            created_at=row['created_at'],
        )

    def find_by_id(self, product_id: int, conn=None) -> Optional[Product]:
        """
        Find product by ID

        Args:
            product_id: Internal product ID
            conn: Open connection to run on (optional)

        Returns:
            Product or None if not found
        """
        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                SELECT {PRODUCT_COLUMNS}
                FROM products
                WHERE id = %s
            """, (product_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return self._map_row_to_product(row)

    def find_all(self, category: Optional[str] = None, conn=None) -> List[Product]:
        """
        Find products, newest first

        Args:
            category: Only products tagged with this category

        Returns:
            List of products
        """
        with self._cursor(conn) as cursor:
            if category:
                cursor.execute(f"""
                    SELECT {PRODUCT_COLUMNS}
                    FROM products
                    WHERE %s = ANY(categories)
                    ORDER BY created_at DESC, id DESC
                """, (category,))
            else:
                cursor.execute(f"""
                    SELECT {PRODUCT_COLUMNS}
                    FROM products
                    ORDER BY created_at DESC, id DESC
                """)

            return [self._map_row_to_product(row) for row in cursor.fetchall()]

    def get_category_lists(self, conn=None) -> List[List[str]]:
        """Category arrays of every product in insertion order"""
        with self._cursor(conn) as cursor:
            cursor.execute("SELECT categories FROM products ORDER BY id")
            return [list(row['categories'] or []) for row in cursor.fetchall()]

    def count(self, conn=None) -> int:
        with self._cursor(conn) as cursor:
            cursor.execute("SELECT COUNT(*) AS total FROM products")
            return cursor.fetchone()['total']

    def create(self, data: dict, conn=None) -> Product:
        """
        Insert a product

        Args:
            data: Column values (keys from WRITABLE_COLUMNS)

        Returns:
            The stored product
        """
        columns = [c for c in WRITABLE_COLUMNS if c in data]
        placeholders = ", ".join(["%s"] * len(columns))

        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                INSERT INTO products ({", ".join(columns)})
                VALUES ({placeholders})
                RETURNING {PRODUCT_COLUMNS}
            """, [data[c] for c in columns])

            return self._map_row_to_product(cursor.fetchone())

    def create_many(self, rows: List[dict], conn=None) -> int:
        """Bulk insert products (seeding). Returns number of rows inserted."""
        if not rows:
            return 0

        columns = ('name', 'description', 'price', 'image', 'categories', 'brand', 'current_inventory')
        values = [tuple(row.get(c, '' if c == 'brand' else None) for c in columns) for row in rows]

        with self._cursor(conn) as cursor:
            execute_values(
                cursor,
                f"INSERT INTO products ({', '.join(columns)}) VALUES %s",
                values,
            )
            return len(values)

    def update(self, product_id: int, changes: dict, conn=None) -> Optional[Product]:
        """
        Update the given columns of a product

        Returns:
            Updated product, or None if it doesn't exist
        """
        columns = [c for c in WRITABLE_COLUMNS if c in changes]
        if not columns:
            return self.find_by_id(product_id, conn=conn)

        set_clause = ", ".join(f"{c} = %s" for c in columns)
        values = [changes[c] for c in columns] + [product_id]

        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                UPDATE products
                SET {set_clause}
                WHERE id = %s
                RETURNING {PRODUCT_COLUMNS}
            """, values)

            row = cursor.fetchone()
            return self._map_row_to_product(row) if row else None

    def delete(self, product_id: int, conn=None) -> bool:
        with self._cursor(conn) as cursor:
            cursor.execute("DELETE FROM products WHERE id = %s RETURNING id", (product_id,))
            return cursor.fetchone() is not None

    def reserve_inventory(self, product_id: int, quantity: int, conn=None) -> Optional[int]:
        """
        Atomically take `quantity` units if that many are available.

        The availability check and the decrement are one statement, so two
        concurrent reservations can't both succeed against the same stock:
        the second waits on the row lock and re-checks the predicate.

        Returns:
            Remaining inventory, or None if the product is missing or short
        """
        with self._cursor(conn) as cursor:
            cursor.execute("""
                UPDATE products
                SET current_inventory = current_inventory - %s
                WHERE id = %s AND current_inventory >= %s
                RETURNING current_inventory
            """, (quantity, product_id, quantity))

            row = cursor.fetchone()
            return row['current_inventory'] if row else None

    def restore_inventory(self, product_id: int, quantity: int, conn=None) -> Optional[int]:
        """
        Give `quantity` units back (order cancellation)

        Returns:
            New inventory, or None if the product no longer exists
        """
        with self._cursor(conn) as cursor:
            cursor.execute("""
                UPDATE products
                SET current_inventory = current_inventory + %s
                WHERE id = %s
                RETURNING current_inventory
            """, (quantity, product_id))

            row = cursor.fetchone()
            return row['current_inventory'] if row else None
