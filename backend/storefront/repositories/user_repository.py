"""
User Repository - Data Access Layer for user accounts
"""
from typing import Optional

from storefront.domain.user import User
from storefront.repositories.base import BaseRepository


class UserRepository(BaseRepository):

    def find_by_id(self, user_id: int, conn=None) -> Optional[User]:
        with self._cursor(conn) as cursor:
            cursor.execute("""
                SELECT id, name, email, role, created_at
                FROM users
                WHERE id = %s
            """, (user_id,))

            row = cursor.fetchone()
            return User(**row) if row else None

    def find_by_email(self, email: str, include_password: bool = False, conn=None) -> Optional[User]:
        """
        Find a user by email (case-insensitive)

        Args:
            email: Email address
            include_password: Also load password_hash (login only)
        """
        columns = "id, name, email, role, created_at"
        if include_password:
            columns += ", password_hash"

        with self._cursor(conn) as cursor:
            cursor.execute(f"""
                SELECT {columns}
                FROM users
                WHERE LOWER(email) = LOWER(%s)
            """, (email,))

            row = cursor.fetchone()
            return User(**row) if row else None

    def create(self, name: str, email: str, password_hash: str, role: str = "user", conn=None) -> User:
        with self._cursor(conn) as cursor:
            cursor.execute("""
                INSERT INTO users (name, email, password_hash, role)
                VALUES (%s, %s, %s, %s)
                RETURNING id, name, email, role, created_at
            """, (name, email, password_hash, role))

            return User(**cursor.fetchone())
