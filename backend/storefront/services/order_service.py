"""
Order Service
Places orders against live inventory and manages order lifecycle

Placement runs as a single database transaction:
1. Validate the request (items, total, shipping address)
2. Check every requested product exists and has enough stock
3. Insert the order and its line items
4. Reserve inventory per product with a conditional decrement
5. Reload the order with current product data and commit

Any failure rolls the whole transaction back, so a rejected or failed
placement leaves neither an order nor a decrement behind.
"""
import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, List, Optional

import psycopg2

from storefront.core.database import transaction
from storefront.core.errors import (
    InsufficientInventoryError,
    InvalidStatusTransitionError,
    NotFoundError,
    StoreError,
    StorefrontError,
    ValidationError,
)
from storefront.domain.order import (
    Order,
    OrderCreate,
    OrderItemCreate,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    can_transition_order,
    can_transition_payment,
)
from storefront.domain.product import Product
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

# orders.total_amount is DECIMAL(12, 2)
MAX_TOTAL_AMOUNT = Decimal("9999999999.99")
CENT = Decimal("0.01")


class OrderService:
    """
    Service for order placement and order status management

    Handles:
    - Request validation
    - All-or-nothing inventory reservation
    - Order listing / lookup scoped to the owner
    - Guarded order and payment status transitions
    """

    def __init__(self, product_repo: ProductRepository = None, order_repo: OrderRepository = None):
        self.product_repo = product_repo or ProductRepository()
        self.order_repo = order_repo or OrderRepository()

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    @staticmethod
    def validate_request(request: OrderCreate) -> None:
        """Raise ValidationError unless the request has everything placement needs"""
        if not request.items or request.total_amount is None or request.shipping_address is None:
            raise ValidationError()

        if request.total_amount <= 0:
            raise ValidationError("Total amount must be greater than zero")

        if request.total_amount > MAX_TOTAL_AMOUNT:
            raise ValidationError(f"Total amount cannot exceed {MAX_TOTAL_AMOUNT}")

        if request.total_amount != request.total_amount.quantize(CENT):
            raise ValidationError("Total amount cannot have more than 2 decimal places")

        for item in request.items:
            if item.quantity < 1:
                raise ValidationError(f"Invalid quantity for {item.display_name}")

    @staticmethod
    def requested_quantities(items: List[OrderItemCreate]) -> "OrderedDict[int, int]":
        """Total quantity per product, in order of first appearance"""
        totals: "OrderedDict[int, int]" = OrderedDict()
        for item in items:
            totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity
        return totals

    def check_inventory(self, items: List[OrderItemCreate], conn=None) -> Dict[int, Product]:
        """
        Check every requested item before anything is written

        Raises:
            NotFoundError: a product doesn't exist
            InsufficientInventoryError: a product has less stock than requested

        Returns:
            Products keyed by id
        """
        requested = self.requested_quantities(items)
        products: Dict[int, Product] = {}

        for item in items:
            if item.product_id in products:
                continue

            product = self.product_repo.find_by_id(item.product_id, conn=conn)
            if product is None:
                raise NotFoundError(f"Product {item.display_name} not found")

            if not product.has_stock_for(requested[item.product_id]):
                raise InsufficientInventoryError(product.name)

            products[item.product_id] = product

        return products

    def place_order(self, user_id: int, request: OrderCreate) -> Order:
        """
        Turn a cart into a persisted order

        Args:
            user_id: Owner, taken from the verified session
            request: Items, total, shipping address, optional payment method

        Returns:
            The created order with each item's current product populated

        Raises:
            ValidationError, NotFoundError, InsufficientInventoryError, StoreError
        """
        self.validate_request(request)
        requested = self.requested_quantities(request.items)
        payment_method = request.payment_method or PaymentMethod.UPI

        try:
            with transaction() as conn:
                products = self.check_inventory(request.items, conn=conn)

                # Snapshot catalog data so history survives product edits/deletes
                snapshots = [
                    {
                        'product_id': item.product_id,
                        'name': products[item.product_id].name,
                        'price': products[item.product_id].price,
                        'image': products[item.product_id].image,
                        'quantity': item.quantity,
                    }
                    for item in request.items
                ]

                order = self.order_repo.create(
                    user_id=user_id,
                    items=snapshots,
                    total_amount=request.total_amount,
                    shipping_address=request.shipping_address,
                    payment_method=payment_method.value,
                    conn=conn,
                )

                for product_id, quantity in requested.items():
                    remaining = self.product_repo.reserve_inventory(product_id, quantity, conn=conn)
                    if remaining is None:
                        # Stock changed after the check above (concurrent order)
                        raise InsufficientInventoryError(products[product_id].name)
                    logger.debug(f"Reserved {quantity} of product {product_id}, {remaining} left")

                placed = self.order_repo.find_by_id(order.id, conn=conn)

        except StoreError as e:
            logger.error(f"Order placement failed for user {user_id}: {e}")
            raise StoreError("Error creating order") from e
        except StorefrontError as e:
            logger.warning(f"Order rejected for user {user_id}: {e.message}")
            raise
        except psycopg2.Error as e:
            # connect / commit failures surface here rather than in a repository
            logger.exception(f"Order placement failed for user {user_id}")
            raise StoreError("Error creating order") from e

        if placed.computed_total is not None and placed.computed_total != placed.total_amount:
            logger.warning(
                f"Order {placed.id}: submitted total {placed.total_amount} "
                f"differs from line items {placed.computed_total}"
            )

        logger.info(f"Order {placed.id} placed by user {user_id} ({placed.total_quantity} units)")
        return placed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_orders(self, user_id: int) -> List[Order]:
        """Caller's orders, newest first"""
        return self.order_repo.find_by_user(user_id)

    def get_order(self, user_id: int, order_id: int) -> Order:
        order = self.order_repo.find_by_id(order_id, user_id=user_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order

    # ------------------------------------------------------------------
    # Status management (admin / payment callbacks)
    # ------------------------------------------------------------------

    def update_order_status(self, order_id: int, new_status: OrderStatus) -> Order:
        """
        Move an order through processing -> shipped -> delivered, or cancel it
        before delivery. Cancelling returns the items' units to inventory
        (products deleted since are skipped).
        """
        with transaction() as conn:
            order = self.order_repo.find_by_id(order_id, conn=conn, for_update=True)
            if order is None:
                raise NotFoundError("Order not found")

            if not can_transition_order(order.order_status, new_status):
                raise InvalidStatusTransitionError("orderStatus", order.order_status.value, new_status.value)

            self.order_repo.update_order_status(order_id, new_status.value, conn=conn)

            if new_status == OrderStatus.CANCELLED:
                for item in order.items:
                    if item.product_id is None:
                        continue
                    self.product_repo.restore_inventory(item.product_id, item.quantity, conn=conn)

            updated = self.order_repo.find_by_id(order_id, conn=conn)

        logger.info(f"Order {order_id}: {order.order_status.value} -> {new_status.value}")
        return updated

    def update_payment_status(self, order_id: int, new_status: PaymentStatus,
                              upi_transaction_id: Optional[str] = None) -> Order:
        """pending -> completed | failed, and failed -> pending for a retry"""
        with transaction() as conn:
            order = self.order_repo.find_by_id(order_id, conn=conn, for_update=True)
            if order is None:
                raise NotFoundError("Order not found")

            if not can_transition_payment(order.payment_status, new_status):
                raise InvalidStatusTransitionError("paymentStatus", order.payment_status.value, new_status.value)

            self.order_repo.update_payment_status(order_id, new_status.value, upi_transaction_id, conn=conn)
            updated = self.order_repo.find_by_id(order_id, conn=conn)

        logger.info(f"Order {order_id}: payment {order.payment_status.value} -> {new_status.value}")
        return updated
