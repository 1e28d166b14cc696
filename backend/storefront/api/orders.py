"""
Orders API Endpoints
Order placement for signed-in shoppers and status management for admins

Handlers are plain functions: the order service blocks on psycopg2, so
FastAPI runs them in its threadpool.
"""
from fastapi import APIRouter, Depends, status

from storefront.core.auth import TokenUser, get_current_user, require_admin
from storefront.domain.order import OrderCreate, OrderStatusUpdate, PaymentStatusUpdate
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["Orders"])


def get_order_service() -> OrderService:
    return OrderService()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    user: TokenUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    """
    Place an order for the signed-in user

    Stock is checked for every item first; the order insert and all
    inventory decrements then commit together or not at all.
    """
    order = service.place_order(user.id, payload)
    return {
        "success": True,
        "message": "Order created successfully",
        "order": order.to_dict(),
    }


@router.get("")
def list_orders(
    user: TokenUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    orders = service.list_orders(user.id)
    return {"success": True, "orders": [o.to_dict() for o in orders]}


@router.get("/{order_id}")
def get_order(
    order_id: int,
    user: TokenUser = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    order = service.get_order(user.id, order_id)
    return {"success": True, "order": order.to_dict()}


@router.patch("/{order_id}/status")
def update_order_status(
    order_id: int,
    payload: OrderStatusUpdate,
    _admin: TokenUser = Depends(require_admin),
    service: OrderService = Depends(get_order_service),
):
    """Advance or cancel an order; cancelling returns stock to inventory"""
    order = service.update_order_status(order_id, payload.order_status)
    return {
        "success": True,
        "message": "Order status updated",
        "order": order.to_dict(),
    }


@router.patch("/{order_id}/payment")
def update_payment_status(
    order_id: int,
    payload: PaymentStatusUpdate,
    _admin: TokenUser = Depends(require_admin),
    service: OrderService = Depends(get_order_service),
):
    order = service.update_payment_status(order_id, payload.payment_status, payload.upi_transaction_id)
    return {
        "success": True,
        "message": "Payment status updated",
        "order": order.to_dict(),
    }
