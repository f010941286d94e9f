import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


def parse_amount(amount: Any) -> float:
    try:
        return float(amount)
    except (TypeError, ValueError):
        logger.warning("Unparsable order amount %r, counting it as 0", amount)
        return 0.0


def _parse_date(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _later(candidate: Any, current: Any) -> bool:
    a, b = _parse_date(candidate), _parse_date(current)
    if a is None:
        return False
    if b is None:
        return True
    # mixed naive/aware timestamps compare on wall-clock
    if (a.tzinfo is None) != (b.tzinfo is None):
        a, b = a.replace(tzinfo=None), b.replace(tzinfo=None)
    return a > b


def aggregate_customers(orders: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Group orders into customers keyed by (phone, name).

    Each customer carries the order count, the summed order amounts and the
    date of the latest order. On equal dates the first order seen wins.
    """
    customers: Dict[tuple, Dict[str, Any]] = {}

    for order in orders:
        name = order.get("customer", "")
        phone = order.get("phone", "")
        key = (phone, name)
        amount = parse_amount(order.get("amount"))
        existing = customers.get(key)

        if existing is None:
            customers[key] = {
                "name": name,
                "phone": phone,
                "total_orders": 1,
                "amounts": [amount],
                "last_order_date": order.get("date"),
            }
            continue

        existing["total_orders"] += 1
        existing["amounts"].append(amount)
        if _later(order.get("date"), existing["last_order_date"]):
            existing["last_order_date"] = order.get("date")

    for customer in customers.values():
        customer["total_spent"] = math.fsum(customer.pop("amounts"))

    return sorted(customers.values(), key=lambda c: c["total_spent"], reverse=True)
