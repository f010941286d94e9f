"""
Cart and checkout pricing.

A cart is a list of (product, quantity) lines. Quantities are clamped to
[1, product stock] on every change. Shipping is a two-tier flat rate keyed
on the destination district.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config import HOME_DISTRICT, HOME_SHIPPING_FEE, OUTSIDE_SHIPPING_FEE


class OutOfStockError(ValueError):
    pass


def clamp_quantity(quantity: int, stock: int) -> int:
    return max(1, min(int(quantity), int(stock)))


def shipping_charge(city: Optional[str], home_district: str = HOME_DISTRICT) -> Optional[float]:
    if not city or not city.strip():
        return None
    if city.strip().lower() == home_district.strip().lower():
        return HOME_SHIPPING_FEE
    return OUTSIDE_SHIPPING_FEE


@dataclass
class CartLine:
    product: Dict[str, Any]
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product["id"]

    @property
    def line_total(self) -> float:
        return float(self.product.get("price", 0)) * self.quantity


@dataclass
class Cart:
    lines: List[CartLine] = field(default_factory=list)

    def _find(self, product_id: str) -> Optional[CartLine]:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def add(self, product: Dict[str, Any], quantity: int = 1) -> CartLine:
        stock = int(product.get("stock") or 0)
        if stock < 1:
            raise OutOfStockError(f"{product.get('name', product.get('id'))} is out of stock")
        line = self._find(product["id"])
        if line:
            line.product = product
            line.quantity = clamp_quantity(line.quantity + quantity, stock)
        else:
            line = CartLine(product=product, quantity=clamp_quantity(quantity, stock))
            self.lines.append(line)
        return line

    def update_quantity(self, product_id: str, quantity: int) -> Optional[CartLine]:
        line = self._find(product_id)
        if line is None:
            return None
        line.quantity = clamp_quantity(quantity, int(line.product.get("stock") or 0))
        return line

    def remove(self, product_id: str) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def clear(self) -> None:
        self.lines = []

    @property
    def subtotal(self) -> float:
        return sum(line.line_total for line in self.lines)

    def __len__(self):
        return len(self.lines)


def quote(cart: Cart, city: Optional[str]) -> Dict[str, Any]:
    charge = shipping_charge(city)
    subtotal = cart.subtotal
    return {
        "lines": [
            {
                "product_id": line.product_id,
                "name": line.product.get("name"),
                "image": line.product.get("image"),
                "price": line.product.get("price"),
                "quantity": line.quantity,
                "line_total": line.line_total,
            }
            for line in cart.lines
        ],
        "subtotal": subtotal,
        "shipping_charge": charge,
        "total": subtotal + (charge or 0),
    }
