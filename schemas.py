"""
Database Schemas for the Boutique Storefront

Each Pydantic model represents a collection in MongoDB.
Collection name is the lowercase class name.
"""

from pydantic import BaseModel, ConfigDict, Field, EmailStr, field_validator
from typing import Optional, List, Dict, Any, Literal


OrderStatus = Literal["Pending", "Processing", "Shipped", "Delivered", "Cancelled"]
ORDER_STATUSES = ("Pending", "Processing", "Shipped", "Delivered", "Cancelled")

Role = Literal["admin", "manager", "editor", "user"]
ROLES = ("admin", "manager", "editor", "user")


class Category(BaseModel):
    id: Optional[str] = Field(None, description="Slug, derived from the name when missing")
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None


class Product(BaseModel):
    id: Optional[str] = Field(None, description="Public product id")
    name: str = Field(..., description="Product name")
    description: str
    price: float = Field(..., ge=0, description="Price in BDT")
    image: str = Field(..., description="Primary image URL")
    images: List[str] = Field(default_factory=list)
    image_hint: str = ""
    category: str = Field(..., description="Category id")
    stock: int = Field(0, ge=0)
    highlights: Optional[str] = None
    size: Optional[str] = None
    size_guide: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    image: Optional[str] = None
    images: Optional[List[str]] = None
    image_hint: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    highlights: Optional[str] = None
    size: Optional[str] = None
    size_guide: Optional[str] = None


class OrderItem(BaseModel):
    product_id: Optional[str] = None
    name: str
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    image: Optional[str] = None


def format_amount(value) -> str:
    """Render a number the way the storefront shows it: 3260.0 -> "3260", 12.5 -> "12.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _amount_as_string(v):
    if isinstance(v, bool):
        raise ValueError("amount must be a number or numeric string")
    if isinstance(v, (int, float)):
        return format_amount(v)
    return v


class Order(BaseModel):
    id: Optional[str] = None
    customer: str = Field(..., description="Customer full name")
    email: Optional[str] = Field(None, description="Links the order to a user account")
    phone: str
    address: str
    amount: str = Field(..., description="Order total, stored as a string")
    status: OrderStatus = "Pending"
    products: List[OrderItem] = Field(default_factory=list)
    date: Optional[str] = Field(None, description="ISO-8601 timestamp")
    subtotal: Optional[float] = None
    shipping_charge: Optional[float] = None
    shipping_info: Optional[Dict[str, Any]] = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return _amount_as_string(v)


class OrderUpdate(BaseModel):
    customer: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    amount: Optional[str] = None
    status: Optional[OrderStatus] = None
    products: Optional[List[OrderItem]] = None
    date: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return _amount_as_string(v)


class AddressBookEntry(BaseModel):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = Field(None, description="District / region")
    postcode: Optional[str] = None
    is_default_shipping: bool = False
    is_default_billing: bool = False


class User(BaseModel):
    name: str = Field(..., description="Full name")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., description="Plain text password")
    role: Role = "user"
    image: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    birthday: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")
    address_book: List[AddressBookEntry] = Field(default_factory=list)


class TeamMember(BaseModel):
    email: EmailStr
    name: str
    role: Role = "editor"


class Inquiry(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    subject: str
    message: str
    date: str
    status: Literal["Pending", "Resolved", "Closed"] = "Pending"


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile; role and password go through other routes."""
    model_config = ConfigDict(extra="ignore")

    email: str
    name: Optional[str] = Field(None, min_length=2)
    image: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[Literal["male", "female", "other"]] = None
    birthday: Optional[str] = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$", description="YYYY-MM-DD")
    address_book: Optional[List[AddressBookEntry]] = None
