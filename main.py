import logging
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, HTTPException, BackgroundTasks, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from pymongo.errors import PyMongoError

import api_response
import config
import database
import firebase_app
import notifications
import seed_data
import team
import uploads
from api_response import ApiError
from cart import Cart, OutOfStockError, quote
from customers import aggregate_customers, parse_amount
from schemas import (
    Category,
    CategoryUpdate,
    Order,
    OrderUpdate,
    Product,
    ProductUpdate,
    ProfileUpdate,
    Role,
    TeamMember,
    ORDER_STATUSES,
    ROLES,
    format_amount,
    Inquiry,
    User,
)
from services import (
    CategoryService,
    OrderService,
    ProductService,
    UserExistsError,
    UserService,
    user_to_dict,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("storefront")

app = FastAPI(title="Rodela's Lifestyle API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
api_response.install(app)

success = api_response.success


# Auth models (plain-text password comparison, no tokens)
class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class FirebaseLoginRequest(BaseModel):
    id_token: str


class UserAction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    action: str
    role: Optional[str] = None


class OrderUpdateWithId(OrderUpdate):
    id: Optional[str] = None


# Cart / checkout models
class CartItemIn(BaseModel):
    product_id: str
    quantity: int = 1


class QuoteRequest(BaseModel):
    items: List[CartItemIn]
    city: Optional[str] = None


class CheckoutRequest(BaseModel):
    items: List[CartItemIn]
    full_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    full_address: str = Field(..., min_length=1)
    email: Optional[str] = None


class TeamRoleUpdate(BaseModel):
    role: Role


@app.get("/")
async def root():
    return {"message": "Rodela's Lifestyle API running"}


@app.get("/test")
def test_database():
    db = database.get_db()
    response = {
        "backend": "✅ Running",
        "database": "❌ Not Available",
    }
    try:
        if db is not None:
            response["database"] = "✅ Connected"
            response["collections"] = db.list_collection_names()[:10]
    except Exception as e:
        response["database"] = f"⚠️ {str(e)[:80]}"
    return response


# Products
@app.get("/api/products")
def list_products(category: Optional[str] = None):
    try:
        products = ProductService.list({"category": category} if category else None)
    except PyMongoError:
        logger.exception("Error fetching products")
        raise HTTPException(status_code=500, detail="Failed to fetch products")
    return success(products)


@app.post("/api/products")
def create_product(p: Product):
    try:
        product = ProductService.create(p.model_dump())
    except PyMongoError:
        logger.exception("Error creating product")
        raise HTTPException(status_code=500, detail="Failed to create product")
    return success(product, 201)


@app.get("/api/products/{product_id}")
def get_product(product_id: str):
    try:
        product = ProductService.get(product_id)
    except PyMongoError:
        logger.exception("Error fetching product %s", product_id)
        raise HTTPException(status_code=500, detail="Failed to fetch product")
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return success(product)


@app.put("/api/products/{product_id}")
def update_product(product_id: str, payload: ProductUpdate):
    try:
        product = ProductService.update(product_id, payload.model_dump(exclude_none=True))
    except PyMongoError:
        logger.exception("Error updating product %s", product_id)
        raise HTTPException(status_code=500, detail="Failed to update product")
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return success(product)


@app.delete("/api/products/{product_id}")
def delete_product(product_id: str):
    try:
        product = ProductService.delete(product_id)
    except PyMongoError:
        logger.exception("Error deleting product %s", product_id)
        raise HTTPException(status_code=500, detail="Failed to delete product")
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return success({"message": "Product deleted"})


# Orders
@app.get("/api/orders")
def list_orders(email: Optional[str] = None, status: Optional[str] = None):
    filt = {}
    if email:
        filt["email"] = email
    if status:
        if status not in ORDER_STATUSES:
            raise HTTPException(status_code=400, detail="Invalid status")
        filt["status"] = status
    try:
        orders = OrderService.list(filt)
    except PyMongoError:
        logger.exception("Error fetching orders")
        raise HTTPException(status_code=500, detail="Failed to fetch orders")
    return success(orders)


def _create_order(order: dict, background_tasks: BackgroundTasks) -> dict:
    try:
        created = OrderService.create(order)
    except PyMongoError:
        logger.exception("Error creating order")
        raise HTTPException(status_code=500, detail="Failed to create order")
    logger.info("Order %s created for %s (%s)", created["id"], created["customer"], created["amount"])
    background_tasks.add_task(notifications.notify_order_placed, created, created.get("email"))
    return created


@app.post("/api/orders")
def create_order(req: Order, background_tasks: BackgroundTasks):
    created = _create_order(req.model_dump(exclude_none=True), background_tasks)
    return success(created, 201)


@app.put("/api/orders")
def update_order_by_body(req: OrderUpdateWithId):
    if not req.id:
        raise HTTPException(status_code=400, detail="Order ID is required")
    updates = req.model_dump(exclude_none=True)
    order_id = updates.pop("id")
    return _update_order(order_id, updates)


@app.get("/api/orders/{order_id}")
def get_order(order_id: str):
    try:
        order = OrderService.get(order_id)
    except PyMongoError:
        logger.exception("Error fetching order %s", order_id)
        raise HTTPException(status_code=500, detail="Failed to fetch order")
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return success(order)


def _update_order(order_id: str, updates: dict):
    if not updates:
        raise HTTPException(status_code=400, detail="Nothing to update")
    try:
        order = OrderService.update(order_id, updates)
    except PyMongoError:
        logger.exception("Error updating order %s", order_id)
        raise HTTPException(status_code=500, detail="Failed to update order")
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    if "status" in updates:
        logger.info("Order %s status set to %s", order_id, updates["status"])
    return success(order)


@app.put("/api/orders/{order_id}")
def update_order(order_id: str, payload: OrderUpdate):
    return _update_order(order_id, payload.model_dump(exclude_none=True))


@app.delete("/api/orders/{order_id}")
def delete_order(order_id: str):
    try:
        order = OrderService.delete(order_id)
    except PyMongoError:
        logger.exception("Error deleting order %s", order_id)
        raise HTTPException(status_code=500, detail="Failed to delete order")
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return success({"message": "Order deleted"})


# Categories
@app.get("/api/categories")
def list_categories():
    try:
        return success(CategoryService.list())
    except PyMongoError:
        logger.exception("Error fetching categories")
        raise HTTPException(status_code=500, detail="Failed to fetch categories")


@app.post("/api/categories")
def create_category(c: Category):
    try:
        category = CategoryService.create(c.model_dump(exclude_none=True))
    except PyMongoError:
        logger.exception("Error creating category")
        raise HTTPException(status_code=500, detail="Failed to create category")
    return success(category, 201)


@app.put("/api/categories/{category_id}")
def update_category(category_id: str, payload: CategoryUpdate):
    try:
        category = CategoryService.update(category_id, payload.model_dump(exclude_none=True))
    except PyMongoError:
        logger.exception("Error updating category %s", category_id)
        raise HTTPException(status_code=500, detail="Failed to update category")
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return success(category)


@app.delete("/api/categories/{category_id}")
def delete_category(category_id: str):
    try:
        category = CategoryService.delete(category_id)
    except PyMongoError:
        logger.exception("Error deleting category %s", category_id)
        raise HTTPException(status_code=500, detail="Failed to delete category")
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return success({"message": "Category deleted"})


# Customers are a view over orders, never stored
@app.get("/api/customers")
def list_customers():
    try:
        orders = OrderService.list()
    except PyMongoError:
        logger.exception("Error fetching orders for customers")
        raise HTTPException(status_code=500, detail="Failed to fetch customers")
    return success(aggregate_customers(orders))


@app.get("/api/inquiries")
def list_inquiries():
    return success([Inquiry(**i).model_dump() for i in seed_data.INQUIRIES])


@app.get("/api/dashboard")
def dashboard():
    try:
        orders = OrderService.list()
        products = ProductService.list()
    except PyMongoError:
        logger.exception("Error fetching dashboard data")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard data")

    by_status = {s: 0 for s in ORDER_STATUSES}
    for o in orders:
        by_status[o.get("status", "Pending")] = by_status.get(o.get("status", "Pending"), 0) + 1
    revenue = sum(parse_amount(o.get("amount")) for o in orders if o.get("status") != "Cancelled")
    summary = {
        "total_orders": len(orders),
        "total_products": len(products),
        "total_revenue": round(revenue, 2),
        "orders_by_status": by_status,
    }
    return success({"orders": orders, "products": products, "summary": summary})


# Auth endpoints (very simple; plain-text password for demo)
@app.post("/api/auth/register")
def register(req: RegisterRequest):
    try:
        user = UserService.create_user(
            User(name=req.name, email=req.email, password=req.password).model_dump(exclude_none=True)
        )
    except UserExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PyMongoError:
        logger.exception("Error registering %s", req.email)
        raise HTTPException(status_code=500, detail="Registration failed")
    logger.info("Registered user %s", req.email)
    return success(user_to_dict(user), 201)


@app.post("/api/auth/login")
def login(req: LoginRequest):
    try:
        user = UserService.find_by_email(req.email)
    except PyMongoError:
        logger.exception("Error logging in %s", req.email)
        raise HTTPException(status_code=500, detail="Login failed")

    if not user or user.get("password") != req.password:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return success(user_to_dict(user))


@app.post("/api/auth/firebase")
def firebase_login(req: FirebaseLoginRequest):
    try:
        return success(firebase_app.verify_login(req.id_token))
    except firebase_app.FirebaseNotConfigured:
        raise HTTPException(status_code=503, detail="Firebase is not configured")
    except PermissionError as e:
        raise HTTPException(status_code=401, detail=str(e))


# Profile
@app.get("/api/profile")
def get_profile(email: Optional[str] = None):
    if not email:
        raise HTTPException(status_code=400, detail="Email is required")
    try:
        user = UserService.find_by_email(email)
    except PyMongoError:
        logger.exception("Error fetching profile %s", email)
        raise HTTPException(status_code=500, detail="Failed to fetch profile")
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return success(user_to_dict(user))


@app.put("/api/profile")
def update_profile(payload: ProfileUpdate):
    updates = payload.model_dump(exclude={"email"}, exclude_none=True)
    try:
        user = UserService.update_profile(payload.email, updates)
    except PyMongoError:
        logger.exception("Error updating profile %s", payload.email)
        raise HTTPException(status_code=500, detail="Failed to update profile")
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return success(user_to_dict(user))


# Users (admin)
@app.get("/api/users")
def list_users():
    try:
        return success(UserService.list_users())
    except PyMongoError:
        logger.exception("Error fetching users")
        raise HTTPException(status_code=500, detail="Failed to fetch users")


@app.put("/api/users")
def update_user(req: UserAction):
    try:
        if req.action == "update_role":
            if req.role not in ROLES:
                raise HTTPException(status_code=400, detail="Invalid role")
            result = UserService.update_role(req.user_id, req.role)
        elif req.action == "delete_user":
            result = UserService.delete_user(req.user_id)
        else:
            raise HTTPException(status_code=400, detail="Invalid action")
    except PyMongoError:
        logger.exception("Error updating user %s", req.user_id)
        raise HTTPException(status_code=500, detail="Failed to update user")
    if not result:
        raise HTTPException(status_code=404, detail="User not found")
    return success(user_to_dict(result))


# Cart pricing and checkout
def _build_cart(items: List[CartItemIn]) -> Cart:
    products = ProductService.get_many([i.product_id for i in items])
    cart = Cart()
    for item in items:
        product = products.get(item.product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        try:
            cart.add(product, item.quantity)
        except OutOfStockError as e:
            raise ApiError(409, str(e), {"product_id": item.product_id})
    return cart


@app.post("/api/cart/quote")
def cart_quote(req: QuoteRequest):
    try:
        cart = _build_cart(req.items)
    except PyMongoError:
        logger.exception("Error pricing cart")
        raise HTTPException(status_code=500, detail="Failed to price cart")
    return success(quote(cart, req.city))


@app.post("/api/checkout")
def checkout(req: CheckoutRequest, background_tasks: BackgroundTasks):
    if not req.items:
        raise HTTPException(status_code=400, detail="Cart is empty")
    try:
        cart = _build_cart(req.items)
    except PyMongoError:
        logger.exception("Error pricing cart for checkout")
        raise HTTPException(status_code=500, detail="Failed to create order")

    priced = quote(cart, req.city)
    order = {
        "customer": req.full_name,
        "phone": req.phone,
        "address": f"{req.full_address}, {req.city}",
        "amount": format_amount(priced["total"]),
        "status": "Pending",
        "products": [
            {
                "product_id": line["product_id"],
                "name": line["name"],
                "quantity": line["quantity"],
                "price": line["price"],
                "image": line["image"],
            }
            for line in priced["lines"]
        ],
        "subtotal": priced["subtotal"],
        "shipping_charge": priced["shipping_charge"],
        "shipping_info": {
            "full_name": req.full_name,
            "phone": req.phone,
            "city": req.city,
            "full_address": req.full_address,
            "method_name": "Standard Delivery",
        },
    }
    if req.email:
        order["email"] = req.email
    return success(_create_order(order, background_tasks), 201)


# Uploads
@app.post("/api/upload")
def upload(file: Optional[UploadFile] = File(None)):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    try:
        url = uploads.save_local(file.filename, file.file.read())
    except OSError:
        logger.exception("Upload error")
        raise HTTPException(status_code=500, detail="Upload failed")
    return success({"url": url})


@app.post("/api/upload/remote")
def upload_remote(file: Optional[UploadFile] = File(None)):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")
    try:
        url = uploads.upload_to_imgbb(file.filename, file.file.read())
    except uploads.ImageHostError as e:
        logger.warning("Image host upload failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))
    return success({"url": url})


# Seed
@app.post("/api/seed")
def seed():
    db = database.get_db()
    if db is None:
        raise HTTPException(status_code=500, detail="Database not configured")
    now = datetime.utcnow()
    try:
        for name, docs in (
            ("product", seed_data.PRODUCTS),
            ("category", seed_data.CATEGORIES),
            ("order", seed_data.ORDERS),
        ):
            db[name].delete_many({})
            db[name].insert_many([{**d, "created_at": now, "updated_at": now} for d in docs])
    except PyMongoError:
        logger.exception("Seeding error")
        raise HTTPException(status_code=500, detail="Failed to seed database")
    return success({
        "message": "Database seeded successfully",
        "products": len(seed_data.PRODUCTS),
        "categories": len(seed_data.CATEGORIES),
        "orders": len(seed_data.ORDERS),
    })


# Team members (Firestore)
def _team_call(fn, *args):
    try:
        return fn(*args)
    except firebase_app.FirebaseNotConfigured:
        raise HTTPException(status_code=503, detail="Firebase is not configured")


@app.get("/api/team")
def list_team():
    return success(_team_call(team.list_members))


@app.post("/api/team")
def add_team_member(member: TeamMember):
    return success(_team_call(team.add_member, member.email, member.name, member.role), 201)


@app.put("/api/team/{email}")
def update_team_member(email: str, payload: TeamRoleUpdate):
    member = _team_call(team.update_role, email, payload.role)
    if member is None:
        raise HTTPException(status_code=404, detail="Team member not found")
    return success(member)


@app.delete("/api/team/{email}")
def remove_team_member(email: str):
    if not _team_call(team.remove_member, email):
        raise HTTPException(status_code=404, detail="Team member not found")
    return success({"message": "Team member removed"})


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
