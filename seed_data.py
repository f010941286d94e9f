"""Sample catalog, orders and inquiries used by /api/seed and /api/inquiries."""

CATEGORIES = [
    {"id": "three-piece", "name": "Three-Piece"},
    {"id": "plazo-khimar-set", "name": "Plazo Khimar Set"},
]

PRODUCTS = [
    {
        "id": "1",
        "name": "Elegant Floral Three-Piece",
        "description": "A beautifully crafted three-piece suit with an elegant floral design. Made from high-quality fabric for a comfortable and stylish fit.",
        "price": 3200,
        "image": "/images/products/three-piece-1.png",
        "images": ["/images/products/three-piece-1.png", "/images/products/three-piece-5.jpg"],
        "image_hint": "Woman in grey floral three piece",
        "category": "three-piece",
        "stock": 10,
        "size_guide": "Small: Chest 36, Length 40\nMedium: Chest 38, Length 42\nLarge: Chest 40, Length 44",
    },
    {
        "id": "2",
        "name": "Modern Silk Three-Piece",
        "description": "Luxury silk three-piece with a contemporary cut for formal events and celebrations.",
        "price": 4500,
        "image": "/images/products/three-piece-2.jpg",
        "images": ["/images/products/three-piece-2.jpg", "/images/products/three-piece-3.jpg"],
        "image_hint": "Woman in silk three piece",
        "category": "three-piece",
        "stock": 5,
    },
    {
        "id": "3",
        "name": "Classic Cotton Three-Piece",
        "description": "Breathable everyday cotton three-piece with hand block print.",
        "price": 2500,
        "image": "/images/products/three-piece-4.jpg",
        "images": [],
        "image_hint": "Cotton three piece",
        "category": "three-piece",
        "stock": 20,
    },
    {
        "id": "4",
        "name": "Georgette Plazo Khimar Set",
        "description": "Flowing georgette khimar with matching plazo, lightweight and modest.",
        "price": 2800,
        "image": "/images/products/plazo-khimar-1.jpg",
        "images": ["/images/products/plazo-khimar-1.jpg"],
        "image_hint": "Woman in plazo khimar set",
        "category": "plazo-khimar-set",
        "stock": 15,
        "size": "Free size",
    },
]

ORDERS = [
    {
        "id": "ORD001",
        "customer": "Ayesha Rahman",
        "phone": "01711223344",
        "address": "House 12, Road 5, Dhanmondi, Dhaka",
        "amount": "3280",
        "status": "Delivered",
        "products": [{"name": "Elegant Floral Three-Piece", "quantity": 1, "price": 3200}],
        "date": "2024-05-02T10:15:00Z",
    },
    {
        "id": "ORD002",
        "customer": "Nusrat Jahan",
        "phone": "01822334455",
        "address": "Agrabad, Chattogram",
        "amount": "4650",
        "status": "Shipped",
        "products": [{"name": "Modern Silk Three-Piece", "quantity": 1, "price": 4500}],
        "date": "2024-05-04T14:40:00Z",
    },
    {
        "id": "ORD003",
        "customer": "Ayesha Rahman",
        "phone": "01711223344",
        "address": "House 12, Road 5, Dhanmondi, Dhaka",
        "amount": "5680",
        "status": "Processing",
        "products": [
            {"name": "Georgette Plazo Khimar Set", "quantity": 2, "price": 2800},
        ],
        "date": "2024-05-09T09:05:00Z",
    },
    {
        "id": "ORD004",
        "customer": "Farhana Akter",
        "phone": "01933445566",
        "address": "Zindabazar, Sylhet",
        "amount": "2650",
        "status": "Pending",
        "products": [{"name": "Classic Cotton Three-Piece", "quantity": 1, "price": 2500}],
        "date": "2024-05-11T18:20:00Z",
    },
]

INQUIRIES = [
    {
        "id": "INQ-001",
        "customer_name": "Aarav Kumar",
        "customer_email": "aarav.kumar@example.com",
        "customer_phone": "01711223344",
        "subject": "Question about Three-Piece Sizing",
        "message": "I was looking at the Elegant Floral Three-Piece. Can you share the measurements for the medium size?",
        "date": "2024-05-12T08:00:00Z",
        "status": "Pending",
    },
    {
        "id": "INQ-002",
        "customer_name": "Fatima Al-Jamil",
        "customer_email": "fatima.j@example.com",
        "customer_phone": "01822334455",
        "subject": "Issue with recent order #ORD045",
        "message": "The Soft Cotton Hijab in my order came in navy instead of black. How can I exchange it?",
        "date": "2024-05-11T08:00:00Z",
        "status": "Pending",
    },
    {
        "id": "INQ-003",
        "customer_name": "Sadia Islam",
        "customer_email": "sadia.islam@example.com",
        "customer_phone": "01933445566",
        "subject": "Delivery time outside Dhaka",
        "message": "How long does delivery to Rajshahi usually take?",
        "date": "2024-05-08T08:00:00Z",
        "status": "Resolved",
    },
]
