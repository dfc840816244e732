# storefront/catalog_service/main.py
from uuid import uuid4

from fastapi import Body, FastAPI, HTTPException, Query, Response

app = FastAPI(title="Catalog Service (dev mock)")


CATEGORIES = {
    "c1": {"id": "c1", "name": "Home Decor", "slug": "home-decor", "description": "", "imageUrl": ""},
    "c2": {"id": "c2", "name": "Lighting", "slug": "lighting", "description": "", "imageUrl": ""},
}

PRODUCTS = {
    "vase-1": {
        "id": "vase-1",
        "name": "Vase",
        "description": "Ceramic vase",
        "price": 25.00,
        "stock": 10,
        "category": "home-decor",
        "coverImage": "",
        "images": [],
        "featured": True,
    },
    "lamp-1": {
        "id": "lamp-1",
        "name": "Lamp",
        "description": "Desk lamp",
        "price": 40.00,
        "stock": 5,
        "category": "lighting",
        "coverImage": "",
        "images": [],
        "featured": False,
    },
}

ORDERS = {
    "o1": {"id": "o1", "userId": "u1", "total": 65.00, "status": "pending", "createdAt": "2024-05-01T10:00:00+00:00"},
    "o2": {"id": "o2", "userId": "u2", "total": 40.00, "status": "shipped", "createdAt": "2024-05-02T10:00:00+00:00"},
}

SETTINGS = {}


def _get_or_404(collection: dict, doc_id: str, what: str) -> dict:
    doc = collection.get(doc_id)
    if not doc:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return doc


#products
@app.get("/products")
def list_products(category: str | None = Query(None), featured: bool | None = Query(None)):
    products = list(PRODUCTS.values())
    if category:
        products = [p for p in products if p["category"] == category]
    if featured is not None:
        products = [p for p in products if p["featured"] == featured]
    return products


@app.get("/products/{product_id}")
def get_product(product_id: str):
    return _get_or_404(PRODUCTS, product_id, "Product")


@app.put("/products/{product_id}")
def put_product(product_id: str, body: dict = Body(...)):
    PRODUCTS[product_id] = {**body, "id": product_id}
    return PRODUCTS[product_id]


@app.patch("/products/{product_id}")
def patch_product(product_id: str, body: dict = Body(...)):
    product = _get_or_404(PRODUCTS, product_id, "Product")
    product.update({k: v for k, v in body.items() if k != "id"})
    return product


@app.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: str):
    _get_or_404(PRODUCTS, product_id, "Product")
    del PRODUCTS[product_id]
    return Response(status_code=204)


#categories
@app.get("/categories")
def list_categories():
    return list(CATEGORIES.values())


@app.post("/categories", status_code=201)
def create_category(body: dict = Body(...)):
    category_id = uuid4().hex
    CATEGORIES[category_id] = {**body, "id": category_id}
    return CATEGORIES[category_id]


@app.put("/categories/{category_id}")
def put_category(category_id: str, body: dict = Body(...)):
    _get_or_404(CATEGORIES, category_id, "Category")
    CATEGORIES[category_id] = {**body, "id": category_id}
    return CATEGORIES[category_id]


@app.delete("/categories/{category_id}", status_code=204)
def delete_category(category_id: str):
    _get_or_404(CATEGORIES, category_id, "Category")
    del CATEGORIES[category_id]
    return Response(status_code=204)


#orders, settings
@app.get("/orders")
def list_orders():
    return list(ORDERS.values())


@app.get("/settings/{name}")
def get_settings(name: str):
    return _get_or_404(SETTINGS, name, "Settings")


@app.put("/settings/{name}")
def put_settings(name: str, body: dict = Body(...)):
    SETTINGS[name] = body
    return body
