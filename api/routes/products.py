"""
api/routes/products.py -- Product catalog routes for the StockRoom REST API.

Routes:
  GET  /products            -- list products, optional ?category= filter
  GET  /products/{id}       -- single product; 404 if unknown
  POST /products            -- create a product; 201 with the stored record

Every route requires a bearer token. The router-level dependency applies
authenticate() to each route, so handlers don't repeat it.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from api.models import ProductCreate, ProductCreatedResponse, ProductResponse
from auth.dependencies import authenticate
from catalog.store import CatalogStore

router = APIRouter(dependencies=[Depends(authenticate)])


@router.get("/products", response_model=list[ProductResponse])
def list_products(request: Request, category: Optional[str] = None) -> list[ProductResponse]:
    """Return all products in insertion order, or only those in `category` (ignoring case)."""
    catalog: CatalogStore = request.app.state.catalog
    return [ProductResponse.from_product(p) for p in catalog.list(category)]


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(request: Request, product_id: str) -> ProductResponse:
    """Return one product by id.

    The path segment is taken as a string so a non-numeric id is a plain 404
    rather than a validation error. Negative ids are valid lookups.
    """
    catalog: CatalogStore = request.app.state.catalog
    try:
        product = catalog.get(int(product_id))
    except ValueError:
        product = None
    if product is None:
        raise HTTPException(status_code=404, detail={"error": "Product not found"})
    return ProductResponse.from_product(product)


@router.post("/products", response_model=ProductCreatedResponse, status_code=201)
def create_product(request: Request, body: ProductCreate) -> JSONResponse:
    """Add a product to the catalog.

    Validation and uniqueness are enforced by CatalogStore.create(); its
    ValidationError and DuplicateError become 400 and 409 in api/main.py.
    """
    catalog: CatalogStore = request.app.state.catalog
    product = catalog.create(
        product_id=body.id,
        name=body.name,
        category=body.category,
        price=body.price,
        in_stock=body.in_stock,
    )
    return JSONResponse(
        status_code=201,
        content=ProductCreatedResponse(
            message="Product created successfully",
            product=ProductResponse.from_product(product),
        ).model_dump(by_alias=True),
    )
