"""/api/products - installation package catalog"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from boiler_funnel.api.schemas import (
    BedroomCount,
    BoilerType,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductSchema,
    ProductUpdate,
    SuccessResponse,
)
from boiler_funnel.api.dependencies import get_request_id, parse_object_id
from boiler_funnel.infrastructure.database.session import get_db
from boiler_funnel.infrastructure.database.repositories import ProductRepository
from boiler_funnel.domain.catalog import filter_products

router = APIRouter()


@router.get("/all", response_model=ProductListResponse)
def list_products(
    boiler_type: BoilerType | None = Query(None, description="Only products for this boiler type"),
    bedroom_count: BedroomCount | None = Query(None, description="Only products suitable for this many bedrooms"),
    limit: int | None = Query(None, ge=1, description="Maximum number of products"),
    db: Session = Depends(get_db),
):
    """Products newest first, optionally matched to the customer's answers"""
    products = filter_products(
        ProductRepository(db).list_products(),
        boiler_type=boiler_type,
        bedroom_count=bedroom_count,
    )
    if limit is not None:
        products = products[:limit]
    return ProductListResponse(data=[ProductSchema.model_validate(p) for p in products])


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = ProductRepository(db).get_product(parse_object_id(product_id, "product"))
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductResponse(data=ProductSchema.model_validate(product))


@router.post("/create", response_model=ProductResponse, status_code=201)
def create_product(request_body: ProductCreate, request: Request, db: Session = Depends(get_db)):
    request_id = get_request_id(request)
    repo = ProductRepository(db)

    try:
        product = repo.create_product(request_body.model_dump())
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error creating product: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to create product")

    logging.info("Product created", extra={"request_id": request_id, "product_id": str(product.id)})
    return ProductResponse(message="Product created successfully", data=ProductSchema.model_validate(product))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    request_body: ProductUpdate,
    request: Request,
    db: Session = Depends(get_db),
):
    request_id = get_request_id(request)
    repo = ProductRepository(db)
    product_uuid = parse_object_id(product_id, "product")

    try:
        product = repo.update_product(product_uuid, request_body.model_dump(exclude_unset=True))
        if product:
            db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error updating product: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Failed to update product")

    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return ProductResponse(message="Product updated successfully", data=ProductSchema.model_validate(product))


@router.delete("/{product_id}", response_model=SuccessResponse)
def delete_product(product_id: str, request: Request, db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    product_uuid = parse_object_id(product_id, "product")

    try:
        deleted = repo.delete_product(product_uuid)
        if deleted:
            db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Error deleting product: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Failed to delete product")

    if not deleted:
        raise HTTPException(status_code=404, detail="Product not found")
    return SuccessResponse(message="Product deleted successfully")
