# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_media_client, require_catalog_editor
from storefront.data.database import get_db
from storefront.domain.schemas import ProductIn, ProductOut
from storefront.services.errors import NotFoundError
from storefront.services.media_client import MediaClient
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(
    db: Session = Depends(get_db),
    media_client: MediaClient = Depends(get_media_client),
) -> ProductService:
    return ProductService(db, media_client=media_client)


@router.get("/", response_model=List[ProductOut], response_model_exclude_none=True)
def list_products(svc: ProductService = Depends(get_service)):
    return svc.list_products()


@router.get("/category/{category}", response_model=List[ProductOut], response_model_exclude_none=True)
def list_products_by_category(category: str, svc: ProductService = Depends(get_service)):
    return svc.list_products(category=category)


@router.get("/{product_id}", response_model=ProductOut, response_model_exclude_none=True)
def get_product(product_id: int, svc: ProductService = Depends(get_service)):
    try:
        return svc.get_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/",
    response_model=ProductOut,
    response_model_exclude_none=True,
    status_code=201,
    dependencies=[Depends(require_catalog_editor)],
)
def create_product(payload: ProductIn, svc: ProductService = Depends(get_service)):
    try:
        return svc.create_product(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put(
    "/{product_id}",
    response_model=ProductOut,
    response_model_exclude_none=True,
    dependencies=[Depends(require_catalog_editor)],
)
def update_product(product_id: int, payload: ProductIn, svc: ProductService = Depends(get_service)):
    try:
        return svc.update_product(product_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{product_id}", status_code=204, dependencies=[Depends(require_catalog_editor)])
def delete_product(product_id: int, svc: ProductService = Depends(get_service)):
    try:
        svc.delete_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=204)


@router.post(
    "/{product_id}/images",
    response_model=ProductOut,
    response_model_exclude_none=True,
    dependencies=[Depends(require_catalog_editor)],
)
def upload_image(
    product_id: int,
    file: UploadFile = File(...),
    svc: ProductService = Depends(get_service),
):
    #sync handler: the media upload and db writes block, so this runs in the threadpool
    content = file.file.read()
    try:
        return svc.add_image(product_id, file.filename or "image", content, file.content_type)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
