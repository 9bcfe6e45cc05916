"""
상품 CRUD API 엔드포인트

상품 목록 조회, 단건 조회, 생성, 수정, 삭제 기능을 제공합니다.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_product_store
from app.core.exceptions import (
    LockAcquisitionException,
    PersistenceException,
    ProductNotFoundException,
)
from app.db.json_store import JsonProductStore
from app.models.product import Product
from app.schemas.product import (
    ProductCreateRequest,
    ProductDeleteResponse,
    ProductUpdateRequest,
)
from app.services.product_service import ProductService


router = APIRouter()


def _to_http_exception(error: Exception) -> HTTPException:
    """도메인 예외를 HTTP 예외로 변환"""
    if isinstance(error, ProductNotFoundException):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, LockAcquisitionException):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )


@router.get("/products", response_model=List[Product])
def list_products(store: JsonProductStore = Depends(get_product_store)):
    """
    모든 상품 목록을 저장 순서대로 조회합니다.

    페이지네이션과 검색은 클라이언트에서 처리합니다.

    Example:
        Response (200):
        ```json
        [
            {
                "id": 1,
                "name": "Laptop Gamer",
                "description": "Laptop de alta gama para gaming",
                "price": 1299.99,
                "category": "Electrónica",
                "stock": 15,
                "createdAt": "2025-01-22T10:30:00.000Z",
                "updatedAt": "2025-01-22T10:30:00.000Z"
            }
        ]
        ```
    """
    try:
        return ProductService.list_products(store)
    except LockAcquisitionException as e:
        raise _to_http_exception(e)


@router.get("/products/{product_id}", response_model=Product)
def get_product(
    product_id: int,
    store: JsonProductStore = Depends(get_product_store),
):
    """
    특정 상품의 상세 정보를 조회합니다.

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
    """
    try:
        return ProductService.get_product(product_id, store)
    except (ProductNotFoundException, LockAcquisitionException) as e:
        raise _to_http_exception(e)


@router.post(
    "/products", response_model=Product, status_code=status.HTTP_201_CREATED
)
def create_product(
    product_data: ProductCreateRequest,
    store: JsonProductStore = Depends(get_product_store),
):
    """
    새 상품을 생성합니다.

    ID, createdAt, updatedAt은 서버에서 발급합니다.
    stock이 없거나 숫자가 아니면 0, description이 없으면 빈 문자열입니다.

    Example:
        Request:
        ```json
        {
            "name": "Laptop Gamer",
            "price": 1299.99,
            "category": "Electrónica",
            "stock": 15
        }
        ```

    Raises:
        HTTPException 500: 파일 저장 실패
    """
    try:
        return ProductService.create_product(product_data, store)
    except (PersistenceException, LockAcquisitionException) as e:
        raise _to_http_exception(e)


@router.put("/products/{product_id}", response_model=Product)
def update_product(
    product_id: int,
    product_data: ProductUpdateRequest,
    store: JsonProductStore = Depends(get_product_store),
):
    """
    상품을 부분 수정합니다. 요청에 포함된 필드만 변경됩니다.

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
        HTTPException 500: 파일 저장 실패
    """
    try:
        return ProductService.update_product(product_id, product_data, store)
    except (
        ProductNotFoundException,
        PersistenceException,
        LockAcquisitionException,
    ) as e:
        raise _to_http_exception(e)


@router.delete("/products/{product_id}", response_model=ProductDeleteResponse)
def delete_product(
    product_id: int,
    store: JsonProductStore = Depends(get_product_store),
):
    """
    상품을 삭제합니다.

    Example:
        Response (200):
        ```json
        {
            "message": "Product deleted successfully",
            "id": 1
        }
        ```

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
        HTTPException 500: 파일 저장 실패
    """
    try:
        return ProductService.delete_product(product_id, store)
    except (
        ProductNotFoundException,
        PersistenceException,
        LockAcquisitionException,
    ) as e:
        raise _to_http_exception(e)
