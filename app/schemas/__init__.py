"""
Pydantic 스키마 모듈
"""

from app.schemas.product import (
    ProductCreateRequest,
    ProductDeleteResponse,
    ProductUpdateRequest,
)

__all__ = [
    "ProductCreateRequest",
    "ProductDeleteResponse",
    "ProductUpdateRequest",
]
