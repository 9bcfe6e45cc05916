"""
상품 관련 Pydantic 스키마

API 요청/응답 모델을 정의합니다.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def parse_stock(value: Any) -> int:
    """
    재고 값을 정수로 변환합니다. 변환할 수 없으면 0을 반환합니다.

    Example:
        >>> parse_stock("12")
        12
        >>> parse_stock("abc")
        0
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


class ProductCreateRequest(BaseModel):
    """
    상품 생성 요청 스키마

    구조적 검증(이름 길이, 가격 양수 등)은 클라이언트가 담당하므로
    여기서는 타입 변환과 기본값만 처리합니다.

    Example:
        {
            "name": "Laptop Gamer",
            "description": "Laptop de alta gama para gaming",
            "price": 1299.99,
            "category": "Electrónica",
            "stock": 15
        }
    """

    name: str = Field(..., description="상품명", examples=["Laptop Gamer"])
    description: Optional[str] = Field(None, description="상품 설명 (선택)")
    price: float = Field(..., description="상품 가격", examples=[1299.99])
    category: str = Field(..., description="카테고리", examples=["Electrónica"])
    stock: int = Field(0, description="초기 재고 수량 (없거나 숫자가 아니면 0)")

    @field_validator("stock", mode="before")
    @classmethod
    def _coerce_stock(cls, value: Any) -> int:
        return parse_stock(value)


class ProductUpdateRequest(BaseModel):
    """
    상품 부분 수정 요청 스키마

    요청에 포함된 필드만 덮어씁니다. 0은 유효한 값이며,
    null 또는 생략된 필드는 기존 값을 유지합니다.

    Example:
        {
            "price": 999.99,
            "stock": 0
        }
    """

    name: Optional[str] = Field(None, description="상품명")
    description: Optional[str] = Field(None, description="상품 설명")
    price: Optional[float] = Field(None, description="상품 가격")
    category: Optional[str] = Field(None, description="카테고리")
    stock: Optional[int] = Field(None, description="재고 수량")

    def provided_fields(self) -> dict:
        """요청에 실제로 값이 지정된 필드만 반환"""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ProductDeleteResponse(BaseModel):
    """
    상품 삭제 응답 스키마

    Example:
        {
            "message": "Product deleted successfully",
            "id": 1
        }
    """

    message: str = Field(..., description="결과 메시지")
    id: int = Field(..., description="삭제된 상품 ID")
