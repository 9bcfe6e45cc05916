"""
Product 모델
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """
    UTC 시각을 밀리초 단위 ISO-8601 문자열로 변환합니다.

    Example:
        >>> format_timestamp(datetime(2025, 1, 22, 10, 30, tzinfo=timezone.utc))
        '2025-01-22T10:30:00.000Z'
    """
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def parse_timestamp(value: str) -> datetime:
    """format_timestamp()의 역변환. 형식이 잘못되면 ValueError"""
    moment = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class Product(BaseModel):
    """
    상품 모델 (JSON 파일에 저장되는 레코드)

    Attributes:
        id: 상품 고유 ID (생성 시각 기반, 변경 불가)
        name: 상품명
        description: 상품 설명 (없으면 빈 문자열)
        price: 가격
        category: 카테고리 라벨
        stock: 현재 재고 수량
        created_at: 생성 일시 (ISO-8601 UTC, JSON 키는 createdAt)
        updated_at: 수정 일시 (ISO-8601 UTC, JSON 키는 updatedAt)
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    description: str = ""
    price: float
    category: str
    stock: int = 0
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    @field_validator("description", mode="before")
    @classmethod
    def _empty_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("stock", mode="before")
    @classmethod
    def _missing_stock(cls, value: Any) -> Any:
        return 0 if value is None else value

    def to_dict(self) -> dict:
        """JSON 파일/응답 형식(camelCase)의 dict로 변환"""
        return self.model_dump(by_alias=True)

    def __str__(self) -> str:
        return f"Product: {self.name}"
