"""
상품 폼 입력 검증

요청을 보내기 전에 클라이언트에서 수행하며, 첫 번째 위반에서 즉시 중단합니다.
검사 순서: 이름 → 가격 입력 → 가격 값 → 카테고리 → 재고 입력 → 재고 값 → 설명 길이
"""

import math
from dataclasses import dataclass
from typing import Any, Dict

from app.core.exceptions import ValidationException

NAME_MIN_LENGTH = 3
DESCRIPTION_MAX_LENGTH = 500

# 폼에서 선택할 수 있는 기본 카테고리 (다른 라벨도 허용됨)
CATEGORIES = ("Electrónica", "Ropa", "Hogar", "Deportes", "Alimentos", "Otros")


@dataclass
class ProductForm:
    """
    상품 생성/수정 폼 입력값 (모두 사용자가 입력한 문자열)
    """

    name: str = ""
    price: str = ""
    category: str = ""
    stock: str = ""
    description: str = ""


def validate_product_form(form: ProductForm) -> Dict[str, Any]:
    """
    폼을 검증하고 API 요청 본문을 반환합니다.

    Returns:
        {"name", "description", "price", "category", "stock"} dict

    Raises:
        ValidationException: 첫 번째로 발견된 필드 오류
    """
    name = (form.name or "").strip()
    if len(name) < NAME_MIN_LENGTH:
        raise ValidationException(
            "name", f"Name must be at least {NAME_MIN_LENGTH} characters"
        )

    price_text = (form.price or "").strip()
    if not price_text:
        raise ValidationException("price", "Price is required")
    try:
        price = float(price_text)
    except ValueError:
        price = math.nan
    if not math.isfinite(price) or price <= 0:
        raise ValidationException("price", "Price must be a number greater than 0")

    category = (form.category or "").strip()
    if not category:
        raise ValidationException("category", "Select a category")

    stock_text = (form.stock or "").strip()
    if not stock_text:
        raise ValidationException("stock", "Stock is required")
    try:
        stock = int(stock_text)
    except ValueError:
        stock = -1
    if stock < 0:
        raise ValidationException("stock", "Stock must be a non-negative integer")

    description = form.description or ""
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationException(
            "description",
            f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters",
        )

    return {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "stock": stock,
    }
