"""
Product 모델 테스트
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.models.product import Product, format_timestamp, parse_timestamp


class TestProductModel:
    """Product 모델 테스트 클래스"""

    def test_accepts_camel_case_keys(self):
        """camelCase 키(createdAt/updatedAt)로 생성"""
        product = Product.model_validate(
            {
                "id": 1,
                "name": "Laptop Gamer",
                "price": 1299.99,
                "category": "Electrónica",
                "stock": 15,
                "createdAt": "2025-01-22T10:30:00.000Z",
                "updatedAt": "2025-01-22T10:31:00.000Z",
            }
        )

        assert product.created_at == "2025-01-22T10:30:00.000Z"
        assert product.updated_at == "2025-01-22T10:31:00.000Z"
        assert product.description == ""

    def test_to_dict_uses_camel_case(self, make_product):
        """to_dict()는 파일/응답 형식 키를 사용"""
        data = make_product().to_dict()

        assert "createdAt" in data
        assert "updatedAt" in data
        assert "created_at" not in data

    def test_missing_required_field(self):
        """필수 필드가 없으면 ValidationError"""
        with pytest.raises(ValidationError):
            Product.model_validate({"id": 1, "name": "Sin precio"})

    def test_str(self, make_product):
        assert str(make_product(name="Mesa")) == "Product: Mesa"


class TestTimestamps:
    """타임스탬프 형식 테스트"""

    def test_format_timestamp(self):
        moment = datetime(2025, 1, 22, 10, 30, 5, 123456, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2025-01-22T10:30:05.123Z"

    def test_format_timestamp_is_sortable(self):
        earlier = format_timestamp(datetime(2025, 1, 2, tzinfo=timezone.utc))
        later = format_timestamp(datetime(2025, 1, 10, tzinfo=timezone.utc))
        assert earlier < later

    def test_parse_timestamp_round_trip(self):
        value = "2025-01-22T10:30:05.123Z"
        assert format_timestamp(parse_timestamp(value)) == value

    def test_parse_timestamp_naive_is_utc(self):
        assert parse_timestamp("2025-01-22T10:30:00").tzinfo == timezone.utc

    def test_parse_timestamp_invalid(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")
