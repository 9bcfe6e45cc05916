"""
상품 API 클라이언트 테스트 (세션은 mock 사용)
"""

from unittest.mock import MagicMock

import pytest
import requests

from app.client.api_client import ProductApiClient
from app.core.exceptions import NetworkException


def _response(status_code=200, json_data=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def product_data(make_product):
    return make_product(7, "Mesa").to_dict()


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return ProductApiClient("http://localhost:3000/", session=session, timeout=5)


class TestRequests:
    """Test: 요청 URL/메서드"""

    def test_list_products(self, client, session, product_data):
        session.request.return_value = _response(json_data=[product_data])

        products = client.list_products()

        session.request.assert_called_once_with(
            "GET", "http://localhost:3000/api/products", timeout=5
        )
        assert [p.id for p in products] == [7]

    def test_get_product(self, client, session, product_data):
        session.request.return_value = _response(json_data=product_data)

        product = client.get_product(7)

        session.request.assert_called_once_with(
            "GET", "http://localhost:3000/api/products/7", timeout=5
        )
        assert product.name == "Mesa"

    def test_create_product_sends_json(self, client, session, product_data):
        session.request.return_value = _response(201, json_data=product_data)
        payload = {"name": "Mesa", "price": 10.0, "category": "Hogar", "stock": 1}

        client.create_product(payload)

        session.request.assert_called_once_with(
            "POST", "http://localhost:3000/api/products", timeout=5, json=payload
        )

    def test_update_product_sends_json(self, client, session, product_data):
        session.request.return_value = _response(json_data=product_data)

        client.update_product(7, {"stock": 0})

        session.request.assert_called_once_with(
            "PUT", "http://localhost:3000/api/products/7", timeout=5, json={"stock": 0}
        )

    def test_delete_product(self, client, session):
        body = {"message": "Product deleted successfully", "id": 7}
        session.request.return_value = _response(json_data=body)

        assert client.delete_product(7) == body


class TestErrors:
    """Test: 실패 응답은 NetworkException"""

    def test_not_found_uses_detail(self, client, session):
        session.request.return_value = _response(
            404, json_data={"detail": "Product with id 7 not found"}
        )

        with pytest.raises(NetworkException) as exc_info:
            client.get_product(7)

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_not_found
        assert exc_info.value.message == "Product with id 7 not found"

    def test_error_without_detail_uses_default(self, client, session):
        session.request.return_value = _response(500, json_error=ValueError("no json"))

        with pytest.raises(NetworkException) as exc_info:
            client.list_products()

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Error loading products"

    def test_connection_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(NetworkException) as exc_info:
            client.list_products()

        assert exc_info.value.status_code is None
        assert "refused" in exc_info.value.message

    def test_invalid_json_body(self, client, session):
        session.request.return_value = _response(json_error=ValueError("bad"))

        with pytest.raises(NetworkException):
            client.list_products()
