"""
상품 API HTTP 클라이언트

requests.Session(또는 같은 인터페이스의 세션, 예: FastAPI TestClient)을 사용합니다.
전송 실패와 2xx가 아닌 응답은 모두 NetworkException으로 변환됩니다.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from app.core.exceptions import NetworkException
from app.models.product import Product

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/api/products"


class ProductApiClient:
    """
    상품 CRUD API 클라이언트

    Example:
        >>> client = ProductApiClient("http://localhost:3000")
        >>> products = client.list_products()
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[Any] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, product_id: Optional[int] = None) -> str:
        if product_id is None:
            return f"{self.base_url}{PRODUCTS_PATH}"
        return f"{self.base_url}{PRODUCTS_PATH}/{product_id}"

    def _request(self, method: str, url: str, default_error: str, **kwargs) -> Any:
        """
        요청을 보내고 JSON 본문을 반환합니다.

        Raises:
            NetworkException: 연결 실패, 2xx가 아닌 응답, JSON 파싱 실패
        """
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise NetworkException(f"{default_error}: {e}") from e

        if not 200 <= response.status_code < 300:
            message = default_error
            try:
                detail = response.json().get("detail")
                if isinstance(detail, str) and detail:
                    message = detail
            except (ValueError, AttributeError):
                pass
            logger.error("%s %s returned %s: %s", method, url, response.status_code, message)
            raise NetworkException(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise NetworkException(f"{default_error}: invalid JSON response") from e

    def list_products(self) -> List[Product]:
        data = self._request("GET", self._url(), "Error loading products")
        return [Product.model_validate(item) for item in data]

    def get_product(self, product_id: int) -> Product:
        data = self._request("GET", self._url(product_id), "Product not found")
        return Product.model_validate(data)

    def create_product(self, payload: Dict[str, Any]) -> Product:
        data = self._request("POST", self._url(), "Error saving product", json=payload)
        return Product.model_validate(data)

    def update_product(self, product_id: int, payload: Dict[str, Any]) -> Product:
        data = self._request(
            "PUT", self._url(product_id), "Error saving product", json=payload
        )
        return Product.model_validate(data)

    def delete_product(self, product_id: int) -> Dict[str, Any]:
        return self._request("DELETE", self._url(product_id), "Error deleting product")
