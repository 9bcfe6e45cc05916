"""
상품 API 엔드포인트 통합 테스트
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_product_store
from app.core.config import get_settings
from app.core.exceptions import LockAcquisitionException
from app.main import app


def _create(test_client, **overrides):
    body = {"name": "Laptop Gamer", "price": 1299.99, "category": "Electrónica", "stock": 15}
    body.update(overrides)
    response = test_client.post("/api/products", json=body)
    assert response.status_code == 201
    return response.json()


class TestRootAPI:
    """루트/헬스체크 테스트"""

    def test_root(self, test_client):
        response = test_client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.json() == {"status": "healthy"}


class TestProductCreateAPI:
    """상품 생성 API 테스트 클래스"""

    def test_create_product_success(self, test_client):
        """상품 생성 성공 테스트 (201 Created)"""
        response = test_client.post(
            "/api/products",
            json={
                "name": "Laptop Gamer",
                "description": "Laptop de alta gama para gaming",
                "price": 1299.99,
                "category": "Electrónica",
                "stock": 15,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Laptop Gamer"
        assert data["price"] == 1299.99
        assert data["stock"] == 15
        assert isinstance(data["id"], int)
        assert data["createdAt"] == data["updatedAt"]

    def test_create_product_defaults(self, test_client):
        """stock/description 생략 시 기본값"""
        data = _create(test_client, stock=None, description=None)

        assert data["stock"] == 0
        assert data["description"] == ""

    def test_create_product_string_numbers(self, test_client):
        """폼 문자열 값도 변환하여 저장"""
        data = _create(test_client, price="10.5", stock="7")

        assert data["price"] == 10.5
        assert data["stock"] == 7

    def test_create_product_invalid_body(self, test_client):
        """검증 실패는 500 (검증은 클라이언트 책임)"""
        response = test_client.post("/api/products", json={"name": "Sin precio"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Invalid product data"

    def test_create_product_save_failure(self, test_client, store):
        """저장 실패 시 500"""
        with patch.object(store, "write_all", return_value=False):
            response = test_client.post(
                "/api/products",
                json={"name": "Laptop Gamer", "price": 10, "category": "X"},
            )

        assert response.status_code == 500
        assert "Failed to save" in response.json()["detail"]


class TestProductListAPI:
    """상품 목록 조회 API 테스트 클래스"""

    def test_list_products_empty(self, test_client):
        response = test_client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_products_in_insertion_order(self, test_client):
        first = _create(test_client, name="Primero")
        second = _create(test_client, name="Segundo")

        response = test_client.get("/api/products")

        assert [p["id"] for p in response.json()] == [first["id"], second["id"]]

    def test_list_products_lock_timeout(self, test_client, store):
        """분산 락 획득 실패 시 409"""
        with patch.object(
            store.lock, "hold", side_effect=LockAcquisitionException("lock:products:test")
        ):
            response = test_client.get("/api/products")

        assert response.status_code == 409


class TestProductDetailAPI:
    """상품 단건 조회 API 테스트 클래스"""

    def test_get_product_success(self, test_client):
        created = _create(test_client)

        response = test_client.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_product_not_found(self, test_client):
        response = test_client.get("/api/products/99999")

        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_non_numeric_id_is_not_found(self, test_client, method):
        """숫자가 아닌 ID는 어떤 상품과도 일치하지 않으므로 404"""
        _create(test_client)
        kwargs = {"json": {"stock": 1}} if method == "put" else {}

        response = getattr(test_client, method)("/api/products/abc", **kwargs)

        assert response.status_code == 404
        assert response.json() == {"detail": "Product with id abc not found"}
        assert len(test_client.get("/api/products").json()) == 1


class TestProductUpdateAPI:
    """상품 수정 API 테스트 클래스"""

    def test_update_partial(self, test_client):
        created = _create(test_client, description="Original")

        response = test_client.put(f"/api/products/{created['id']}", json={"stock": 0})

        assert response.status_code == 200
        data = response.json()
        assert data["stock"] == 0
        assert data["description"] == "Original"
        assert data["price"] == created["price"]
        assert data["createdAt"] == created["createdAt"]
        assert data["updatedAt"] > created["updatedAt"]

    def test_update_not_found(self, test_client):
        response = test_client.put("/api/products/99999", json={"stock": 1})

        assert response.status_code == 404

    def test_update_save_failure(self, test_client, store):
        created = _create(test_client)

        with patch.object(store, "write_all", return_value=False):
            response = test_client.put(f"/api/products/{created['id']}", json={"stock": 1})

        assert response.status_code == 500


class TestProductDeleteAPI:
    """상품 삭제 API 테스트 클래스"""

    def test_delete_product(self, test_client):
        created = _create(test_client)

        response = test_client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Product deleted successfully",
            "id": created["id"],
        }
        assert test_client.get(f"/api/products/{created['id']}").status_code == 404

    def test_delete_twice_is_not_found(self, test_client):
        created = _create(test_client)
        test_client.delete(f"/api/products/{created['id']}")

        response = test_client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 404

    def test_delete_save_failure(self, test_client, store):
        created = _create(test_client)

        with patch.object(store, "write_all", return_value=False):
            response = test_client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 500
        assert len(test_client.get("/api/products").json()) == 1


def test_startup_seeds_missing_file(settings, store):
    """시작 시 데이터 파일이 없으면 예제 상품 3개로 초기화"""
    seeded_settings = settings.model_copy(update={"seed_on_startup": True})
    app.dependency_overrides[get_settings] = lambda: seeded_settings
    app.dependency_overrides[get_product_store] = lambda: store
    try:
        with TestClient(app) as client:
            response = client.get("/api/products")
    finally:
        app.dependency_overrides.clear()

    assert [p["name"] for p in response.json()] == [
        "Laptop Gamer",
        "Smartphone Pro",
        "Zapatos Deportivos",
    ]
