"""
pytest 픽스처 정의
"""

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_product_store, reset_product_stores
from app.core.config import Settings, get_settings
from app.db.json_store import JsonProductStore
from app.main import app
from app.models.product import Product


@pytest.fixture(autouse=True)
def clear_product_stores():
    """테스트마다 임시 파일용으로 캐시된 저장소를 정리"""
    yield
    reset_product_stores()


@pytest.fixture(scope="function")
def settings(tmp_path):
    """테스트용 설정 객체 픽스처 (임시 디렉터리의 데이터 파일 사용)"""
    return Settings(
        data_file=str(tmp_path / "data" / "products.json"),
        seed_on_startup=False,
        lock_backend="local",
        api_base_url="http://testserver",
        items_per_page=10,
    )


@pytest.fixture(scope="function")
def store(settings) -> JsonProductStore:
    """
    테스트용 JSON 파일 저장소 픽스처

    각 테스트 함수마다 새 임시 파일을 사용하므로 테스트 간 데이터가 섞이지 않습니다.
    """
    return JsonProductStore(settings.data_path)


@pytest.fixture(scope="function")
def test_client(settings, store):
    """각 테스트마다 임시 저장소와 설정을 사용하는 FastAPI TestClient"""

    def override_get_settings():
        return settings

    def override_get_product_store():
        return store

    app.dependency_overrides[get_settings] = override_get_settings
    app.dependency_overrides[get_product_store] = override_get_product_store

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_product():
    """Product 생성 헬퍼"""

    def _make(
        product_id: int = 1,
        name: str = "Laptop Gamer",
        price: float = 10.0,
        stock: int = 1,
        category: str = "Electrónica",
        description: str = "",
        created_at: str = "2025-01-22T10:30:00.000Z",
    ) -> Product:
        return Product(
            id=product_id,
            name=name,
            description=description,
            price=price,
            category=category,
            stock=stock,
            created_at=created_at,
            updated_at=created_at,
        )

    return _make
