"""
FastAPI 의존성 주입 함수들

설정과 상품 저장소 의존성을 제공합니다.
"""

import threading
from typing import Dict, Tuple

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.db.json_store import JsonProductStore
from app.db.locks import create_store_lock

# 같은 파일에 대한 요청들이 하나의 락을 공유하도록 저장소를 캐시합니다.
_stores: Dict[Tuple[str, str], JsonProductStore] = {}
_stores_lock = threading.Lock()


def build_product_store(settings: Settings) -> JsonProductStore:
    """설정된 데이터 파일과 락 백엔드로 저장소를 반환합니다 (파일당 하나)."""
    key = (settings.data_file, settings.lock_backend.lower())
    with _stores_lock:
        store = _stores.get(key)
        if store is None:
            store = JsonProductStore(
                settings.data_file,
                lock=create_store_lock(settings, settings.data_file),
            )
            _stores[key] = store
    return store


def get_product_store(
    settings: Settings = Depends(get_settings),
) -> JsonProductStore:
    """
    상품 저장소를 제공하는 의존성 함수

    Example:
        @router.get("/products")
        def list_products(store: JsonProductStore = Depends(get_product_store)):
            return ProductService.list_products(store)
    """
    return build_product_store(settings)


def reset_product_stores() -> None:
    """캐시된 저장소를 모두 버립니다 (설정 변경 후 또는 테스트 종료 시)."""
    with _stores_lock:
        _stores.clear()
