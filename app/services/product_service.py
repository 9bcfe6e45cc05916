"""상품 관리 서비스."""

import logging
import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from app.core.exceptions import PersistenceException, ProductNotFoundException
from app.db.json_store import JsonProductStore
from app.models.product import Product, format_timestamp, parse_timestamp
from app.schemas.product import ProductCreateRequest, ProductUpdateRequest

logger = logging.getLogger(__name__)


class ProductService:
    """상품 생성, 조회, 수정, 삭제 서비스.

    모든 작업은 store.transaction() 안에서 전체 읽기 → 수정 → 전체 쓰기로 수행됩니다.
    """

    _id_lock = threading.Lock()
    _last_issued_id = 0

    @staticmethod
    def _next_id(existing_ids: Iterable[int]) -> int:
        """
        현재 시각(밀리초)으로 상품 ID를 발급합니다.

        같은 밀리초에 여러 상품이 생성되거나 시계가 뒤로 가더라도
        이전에 발급한 ID와 기존 ID보다 큰 값을 반환합니다.
        """
        candidate = time.time_ns() // 1_000_000
        with ProductService._id_lock:
            floor = max([ProductService._last_issued_id, *existing_ids], default=0)
            if candidate <= floor:
                candidate = floor + 1
            ProductService._last_issued_id = candidate
        return candidate

    @staticmethod
    def _next_timestamp(previous: Optional[str] = None) -> str:
        """
        현재 시각 문자열을 반환합니다. previous 보다 항상 큰 값을 보장합니다.
        """
        now = datetime.now(timezone.utc)
        # 저장 형식과 같은 밀리초 단위로 비교
        now = now.replace(microsecond=now.microsecond // 1000 * 1000)
        if previous:
            try:
                last = parse_timestamp(previous)
            except ValueError:
                last = None
            if last is not None and now <= last:
                now = last + timedelta(milliseconds=1)
        return format_timestamp(now)

    @staticmethod
    def _save(products: List[Product], store: JsonProductStore, action: str) -> None:
        if not store.write_all(products):
            raise PersistenceException(f"Failed to save products while trying to {action}")

    @staticmethod
    def list_products(store: JsonProductStore) -> List[Product]:
        """
        전체 상품 목록을 저장 순서대로 반환합니다 (필터링/페이지네이션 없음).
        """
        with store.transaction():
            return store.read_all()

    @staticmethod
    def get_product(product_id: int, store: JsonProductStore) -> Product:
        """
        상품 ID로 상품을 조회합니다.

        Raises:
            ProductNotFoundException: 상품이 없는 경우
        """
        with store.transaction():
            products = store.read_all()
        for product in products:
            if product.id == product_id:
                return product
        raise ProductNotFoundException(product_id)

    @staticmethod
    def create_product(data: ProductCreateRequest, store: JsonProductStore) -> Product:
        """
        상품을 생성하고 파일에 저장합니다.

        필드 검증은 상위(클라이언트)에서 끝났다고 가정하고,
        ID와 타임스탬프만 서버에서 발급합니다.

        Args:
            data: 생성 요청 (stock은 스키마에서 이미 0 기본값 처리됨)
            store: 상품 저장소

        Returns:
            생성된 Product (createdAt == updatedAt)

        Raises:
            PersistenceException: 파일 저장 실패 시
        """
        with store.transaction():
            products = store.read_all()
            now = ProductService._next_timestamp()
            product = Product(
                id=ProductService._next_id(p.id for p in products),
                name=data.name,
                description=data.description or "",
                price=data.price,
                category=data.category,
                stock=data.stock,
                created_at=now,
                updated_at=now,
            )
            products.append(product)
            ProductService._save(products, store, "create product")

        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    @staticmethod
    def update_product(
        product_id: int, data: ProductUpdateRequest, store: JsonProductStore
    ) -> Product:
        """
        요청에 포함된 필드만 기존 상품에 덮어씁니다.

        생략되거나 null인 필드는 기존 값을 유지하고, 0은 유효한 값으로 덮어씁니다.
        updatedAt은 항상 이전 값보다 큰 값으로 갱신됩니다.

        Raises:
            ProductNotFoundException: 상품이 없는 경우
            PersistenceException: 파일 저장 실패 시
        """
        with store.transaction():
            products = store.read_all()
            index = next(
                (i for i, p in enumerate(products) if p.id == product_id), None
            )
            if index is None:
                raise ProductNotFoundException(product_id)

            current = products[index]
            changes = data.provided_fields()
            changes["updated_at"] = ProductService._next_timestamp(current.updated_at)
            updated = current.model_copy(update=changes)
            products[index] = updated
            ProductService._save(products, store, "update product")

        logger.info("Updated product %s fields=%s", product_id, sorted(changes))
        return updated

    @staticmethod
    def delete_product(product_id: int, store: JsonProductStore) -> dict:
        """
        상품을 삭제하고 남은 목록을 저장합니다.

        Returns:
            {"message": str, "id": int}

        Raises:
            ProductNotFoundException: 상품이 없는 경우
            PersistenceException: 파일 저장 실패 시
        """
        with store.transaction():
            products = store.read_all()
            remaining = [p for p in products if p.id != product_id]
            if len(remaining) == len(products):
                raise ProductNotFoundException(product_id)
            ProductService._save(remaining, store, "delete product")

        logger.info("Deleted product %s", product_id)
        return {"message": "Product deleted successfully", "id": product_id}
