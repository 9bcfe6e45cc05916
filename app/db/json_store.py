"""
JSON 파일 기반 상품 저장소

전체 상품 목록을 하나의 JSON 배열 파일로 읽고 씁니다.
부분 수정은 없으며, 모든 변경은 전체 읽기 → 메모리 수정 → 전체 쓰기 입니다.
"""

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Sequence

from pydantic import ValidationError

from app.db.locks import LocalLock
from app.models.product import Product, format_timestamp

logger = logging.getLogger(__name__)


def seed_products() -> List[Product]:
    """첫 실행 시 저장되는 예제 상품 3개 (카테고리 2종)"""
    now = format_timestamp()
    seeds = [
        (1, "Laptop Gamer", "Laptop de alta gama para gaming", 1299.99, "Electrónica", 15),
        (2, "Smartphone Pro", "Teléfono inteligente con cámara avanzada", 899.99, "Electrónica", 30),
        (3, "Zapatos Deportivos", "Zapatos para running de alta calidad", 89.99, "Ropa", 50),
    ]
    return [
        Product(
            id=product_id,
            name=name,
            description=description,
            price=price,
            category=category,
            stock=stock,
            created_at=now,
            updated_at=now,
        )
        for product_id, name, description, price, category, stock in seeds
    ]


class JsonProductStore:
    """
    상품 컬렉션의 영속 저장소

    Attributes:
        path: JSON 파일 경로
        lock: 읽기-수정-쓰기 구간을 직렬화하는 락 (LocalLock 또는 RedisLock)
    """

    def __init__(self, path, lock=None) -> None:
        self.path = Path(path)
        self.lock = lock or LocalLock()

    @contextmanager
    def transaction(self) -> Iterator["JsonProductStore"]:
        """
        한 번의 읽기-수정-쓰기 사이클 동안 락을 잡습니다.

        사용 예:
            with store.transaction():
                products = store.read_all()
                products.append(new_product)
                store.write_all(products)
        """
        with self.lock.hold():
            yield self

    def read_all(self) -> List[Product]:
        """
        전체 상품 목록을 읽습니다.

        파일이 없으면 빈 목록을 반환합니다. 읽기/JSON 파싱 오류도
        로그만 남기고 빈 목록으로 처리합니다. 형식이 잘못된 레코드는
        해당 레코드만 건너뛰고 나머지 상품은 그대로 읽습니다.
        """
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error("Error reading products from %s: %s", self.path, e)
            return []
        if not isinstance(raw, list):
            logger.error("Error reading products from %s: expected a JSON array", self.path)
            return []

        products = []
        for index, item in enumerate(raw):
            try:
                products.append(Product.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid product record #%d in %s: %s", index, self.path, e
                )
        return products

    def write_all(self, products: Sequence[Product]) -> bool:
        """
        전체 상품 목록을 파일에 덮어씁니다.

        같은 디렉터리의 임시 파일에 쓴 뒤 os.replace로 교체하므로
        다른 읽기 요청은 이전 파일 또는 새 파일만 보게 됩니다.

        Returns:
            성공 시 True, I/O 오류 시 False (예외를 던지지 않음)
        """
        payload = json.dumps(
            [product.to_dict() for product in products],
            ensure_ascii=False,
            indent=2,
        )
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
            return True
        except OSError:
            logger.exception("Error saving products to %s", self.path)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False

    def seed_if_missing(self) -> bool:
        """
        데이터 파일이 없으면 예제 상품으로 초기화합니다.

        Returns:
            새로 초기화했으면 True
        """
        with self.transaction():
            if self.path.exists():
                return False
            seeded = self.write_all(seed_products())
        if seeded:
            logger.info("Seeded %s with example products", self.path)
        return seeded
