"""
JSON 파일 저장소 테스트
"""

import json
import os
from contextlib import contextmanager

from app.db.json_store import JsonProductStore, seed_products


class TestReadAll:
    """Test: 전체 읽기"""

    def test_read_missing_file_returns_empty(self, store):
        """Test: 파일이 없으면 빈 목록 (오류 아님)"""
        assert not store.path.exists()
        assert store.read_all() == []

    def test_read_invalid_json_returns_empty(self, store, caplog):
        """Test: JSON 파싱 오류는 빈 목록으로 처리하고 로그를 남김"""
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")

        assert store.read_all() == []
        assert "Error reading products" in caplog.text

    def test_read_invalid_record_is_skipped(self, store):
        """Test: 레코드 형식이 잘못되면 그 레코드만 제외"""
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps([{"id": "abc"}]), encoding="utf-8")

        assert store.read_all() == []

    def test_read_keeps_valid_records_next_to_invalid(self, store, make_product, caplog):
        """Test: price가 null인 레코드가 있어도 정상 레코드는 읽음"""
        good = make_product(1).to_dict()
        bad = dict(make_product(2).to_dict(), price=None)
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps([good, bad]), encoding="utf-8")

        assert [p.id for p in store.read_all()] == [1]
        assert "Skipping invalid product record #1" in caplog.text

    def test_read_non_array_returns_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"id": 1}), encoding="utf-8")

        assert store.read_all() == []

    def test_read_fills_missing_description_and_stock(self, store):
        """Test: description/stock이 null이면 기본값으로 읽음"""
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            json.dumps(
                [
                    {
                        "id": 7,
                        "name": "Mesa",
                        "description": None,
                        "price": 50,
                        "category": "Hogar",
                        "stock": None,
                        "createdAt": "2025-01-22T10:30:00.000Z",
                        "updatedAt": "2025-01-22T10:30:00.000Z",
                    }
                ]
            ),
            encoding="utf-8",
        )

        [product] = store.read_all()
        assert product.description == ""
        assert product.stock == 0


class TestWriteAll:
    """Test: 전체 쓰기"""

    def test_write_then_read_preserves_order(self, store, make_product):
        """Test: 저장 순서(삽입 순서)가 유지됨"""
        products = [make_product(3), make_product(1), make_product(2)]

        assert store.write_all(products) is True
        assert [p.id for p in store.read_all()] == [3, 1, 2]

    def test_write_creates_parent_directory(self, store, make_product):
        """Test: 상위 디렉터리가 없으면 생성"""
        assert not store.path.parent.exists()
        assert store.write_all([make_product()]) is True
        assert store.path.exists()

    def test_write_is_pretty_printed_camel_case(self, store, make_product):
        """Test: 들여쓰기된 JSON 배열, camelCase 키, 비ASCII 유지"""
        store.write_all([make_product(category="Electrónica")])

        text = store.path.read_text(encoding="utf-8")
        assert text.startswith("[\n  {")
        assert "Electrónica" in text
        data = json.loads(text)
        assert set(data[0]) == {
            "id",
            "name",
            "description",
            "price",
            "category",
            "stock",
            "createdAt",
            "updatedAt",
        }

    def test_write_replaces_whole_file(self, store, make_product):
        """Test: 부분 수정이 아닌 전체 교체"""
        store.write_all([make_product(1), make_product(2)])
        store.write_all([make_product(2)])

        assert [p.id for p in store.read_all()] == [2]

    def test_write_leaves_no_temp_files(self, store, make_product):
        """Test: 임시 파일이 남지 않음"""
        store.write_all([make_product()])

        assert os.listdir(store.path.parent) == [store.path.name]

    def test_write_failure_returns_false(self, tmp_path, make_product, caplog):
        """Test: I/O 오류는 예외 대신 False 반환"""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = JsonProductStore(blocker / "products.json")

        assert store.write_all([make_product()]) is False
        assert "Error saving products" in caplog.text


class TestSeed:
    """Test: 첫 실행 초기 데이터"""

    def test_seed_products(self):
        """Test: 예제 상품 3개, 카테고리 2종"""
        products = seed_products()

        assert [p.id for p in products] == [1, 2, 3]
        assert len({p.category for p in products}) == 2
        assert all(p.created_at == p.updated_at for p in products)

    def test_seed_if_missing_writes_file(self, store):
        """Test: 파일이 없을 때만 초기화"""
        assert store.seed_if_missing() is True
        assert [p.name for p in store.read_all()] == [
            "Laptop Gamer",
            "Smartphone Pro",
            "Zapatos Deportivos",
        ]

    def test_seed_if_missing_keeps_existing_file(self, store):
        """Test: 빈 목록 파일이라도 존재하면 초기화하지 않음"""
        store.write_all([])

        assert store.seed_if_missing() is False
        assert store.read_all() == []


class TestTransaction:
    """Test: 읽기-수정-쓰기 구간 락"""

    def test_transaction_holds_lock(self, tmp_path):
        """Test: transaction() 동안 락의 hold()가 사용됨"""
        events = []

        class RecordingLock:
            @contextmanager
            def hold(self):
                events.append("acquire")
                yield
                events.append("release")

        store = JsonProductStore(tmp_path / "products.json", lock=RecordingLock())
        with store.transaction() as same:
            assert same is store
            events.append("body")

        assert events == ["acquire", "body", "release"]

    def test_transaction_is_reentrant_with_local_lock(self, store):
        """Test: 기본 락은 재진입 가능"""
        with store.transaction():
            with store.transaction():
                assert store.read_all() == []
