"""
Locust 부하 테스트: 상품 CRUD 동시 요청

테스트 시나리오:
1. 각 사용자가 자신만의 상품을 생성 → 수정 → 조회 → 삭제
2. 다른 사용자의 쓰기에 의해 내 변경이 사라졌는지(lost update) 확인

JSON 파일 저장소는 전체 파일을 덮어쓰므로, 같은 파일을 공유하는
여러 서버 인스턴스를 LOCK_BACKEND=local 로 띄우면 lost update가 발생할 수 있습니다.
단일 인스턴스 또는 LOCK_BACKEND=redis 에서는 0건이어야 합니다.
"""

import random
from typing import Optional

from locust import HttpUser, TaskSet, between, events, task


# 전역 메트릭 수집
created_count = 0
lost_creates = 0
lost_updates = 0


class ProductCrudTaskSet(TaskSet):
    """상품 관리자 행동 모델"""

    def on_start(self):
        self.product_id: Optional[int] = None
        self.expected_stock: Optional[int] = None

    @task(3)
    def list_products(self):
        """상품 목록 조회"""
        with self.client.get(
            "/api/products", name="[Product] List", catch_response=True
        ) as response:
            if response.status_code == 200:
                response.success()
            else:
                response.failure(f"List products failed: {response.status_code}")

    @task(2)
    def create_product(self):
        """내 상품 생성 (이미 있으면 건너뜀)"""
        global created_count
        if self.product_id:
            return

        with self.client.post(
            "/api/products",
            json={
                "name": f"Load Test Product {random.randint(1, 1000000)}",
                "description": "Created by locust",
                "price": round(random.uniform(1, 500), 2),
                "category": random.choice(["Electrónica", "Ropa", "Hogar"]),
                "stock": 10,
            },
            name="[Product] Create",
            catch_response=True,
        ) as response:
            if response.status_code == 201:
                created_count += 1
                self.product_id = response.json()["id"]
                self.expected_stock = 10
                response.success()
            else:
                response.failure(f"Create failed: {response.status_code}")

    @task(4)
    def update_and_verify(self):
        """내 상품 재고 수정 후 다시 읽어 값이 유지되는지 확인"""
        global lost_creates, lost_updates
        if not self.product_id:
            return

        new_stock = random.randint(0, 1000)
        with self.client.put(
            f"/api/products/{self.product_id}",
            json={"stock": new_stock},
            name="[Product] Update",
            catch_response=True,
        ) as response:
            if response.status_code == 200:
                response.success()
            elif response.status_code == 404:
                # 생성한 상품이 다른 쓰기에 덮여서 사라짐
                lost_creates += 1
                self.product_id = None
                response.failure("Created product disappeared (lost create)")
                return
            else:
                response.failure(f"Update failed: {response.status_code}")
                return
        self.expected_stock = new_stock

        with self.client.get(
            f"/api/products/{self.product_id}",
            name="[Product] Verify",
            catch_response=True,
        ) as response:
            if response.status_code != 200:
                response.failure(f"Verify failed: {response.status_code}")
            elif response.json().get("stock") != self.expected_stock:
                lost_updates += 1
                response.failure("Stock value was overwritten (lost update)")
            else:
                response.success()

    @task(1)
    def delete_product(self):
        """내 상품 삭제"""
        if not self.product_id:
            return

        with self.client.delete(
            f"/api/products/{self.product_id}",
            name="[Product] Delete",
            catch_response=True,
        ) as response:
            if response.status_code in (200, 404):
                response.success()
            else:
                response.failure(f"Delete failed: {response.status_code}")
        self.product_id = None


class InventoryManager(HttpUser):
    """일반 관리자 (천천히 작업)"""

    tasks = [ProductCrudTaskSet]
    wait_time = between(1, 3)
    host = "http://localhost:3000"


class BulkEditor(HttpUser):
    """대량 편집자 (빠르게 작업)"""

    tasks = [ProductCrudTaskSet]
    wait_time = between(0.1, 0.5)
    host = "http://localhost:3000"


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    """테스트 시작 시 초기화"""
    global created_count, lost_creates, lost_updates
    created_count = 0
    lost_creates = 0
    lost_updates = 0

    print("\n" + "=" * 60)
    print("🚀 Locust Load Test Started")
    print("=" * 60)
    print(f"Target: {environment.host}")
    print("=" * 60 + "\n")


@events.test_stop.add_listener
def on_test_stop(environment, **kwargs):
    """테스트 종료 시 결과 출력"""
    print("\n" + "=" * 60)
    print("📊 Test Results Summary")
    print("=" * 60)
    print(f"✅ Products Created: {created_count}")
    print(f"🚨 Lost Creates: {lost_creates}")
    print(f"🚨 Lost Updates: {lost_updates}")
    print("=" * 60)

    if lost_creates or lost_updates:
        print("⚠️  Lost updates detected: writers are racing on the data file.")
    else:
        print("✅ PASS: No lost updates detected.")
    print("=" * 60 + "\n")


# CLI 실행 예시
"""
헤드리스 모드:
    locust -f load_tests/locustfile.py --headless --users 50 --spawn-rate 10 -t 60s --host=http://localhost:3000

빠른 편집자만:
    locust -f load_tests/locustfile.py --headless --users 100 --spawn-rate 20 -t 2m --host=http://localhost:3000 --user-classes BulkEditor
"""
