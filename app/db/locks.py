"""
저장소 읽기-수정-쓰기 구간을 직렬화하는 락 구현

- LocalLock: 프로세스 내 스레드 간 상호 배제 (기본값)
- RedisLock: 여러 서버 인스턴스 간 상호 배제 (LOCK_BACKEND=redis)
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from redis import Redis
from redis.exceptions import LockError

from app.core.config import Settings
from app.core.exceptions import LockAcquisitionException
from app.db.redis_client import create_redis_client

logger = logging.getLogger(__name__)

LOCK_BACKENDS = ("local", "redis")


class LocalLock:
    """threading.RLock 기반 프로세스 로컬 락"""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @contextmanager
    def hold(self) -> Iterator[None]:
        with self._lock:
            yield


class RedisLock:
    """
    redis-py Lock 기반 분산 락

    락 해제는 redis-py 내부의 Lua 스크립트로 수행되므로
    자신이 획득한 락(토큰 일치)만 삭제됩니다.
    """

    def __init__(self, redis: Redis, name: str, timeout_seconds: int) -> None:
        self._redis = redis
        self._name = name
        self._timeout = timeout_seconds

    @property
    def name(self) -> str:
        return self._name

    @contextmanager
    def hold(self) -> Iterator[None]:
        lock = self._redis.lock(
            self._name,
            timeout=self._timeout,
            blocking_timeout=self._timeout,
        )
        if not lock.acquire():
            raise LockAcquisitionException(self._name)
        try:
            yield
        finally:
            try:
                lock.release()
            except LockError:
                # TTL 만료로 이미 다른 프로세스에 넘어간 경우
                logger.warning("Lock %s expired before release", self._name)


def create_store_lock(settings: Settings, resource: str):
    """
    설정에 맞는 저장소 락을 생성합니다.

    Args:
        settings: 애플리케이션 설정
        resource: 락 대상 식별자 (데이터 파일 경로)

    Raises:
        ValueError: 알 수 없는 lock_backend 인 경우
    """
    backend = settings.lock_backend.lower()
    if backend == "local":
        return LocalLock()
    if backend == "redis":
        return RedisLock(
            create_redis_client(settings),
            f"lock:products:{resource}",
            settings.lock_timeout_seconds,
        )
    raise ValueError(
        f"Unknown lock backend '{settings.lock_backend}', expected one of {LOCK_BACKENDS}"
    )
