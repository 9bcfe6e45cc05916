"""
Redis 클라이언트 연결 관리

LOCK_BACKEND=redis 인 경우 여러 서버 인스턴스가 같은 데이터 파일을
공유할 때 분산 락을 잡기 위해 사용합니다.
"""

from redis import Redis

from app.core.config import Settings


def create_redis_client(settings: Settings) -> Redis:
    """
    락 전용 Redis 클라이언트 생성

    연결이 안 되는 Redis 때문에 요청이 무한정 멈추지 않도록
    소켓 타임아웃을 락 타임아웃과 맞춥니다.
    """
    return Redis.from_url(
        settings.redis_url,
        decode_responses=True,
        socket_connect_timeout=settings.lock_timeout_seconds,
        socket_timeout=settings.lock_timeout_seconds,
    )
