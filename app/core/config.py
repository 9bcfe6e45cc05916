"""
애플리케이션 설정 관리

Pydantic Settings를 사용하여 환경 변수를 로드합니다.
.env 파일 또는 시스템 환경 변수에서 설정을 읽어옵니다.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 클래스"""

    # 서버 설정
    host: str = "0.0.0.0"
    port: int = 3000

    # 저장소 설정 (JSON 파일)
    data_file: str = "data/products.json"
    seed_on_startup: bool = True

    # 락 설정 (local: 프로세스 내 락, redis: 분산 락)
    lock_backend: str = "local"
    lock_timeout_seconds: int = 10

    # Redis 설정 (lock_backend=redis 일 때만 사용)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str = ""

    # 클라이언트 설정
    api_base_url: str = "http://localhost:3000"
    request_timeout_seconds: float = 10.0
    items_per_page: int = 10

    # 애플리케이션 설정
    app_env: str = "development"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 정의되지 않은 환경 변수 무시
    )

    @property
    def data_path(self) -> Path:
        """JSON 데이터 파일 경로"""
        return Path(self.data_file)

    @property
    def redis_url(self) -> str:
        """
        Redis 연결 URL 생성

        비밀번호가 있는 경우: redis://:password@host:port/db
        비밀번호가 없는 경우: redis://host:port/db
        """
        if self.redis_password:
            return f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/{self.redis_db}"
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"


def get_settings() -> Settings:
    """
    Settings 인스턴스를 반환하는 팩토리 함수
    """
    return Settings()
