"""
커스텀 예외 정의

애플리케이션 전역에서 사용되는 커스텀 예외 클래스들입니다.
"""

from typing import Optional


class ProductNotFoundException(Exception):
    """
    상품을 찾을 수 없을 때 발생하는 예외

    HTTP Status Code: 404 Not Found
    """

    def __init__(self, product_id: int):
        self.product_id = product_id
        self.message = f"Product with id {product_id} not found"
        super().__init__(self.message)


class PersistenceException(Exception):
    """
    상품 파일 저장에 실패했을 때 발생하는 예외

    HTTP Status Code: 500 Internal Server Error
    """

    def __init__(self, message: str = "Failed to save products"):
        self.message = message
        super().__init__(self.message)


class LockAcquisitionException(Exception):
    """
    락 획득 실패 시 발생하는 예외

    HTTP Status Code: 409 Conflict
    """

    def __init__(self, resource: str, message: str = "Failed to acquire lock"):
        self.resource = resource
        self.message = f"{message} for resource: {resource}"
        super().__init__(self.message)


class ValidationException(Exception):
    """
    클라이언트 측 입력 검증 실패 시 발생하는 예외

    요청을 보내기 전에 발생하므로 HTTP 상태 코드가 없습니다.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.message)


class NetworkException(Exception):
    """
    API 요청이 실패했거나 성공이 아닌 응답을 받았을 때 발생하는 예외

    status_code는 전송 자체가 실패한 경우 None 입니다.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404
