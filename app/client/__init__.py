"""
인벤토리 클라이언트

상태/파생 함수, HTML 렌더링, API 클라이언트, 화면 컨트롤러를 제공합니다.
"""

from app.client.api_client import ProductApiClient
from app.client.controller import InventoryController, Notification, RenderedView
from app.client.state import AppState, InventoryStatistics
from app.client.validation import ProductForm, validate_product_form

__all__ = [
    "AppState",
    "InventoryController",
    "InventoryStatistics",
    "Notification",
    "ProductApiClient",
    "ProductForm",
    "RenderedView",
    "validate_product_form",
]
