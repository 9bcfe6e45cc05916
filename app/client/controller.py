"""
인벤토리 화면 컨트롤러

AppState를 보관하고, API 호출 결과에 따라 상태를 전이시킨 뒤
렌더링 결과(RenderedView)를 제공합니다. 모든 실패는 알림으로 보고되며
컨트롤러는 계속 사용 가능한 상태로 남습니다.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from app.client import render
from app.client import state as st
from app.client.api_client import ProductApiClient
from app.client.validation import ProductForm, validate_product_form
from app.core.exceptions import NetworkException, ValidationException
from app.models.product import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    """사용자에게 보여줄 일시적 알림 (level: success, error, warning, info)"""

    message: str
    level: str = "info"


@dataclass(frozen=True)
class RenderedView:
    """한 번의 렌더링 결과"""

    table: str
    pagination: str
    table_info: str
    statistics: Dict[str, str]


class InventoryController:
    """
    상품 목록 화면의 상태와 사용자 동작을 관리합니다.

    Args:
        api: 상품 API 클라이언트
        notify: 알림 콜백 (선택). 모든 알림은 notifications에도 쌓입니다.
        items_per_page: 페이지당 상품 수
    """

    def __init__(
        self,
        api: ProductApiClient,
        notify: Optional[Callable[[Notification], None]] = None,
        items_per_page: int = st.ITEMS_PER_PAGE,
    ) -> None:
        self.api = api
        self.state = st.AppState(items_per_page=items_per_page)
        self.statistics = st.InventoryStatistics()
        self.load_failed = False
        self.notifications: List[Notification] = []
        self._notify_callback = notify

    def _notify(self, message: str, level: str = "info") -> None:
        notification = Notification(message=message, level=level)
        self.notifications.append(notification)
        if self._notify_callback is not None:
            self._notify_callback(notification)

    def _refresh_statistics(self) -> None:
        self.statistics = st.summarize(self.state.products)

    # ------------------------------------------------------------------
    # 조회
    # ------------------------------------------------------------------
    def load(self) -> bool:
        """
        전체 상품 목록을 다시 불러옵니다.

        실패 시 이전 캐시는 유지하고 오류 상태(재시도 버튼)를 렌더링합니다.
        """
        self.state = st.set_loading(self.state, True)
        try:
            products = self.api.list_products()
        except NetworkException as e:
            logger.error("Error loading products: %s", e)
            self.load_failed = True
            self._notify("Error loading products", "error")
            return False
        finally:
            self.state = st.set_loading(self.state, False)

        self.load_failed = False
        self.state = st.with_products(self.state, products)
        self._refresh_statistics()
        return True

    def render(self) -> RenderedView:
        if self.load_failed and not self.state.loading:
            table = render.render_error()
        else:
            table = render.render_table(self.state)
        if self.state.is_searching:
            matches = len(st.filter_products(self.state.products, self.state.search_term))
            info = st.table_info(self.state, filtered_count=matches)
            pagination = ""
        else:
            info = st.table_info(self.state)
            pagination = render.render_pagination(self.state)
        return RenderedView(
            table=table,
            pagination=pagination,
            table_info=info,
            statistics=render.format_statistics(self.statistics),
        )

    def search(self, term: str) -> RenderedView:
        """검색어를 적용합니다. 빈 검색어는 검색 해제와 같습니다."""
        self.state = st.set_search_term(self.state, term)
        return self.render()

    def clear_search(self) -> RenderedView:
        return self.search("")

    def change_page(self, page: int) -> bool:
        """범위 밖이거나 현재 페이지이면 아무것도 하지 않고 False"""
        new_state = st.change_page(self.state, page)
        changed = new_state is not self.state
        self.state = new_state
        return changed

    def view_product(self, product_id: int) -> Optional[Product]:
        product = st.find_product(self.state, product_id)
        if product is not None:
            self._notify(f"Detailed view of: {product.name}", "info")
        return product

    # ------------------------------------------------------------------
    # 생성 / 수정
    # ------------------------------------------------------------------
    def open_create(self) -> None:
        self.state = st.begin_create(self.state)

    def open_edit(self, product_id: int) -> Optional[Product]:
        """
        서버에서 상품을 조회하고 수정 대상으로 설정합니다.

        Returns:
            폼을 채울 상품, 실패 시 None
        """
        self.state = st.set_loading(self.state, True)
        try:
            product = self.api.get_product(product_id)
        except NetworkException as e:
            logger.error("Error loading product %s: %s", product_id, e)
            self._notify("Error loading the product", "error")
            return None
        finally:
            self.state = st.set_loading(self.state, False)
        self.state = st.begin_edit(self.state, product.id)
        return product

    def save(self, form: ProductForm) -> Optional[Product]:
        """
        폼을 검증한 뒤 수정 대상이 있으면 PUT, 없으면 POST를 보냅니다.

        성공하면 목록을 다시 불러오고 수정 대상을 해제합니다.
        검증에 실패하면 요청을 보내지 않습니다.
        """
        try:
            payload = validate_product_form(form)
        except ValidationException as e:
            self._notify(e.message, "warning")
            return None

        editing_id = self.state.editing_product_id
        self.state = st.set_loading(self.state, True)
        try:
            if editing_id is not None:
                saved = self.api.update_product(editing_id, payload)
            else:
                saved = self.api.create_product(payload)
        except NetworkException as e:
            logger.error("Error saving product: %s", e)
            self._notify(f"Error: {e.message}", "error")
            return None
        finally:
            self.state = st.set_loading(self.state, False)

        self.load()
        self.state = st.begin_create(self.state)
        if editing_id is not None:
            self._notify("Product updated successfully", "success")
        else:
            self._notify("Product created successfully", "success")
        return saved

    # ------------------------------------------------------------------
    # 삭제 (확인 후 실행)
    # ------------------------------------------------------------------
    def confirm_delete(self, product_id: int) -> Optional[st.PendingAction]:
        """캐시에 있는 상품이면 삭제 확인 대기 상태로 만듭니다."""
        self.state = st.request_delete(self.state, product_id)
        return self.state.pending_action

    def cancel_pending_action(self) -> None:
        self.state = st.clear_pending_action(self.state)

    def execute_pending_action(self) -> bool:
        action = self.state.pending_action
        if action is None:
            return False
        self.state = st.clear_pending_action(self.state)
        if action.type == "delete":
            return self.delete_product(action.product_id)
        return False

    def delete_product(self, product_id: int) -> bool:
        """
        상품을 삭제하고 로컬 캐시에서만 제거합니다 (목록을 다시 불러오지 않음).
        """
        self.state = st.set_loading(self.state, True)
        try:
            self.api.delete_product(product_id)
        except NetworkException as e:
            logger.error("Error deleting product %s: %s", product_id, e)
            self._notify(f"Error: {e.message}", "error")
            return False
        finally:
            self.state = st.set_loading(self.state, False)

        self.state = st.remove_product(self.state, product_id)
        self._refresh_statistics()
        self._notify("Product deleted successfully", "success")
        return True
