"""
클라이언트 상태와 순수 파생 함수

AppState는 불변 객체이며, 모든 상태 전이는 새 AppState를 반환합니다.
화면(테이블 행, 페이지네이션, 통계)은 이 모듈의 함수들로 AppState에서 파생됩니다.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from app.models.product import Product

ITEMS_PER_PAGE = 10


class StockLevel(str, Enum):
    """재고 수준 분류"""

    LOW = "low"  # 0
    MEDIUM = "medium"  # 1 ~ 9
    HIGH = "high"  # 10 이상


@dataclass(frozen=True)
class PendingAction:
    """사용자 확인을 기다리는 파괴적 작업 (현재는 삭제만 존재)"""

    type: str
    product_id: int
    product: Product


@dataclass(frozen=True)
class AppState:
    """
    클라이언트 애플리케이션 상태

    Attributes:
        products: 서버에서 받아온 상품 목록 캐시 (저장 순서)
        current_page: 현재 페이지 (1부터 시작)
        items_per_page: 페이지당 상품 수
        editing_product_id: 수정 중인 상품 ID (새 상품 생성 중이면 None)
        pending_action: 확인 대기 중인 삭제 작업
        search_term: 현재 검색어 (빈 문자열이면 검색하지 않음)
        loading: 요청 처리 중 여부
    """

    products: Tuple[Product, ...] = field(default_factory=tuple)
    current_page: int = 1
    items_per_page: int = ITEMS_PER_PAGE
    editing_product_id: Optional[int] = None
    pending_action: Optional[PendingAction] = None
    search_term: str = ""
    loading: bool = False

    @property
    def total_pages(self) -> int:
        return total_pages(len(self.products), self.items_per_page)

    @property
    def is_searching(self) -> bool:
        return bool(normalize_search_term(self.search_term))


@dataclass(frozen=True)
class InventoryStatistics:
    """요약 통계"""

    total_products: int = 0
    total_stock: int = 0
    total_value: float = 0.0
    categories: int = 0


@dataclass(frozen=True)
class PageLink:
    """페이지 번호 링크. number가 None이면 생략 표시(...)"""

    number: Optional[int]
    active: bool = False

    @property
    def is_ellipsis(self) -> bool:
        return self.number is None


@dataclass(frozen=True)
class PaginationControls:
    """이전/다음 버튼과 페이지 번호 링크"""

    links: Tuple[PageLink, ...] = ()
    previous_page: Optional[int] = None
    next_page: Optional[int] = None

    @property
    def visible(self) -> bool:
        return bool(self.links)


def total_pages(count: int, items_per_page: int = ITEMS_PER_PAGE) -> int:
    """ceil(count / items_per_page). 상품이 없으면 0"""
    return math.ceil(count / items_per_page)


def _clamp_page(page: int, pages: int) -> int:
    return min(max(page, 1), max(pages, 1))


def with_products(state: AppState, products: Iterable[Product]) -> AppState:
    """
    캐시를 새 상품 목록으로 교체하고 현재 페이지를 유효 범위로 맞춥니다.
    """
    items = tuple(products)
    pages = total_pages(len(items), state.items_per_page)
    return replace(state, products=items, current_page=_clamp_page(state.current_page, pages))


def remove_product(state: AppState, product_id: int) -> AppState:
    """삭제된 상품을 로컬 캐시에서만 제거합니다 (서버 재동기화 없음)."""
    return with_products(state, (p for p in state.products if p.id != product_id))


def find_product(state: AppState, product_id: int) -> Optional[Product]:
    return next((p for p in state.products if p.id == product_id), None)


def paginate(state: AppState) -> List[Product]:
    """현재 페이지 구간 [(page-1)*n, page*n) 의 상품"""
    start = (state.current_page - 1) * state.items_per_page
    return list(state.products[start:start + state.items_per_page])


def change_page(state: AppState, page: int) -> AppState:
    """
    페이지를 변경합니다.

    범위 밖이거나 현재 페이지와 같으면 같은 상태를 그대로 반환합니다.
    """
    if page < 1 or page > state.total_pages or page == state.current_page:
        return state
    return replace(state, current_page=page)


def stock_level(stock: Optional[int]) -> StockLevel:
    stock = stock or 0
    if stock == 0:
        return StockLevel.LOW
    if stock < 10:
        return StockLevel.MEDIUM
    return StockLevel.HIGH


def normalize_search_term(term: Optional[str]) -> str:
    return (term or "").strip().lower()


def filter_products(products: Sequence[Product], term: str) -> List[Product]:
    """
    이름, 설명, 카테고리, ID 문자열에 검색어가 포함된 상품을 반환합니다.

    대소문자를 구분하지 않으며 전체 목록을 대상으로 합니다 (페이지네이션 무시).
    빈 검색어는 전체 목록을 반환합니다.
    """
    needle = normalize_search_term(term)
    if not needle:
        return list(products)
    return [
        p
        for p in products
        if needle in p.name.lower()
        or needle in (p.description or "").lower()
        or needle in p.category.lower()
        or needle in str(p.id)
    ]


def set_search_term(state: AppState, term: str) -> AppState:
    return replace(state, search_term=term or "")


def page_window(current_page: int, pages: int) -> List[Optional[int]]:
    """
    표시할 페이지 번호 목록. 생략 구간은 None 하나로 표시합니다.

    항상 첫 페이지와 마지막 페이지, 현재 페이지 ±1을 포함합니다.

    Example:
        >>> page_window(5, 10)
        [1, None, 4, 5, 6, None, 10]
    """
    if pages <= 0:
        return []
    shown = sorted(
        {1, pages} | {p for p in (current_page - 1, current_page, current_page + 1) if 1 <= p <= pages}
    )
    window: List[Optional[int]] = []
    previous = 0
    for page in shown:
        if page - previous > 1:
            window.append(None)
        window.append(page)
        previous = page
    return window


def pagination_controls(state: AppState) -> PaginationControls:
    """페이지가 2개 이상일 때만 컨트롤을 만듭니다."""
    pages = state.total_pages
    if pages <= 1:
        return PaginationControls()
    current = state.current_page
    links = tuple(
        PageLink(number=n, active=n == current) for n in page_window(current, pages)
    )
    return PaginationControls(
        links=links,
        previous_page=current - 1 if current > 1 else None,
        next_page=current + 1 if current < pages else None,
    )


def summarize(products: Sequence[Product]) -> InventoryStatistics:
    """
    총 상품 수, 총 재고, 총 재고 가치(가격 × 재고), 카테고리 수를 계산합니다.
    빈 목록이면 모든 값이 0입니다.
    """
    if not products:
        return InventoryStatistics()
    return InventoryStatistics(
        total_products=len(products),
        total_stock=sum(p.stock or 0 for p in products),
        total_value=sum(p.price * (p.stock or 0) for p in products),
        categories=len({p.category for p in products}),
    )


def table_info(state: AppState, filtered_count: Optional[int] = None) -> str:
    """테이블 하단의 '몇 번째부터 몇 번째까지' 안내 문구"""
    total = filtered_count if filtered_count is not None else len(state.products)
    if total == 0:
        return "No products to show"
    if filtered_count is not None:
        return f"Showing 1-{total} of {total} products"
    start = (state.current_page - 1) * state.items_per_page + 1
    end = min(start + state.items_per_page - 1, total)
    return f"Showing {start}-{end} of {total} products"


def begin_create(state: AppState) -> AppState:
    return replace(state, editing_product_id=None)


def begin_edit(state: AppState, product_id: int) -> AppState:
    return replace(state, editing_product_id=product_id)


def request_delete(state: AppState, product_id: int) -> AppState:
    """캐시에 있는 상품에 대해 삭제 확인 대기 상태를 만듭니다. 없으면 그대로."""
    product = find_product(state, product_id)
    if product is None:
        return state
    return replace(
        state,
        pending_action=PendingAction(type="delete", product_id=product_id, product=product),
    )


def clear_pending_action(state: AppState) -> AppState:
    return replace(state, pending_action=None)


def set_loading(state: AppState, loading: bool) -> AppState:
    return replace(state, loading=loading)
