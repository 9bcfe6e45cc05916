"""
상품 테이블 HTML 조각 렌더링

AppState에서 파생된 행/페이지네이션/통계를 Jinja2 템플릿으로 렌더링합니다.
페이지 전체 조립은 하지 않고 tbody, 페이지네이션 ul 안쪽 조각만 만듭니다.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup, escape

from app.client.state import (
    AppState,
    InventoryStatistics,
    StockLevel,
    filter_products,
    paginate,
    pagination_controls,
    stock_level,
)
from app.models.product import Product, parse_timestamp

DESCRIPTION_PREVIEW_LENGTH = 60
NO_DESCRIPTION = "No description"
DATE_UNAVAILABLE = "Date unavailable"

_TEMPLATES = {
    "rows.html": """\
{% for row in rows %}
<tr class="product-row" data-id="{{ row.id }}">
  <td><span class="product-id">#{{ row.id }}</span></td>
  <td>
    <h6 class="product-name mb-1">{{ row.name }}</h6>
    <small class="text-muted">{{ row.description }}</small>
  </td>
  <td><span class="badge-category">{{ row.category }}</span></td>
  <td><span class="product-price">${{ row.price }}</span></td>
  <td><span class="stock-badge stock-{{ row.stock_level.value }}">{{ row.stock }} units</span></td>
  <td><small class="text-muted">{{ row.created }}</small></td>
  <td>
    <div class="btn-group" role="group">
      <button class="btn btn-sm btn-outline-primary" data-action="edit" data-id="{{ row.id }}">Edit</button>
      <button class="btn btn-sm btn-outline-danger" data-action="delete" data-id="{{ row.id }}">Delete</button>
      <button class="btn btn-sm btn-outline-dark" data-action="view" data-id="{{ row.id }}">View</button>
    </div>
  </td>
</tr>
{% endfor %}""",
    "state.html": """\
<tr class="{{ kind }}-row">
  <td colspan="7" class="text-center py-5">
    <div class="{{ kind }}">
      <h5>{{ title }}</h5>
      {% if text %}<p class="text-muted">{{ text }}</p>{% endif %}
      {% if action %}<button class="btn mt-3" data-action="{{ action }}">{{ action_label }}</button>{% endif %}
    </div>
  </td>
</tr>""",
    "pagination.html": """\
{% if controls.visible %}
<li class="page-item{% if controls.previous_page is none %} disabled{% endif %}">
  <a class="page-link" href="#" data-page="{{ controls.previous_page or '' }}">&laquo;</a>
</li>
{% for link in controls.links %}
{% if link.is_ellipsis %}
<li class="page-item disabled"><span class="page-link">...</span></li>
{% else %}
<li class="page-item{% if link.active %} active{% endif %}">
  <a class="page-link" href="#" data-page="{{ link.number }}">{{ link.number }}</a>
</li>
{% endif %}
{% endfor %}
<li class="page-item{% if controls.next_page is none %} disabled{% endif %}">
  <a class="page-link" href="#" data-page="{{ controls.next_page or '' }}">&raquo;</a>
</li>
{% endif %}""",
}

_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(default=True, default_for_string=True),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class TableRow:
    """테이블 한 행의 표시용 데이터"""

    id: int
    name: Markup
    description: str
    category: str
    price: str
    stock: int
    stock_level: StockLevel
    created: str


def highlight(text: str, term: Optional[str]) -> Markup:
    """
    text 안의 검색어를 대소문자 구분 없이 강조 표시합니다.

    각 조각을 먼저 HTML 이스케이프하므로 상품명에 포함된 태그는 실행되지 않습니다.
    """
    term = (term or "").strip()
    if not term:
        return escape(text)
    pieces = re.split(f"({re.escape(term)})", text, flags=re.IGNORECASE)
    out = []
    for index, piece in enumerate(pieces):
        if index % 2:
            out.append(Markup('<span class="highlight fw-bold">%s</span>') % piece)
        else:
            out.append(escape(piece))
    return Markup("").join(out)


def truncate(text: str, length: int = DESCRIPTION_PREVIEW_LENGTH) -> str:
    if len(text) <= length:
        return text
    return text[: length - 1].rstrip() + "…"


def format_date(value: str) -> str:
    """ISO 타임스탬프를 'Jan 22, 2025' 형식으로 변환"""
    try:
        moment = parse_timestamp(value)
    except (TypeError, ValueError, AttributeError):
        return DATE_UNAVAILABLE
    return f"{moment:%b} {moment.day}, {moment.year}"


def format_price(price: float) -> str:
    return f"{price:.2f}"


def build_row(product: Product, term: Optional[str] = None) -> TableRow:
    return TableRow(
        id=product.id,
        name=highlight(product.name, term),
        description=truncate(product.description) if product.description else NO_DESCRIPTION,
        category=product.category,
        price=format_price(product.price),
        stock=product.stock,
        stock_level=stock_level(product.stock),
        created=format_date(product.created_at),
    )


def build_rows(state: AppState) -> List[TableRow]:
    """
    현재 상태에서 보여줄 행을 만듭니다.

    검색어가 있으면 전체 캐시에서 일치하는 상품을 모두 보여주고
    (페이지네이션 무시), 없으면 현재 페이지 구간만 보여줍니다.
    """
    if state.is_searching:
        return [build_row(p, state.search_term) for p in filter_products(state.products, state.search_term)]
    return [build_row(p) for p in paginate(state)]


def render_rows(rows: Sequence[TableRow]) -> str:
    return _env.get_template("rows.html").render(rows=rows)


def render_loading() -> str:
    return _env.get_template("state.html").render(
        kind="loading-state", title="Loading products...", text=None, action=None
    )


def render_empty() -> str:
    return _env.get_template("state.html").render(
        kind="empty-state",
        title="No products registered",
        text="Start by adding your first product",
        action="create",
        action_label="Add Product",
    )


def render_no_results(term: str) -> str:
    return _env.get_template("state.html").render(
        kind="no-results-state",
        title="No products found",
        text=f'No products match "{term.strip()}"',
        action="clear-search",
        action_label="Clear search",
    )


def render_error() -> str:
    return _env.get_template("state.html").render(
        kind="error-state",
        title="Error loading products",
        text="Try reloading or check your connection",
        action="reload",
        action_label="Retry",
    )


def render_table(state: AppState) -> str:
    """
    tbody 내용을 렌더링합니다.

    로딩 중 → 로딩 행, 검색 결과 없음 → no results 상태,
    상품 없음 → empty 상태, 그 외 → 상품 행.
    """
    if state.loading:
        return render_loading()
    if state.is_searching:
        rows = build_rows(state)
        return render_rows(rows) if rows else render_no_results(state.search_term)
    if not state.products:
        return render_empty()
    return render_rows(build_rows(state))


def render_pagination(state: AppState) -> str:
    """페이지가 1개 이하이면 빈 문자열"""
    return _env.get_template("pagination.html").render(
        controls=pagination_controls(state)
    ).strip()


def format_statistics(stats: InventoryStatistics) -> Dict[str, str]:
    """통계 카드에 표시할 문자열. 상품이 없으면 모두 0"""
    if stats.total_products == 0:
        return {
            "totalProducts": "0",
            "totalStock": "0",
            "totalValue": "$0",
            "categories": "0",
        }
    return {
        "totalProducts": str(stats.total_products),
        "totalStock": f"{stats.total_stock:,}",
        "totalValue": f"${stats.total_value:,.2f}",
        "categories": str(stats.categories),
    }
