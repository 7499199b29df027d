import math

from domain.models import SearchResultItem, SearchState


def get_search_result_page(
    search: SearchState,
    page: int | None = None,
) -> list[SearchResultItem]:
    """Results for a 1-based page.

    Asking for a page also selects it. Without a page the current one is
    returned. Pages past the end are empty.
    """
    if page is None:
        page = search.page
    else:
        search.page = page
    start = (page - 1) * search.results_per_page
    end = page * search.results_per_page
    return search.result[start:end]


def page_count(search: SearchState) -> int:
    return math.ceil(len(search.result) / search.results_per_page)
