from domain.models import SearchState
from domain.pagination import page_count

from app.html.view import Event, View


class PaginationView(View):
    """Previous / next buttons under the results."""

    @property
    def search(self) -> SearchState:
        return self.data

    def generate_markup(self) -> str:
        cur_page = self.search.page
        num_pages = page_count(self.search)
        return self.env.get_template("pagination.html").render(
            prev_page=cur_page - 1 if cur_page > 1 else None,
            next_page=cur_page + 1 if cur_page < num_pages else None,
        )

    async def click(self, goto: int) -> None:
        await self.dispatch(Event.page_click, goto)
