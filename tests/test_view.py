from typing import Any

from bs4 import BeautifulSoup, Tag
from jinja2 import Environment
import pytest

from app.html.view import Event, Status, View


class CounterView(View):
    error_message = "Nothing to count"
    message = "All counted"

    def generate_markup(self) -> str:
        items = "".join(
            f'<li class="item" data-n="{n}"><span class="n">{n}</span></li>'
            for n in self.data
        )
        return f'<ul class="items">{items}</ul>'


def mount() -> Tag:
    soup = BeautifulSoup('<div class="root"></div>', "html.parser")
    tag = soup.select_one(".root")
    assert tag is not None
    return tag


@pytest.fixture
def view(env: Environment) -> CounterView:
    return CounterView(mount(), environment=env)


def test_render_mounts_markup(view: CounterView) -> None:
    assert view.render([1, 2]) is None
    assert [s.text for s in view.parent_element.select(".n")] == ["1", "2"]
    assert view.status is Status.populated


@pytest.mark.parametrize("data", (None, [], ()))
def test_render_nothing_shows_error(view: CounterView, data: Any) -> None:
    view.render(data)
    assert "Nothing to count" in view.html
    assert view.parent_element.select(".item") == []
    assert view.status is Status.error_shown


def test_render_without_mounting_returns_markup(view: CounterView) -> None:
    markup = view.render([3], render=False)
    assert markup == '<ul class="items"><li class="item" data-n="3"><span class="n">3</span></li></ul>'
    assert view.html == ""
    assert view.data == [3]
    assert view.status is Status.empty


def test_render_without_mount_point(env: Environment) -> None:
    view = CounterView(None, environment=env)
    assert view.render([1], render=False) is not None
    view.render_error()
    view.spinner()
    view.update([2])
    assert view.html == ""


def test_spinner_message_and_error(view: CounterView) -> None:
    view.render([1])

    view.spinner()
    assert view.parent_element.select_one(".spinner") is not None

    view.render_message()
    assert "All counted" in view.html
    view.render_message("Custom")
    assert "Custom" in view.html

    view.render_error("Broken")
    assert view.parent_element.select_one(".error p").text == "Broken"


def test_update_patches_in_place(view: CounterView) -> None:
    view.render([1, 2])
    spans = view.parent_element.select(".n")
    items = view.parent_element.select(".item")

    view.update([1, 5])

    assert view.parent_element.select(".n") == spans
    assert view.parent_element.select(".n")[1] is spans[1]
    assert spans[1].text == "5"
    assert items[1]["data-n"] == "5"
    assert spans[0].text == "1"


def test_update_ignores_extra_nodes(view: CounterView) -> None:
    view.render([1, 2])

    view.update([7, 8, 9])
    assert [s.text for s in view.parent_element.select(".n")] == ["7", "8"]

    view.update([4])
    assert [s.text for s in view.parent_element.select(".n")] == ["4", "8"]


def test_update_with_nothing_is_a_no_op(view: CounterView) -> None:
    view.render([1])
    before = view.html
    view.update(None)
    assert view.html == before


def test_one_handler_per_event(view: CounterView) -> None:
    view.add_handler(Event.render, lambda: None)
    with pytest.raises(ValueError):
        view.add_handler(Event.render, lambda: None)


@pytest.mark.asyncio
async def test_dispatch(view: CounterView) -> None:
    seen: list[int] = []

    async def handler(n: int) -> str:
        seen.append(n)
        return "done"

    view.add_handler(Event.page_click, handler)
    view.add_handler(Event.update_servings, seen.append)

    assert await view.dispatch(Event.page_click, 3) == "done"
    await view.dispatch(Event.update_servings, 4)
    assert await view.dispatch(Event.upload, {}) is None
    assert seen == [3, 4]


@pytest.mark.parametrize("data", [None, []])
def test_update_with_nothing_keeps_status(view: CounterView, data: Any) -> None:
    view.render_error()

    view.update(data)

    assert view.status is Status.error_shown
    assert "Nothing to count" in view.html
