from typing import Mapping

from bs4 import Tag
from jinja2 import Environment

from app.html.view import Event, View


def _toggle_hidden(tag: Tag) -> None:
    classes = list(tag.get("class") or [])
    if "hidden" in classes:
        classes.remove("hidden")
    else:
        classes.append("hidden")
    tag["class"] = classes


class AddRecipeView(View):
    """The upload panel: an overlay plus a window holding the form."""

    message = "Recipe was successfully uploaded :)"

    def __init__(
        self,
        parent_element: Tag | None,
        *,
        environment: Environment,
        overlay: Tag,
        window: Tag,
    ) -> None:
        super().__init__(parent_element, environment=environment)
        self.overlay = overlay
        self.window = window
        self.add_handler(Event.toggle_window, self.toggle_window)

    @property
    def is_open(self) -> bool:
        return "hidden" not in (self.window.get("class") or [])

    def generate_markup(self) -> str:
        return self.env.get_template("upload-form.html").render()

    def render_form(self) -> None:
        self._mount(self.generate_markup())

    def toggle_window(self) -> None:
        _toggle_hidden(self.overlay)
        _toggle_hidden(self.window)
        # The form is replaced by the success message after an upload.
        if self.is_open and self.parent_element is not None:
            if self.parent_element.find("form") is None:
                self.render_form()

    def close_window(self) -> None:
        if self.is_open:
            self.toggle_window()

    async def upload(self, fields: Mapping[str, str]) -> None:
        await self.dispatch(Event.upload, dict(fields))
