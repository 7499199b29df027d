from app.html.view import View


class PreviewView(View):
    """One list item for results and bookmarks. Never mounted itself."""

    active_id: str | None = None

    def generate_markup(self) -> str:
        return self.env.get_template("preview.html").render(
            item=self.data,
            active=self.data.id == self.active_id,
        )
