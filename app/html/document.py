from bs4 import BeautifulSoup, Tag
from jinja2 import Environment


class MountPointMissing(Exception):
    pass


class Document:
    """The page every view draws into, parsed once from `index.html`."""

    def __init__(
        self,
        *,
        environment: Environment,
        template_name: str = "index.html",
    ) -> None:
        self.env = environment
        self.name = template_name
        self.soup = BeautifulSoup(
            self.env.get_template(self.name).render(), "html.parser"
        )

    def __str__(self) -> str:
        return str(self.soup)

    def mount(self, selector: str) -> Tag:
        tag = self.soup.select_one(selector)
        if tag is None:
            raise MountPointMissing(f"{selector} not in {self.name}")
        return tag
