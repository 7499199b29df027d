import contextlib
import functools
import logging
from typing import Any, AsyncIterator, Awaitable, Callable

from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, RedirectResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from data import ForkifyClient
from domain.bookmarks import BookmarkStore
from domain.repository import BlobStore, FileBlobStore
from domain.services import RecipeSource
from domain.state import ApplicationState

from app import config
from app.controller import Controller
from app.html import template_environment
from app.html.document import Document
from app.html.view import Event


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler()],
    )


def aHTMLResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> HTMLResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        return HTMLResponse(html, status_code=code)

    return wrapper


def controller(request: Request) -> Controller:
    return request.app.state.controller


@aHTMLResponse
async def homepage(request: Request) -> str:
    return str(controller(request))


@aHTMLResponse
async def recipe_detail(request: Request) -> str:
    c = controller(request)
    await c.recipe_view.dispatch(Event.render, request.path_params.get("id"))
    return str(c)


@aHTMLResponse
async def search(request: Request) -> str:
    c = controller(request)
    await c.search_view.submit(request.query_params.get("query", ""))
    return str(c)


@aHTMLResponse
async def page(request: Request) -> str | tuple[str, int]:
    n = request.path_params["n"]
    if n < 1:
        return "Pages start at 1.", 400
    c = controller(request)
    await c.pagination_view.click(n)
    return str(c)


async def servings(request: Request) -> HTMLResponse | RedirectResponse:
    async with request.form() as form:
        value = form.get("servings")
    try:
        n = int(str(value))
    except ValueError:
        return HTMLResponse("Servings must be a whole number.", status_code=400)
    await controller(request).recipe_view.update_servings(n)
    return RedirectResponse("/", status_code=303)


async def bookmark(request: Request) -> RedirectResponse:
    await controller(request).recipe_view.dispatch(Event.add_bookmark)
    return RedirectResponse("/", status_code=303)


async def upload(request: Request) -> RedirectResponse:
    async with request.form() as form:
        fields = {k: str(v) for k, v in form.items()}
    await controller(request).add_recipe_view.upload(fields)
    return RedirectResponse("/", status_code=303)


async def toggle_upload(request: Request) -> RedirectResponse:
    await controller(request).add_recipe_view.dispatch(Event.toggle_window)
    return RedirectResponse("/", status_code=303)


def create_app(
    conf: config.Config | None = None,
    *,
    source: RecipeSource | None = None,
    store: BlobStore | None = None,
) -> Starlette:
    conf = config.Config() if conf is None else conf

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        configure_logging(conf.log_level)
        client = (
            ForkifyClient(
                api_url=conf.api_url, key=conf.api_key, timeout=conf.timeout_sec
            )
            if source is None
            else source
        )
        bookmarks = BookmarkStore(
            FileBlobStore(conf.storage_dir) if store is None else store,
            key=conf.bookmarks_key,
        )
        # A corrupt bookmarks blob stops startup here.
        bookmarks.load()
        state = ApplicationState(
            bookmarks=bookmarks, results_per_page=conf.results_per_page
        )
        env = template_environment(conf.html_dir, icons=conf.icons)
        app.state.controller = Controller(
            state=state,
            source=client,
            document=Document(environment=env),
            environment=env,
            default_recipe_id=conf.default_recipe_id,
            close_upload_after_sec=conf.close_upload_after_sec,
        )
        app.state.controller.init()
        await app.state.controller.bookmarks_view.dispatch(Event.render)
        logger.info("Ready with %d bookmark(s)", len(bookmarks))
        yield
        if source is None:
            await client.aclose()

    return Starlette(
        debug=True if conf.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/recipes/", recipe_detail),
            Route("/recipes/{id:str}", recipe_detail),
            Route("/search", search),
            Route("/page/{n:int}", page),
            Route("/servings", servings, methods=["POST"]),
            Route("/bookmark", bookmark, methods=["POST"]),
            Route("/upload", upload, methods=["POST"]),
            Route("/upload/toggle", toggle_upload, methods=["POST"]),
            Mount("/assets", StaticFiles(directory=conf.assets_dir)),
        ],
        lifespan=lifespan,
    )


app = create_app()
