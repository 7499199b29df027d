import logging

from domain.models import Recipe

from app.html.view import Event, View


logger = logging.getLogger(__name__)


class RecipeView(View):
    error_message = "We could not find that recipe. Please try another one!"
    message = ""

    @property
    def recipe(self) -> Recipe:
        return self.data

    def generate_markup(self) -> str:
        return self.env.get_template("recipe.html").render(recipe=self.recipe)

    async def update_servings(self, servings: int) -> None:
        if servings <= 0:
            logger.info("Ignoring request for %d servings", servings)
            return
        await self.dispatch(Event.update_servings, servings)
