from fractions import Fraction
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape


def format_quantity(quantity: float | None) -> str:
    """1.5 -> '1 1/2'. Unknown quantities render as nothing."""
    if quantity is None:
        return ""
    frac = Fraction(quantity).limit_denominator(100)
    whole, rest = divmod(frac.numerator, frac.denominator)
    if not rest:
        return str(whole)
    if not whole:
        return f"{rest}/{frac.denominator}"
    return f"{whole} {rest}/{frac.denominator}"


def template_environment(html_dir: Path, *, icons: str = "") -> Environment:
    env = Environment(
        loader=FileSystemLoader(html_dir),
        autoescape=select_autoescape(),
    )
    env.filters["fraction"] = format_quantity
    env.globals["icons"] = icons
    return env
