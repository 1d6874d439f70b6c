"""Jinja2 environment shared by the HTML routers."""

from datetime import datetime
from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent / "templates"


def long_date(value: datetime) -> str:
    """Format *value* as e.g. ``June 5, 2024``."""
    return f"{value:%B} {value.day}, {value.year}"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["long_date"] = long_date
