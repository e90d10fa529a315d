"""
Jinja2 template environment for the HTML screens.
"""
from pathlib import Path

from fastapi.templating import Jinja2Templates

from contact_manager.utils.dates import format_day_month_year

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATE_DIR))
templates.env.filters["day_month_year"] = format_day_month_year
