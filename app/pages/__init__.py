"""Page modules for the Bujit Streamlit application."""

from .ledger import render_page as render_ledger_page
from .overview import render_page as render_overview_page

__all__ = [
    "render_ledger_page",
    "render_overview_page",
]
