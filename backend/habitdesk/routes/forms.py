"""
Helpers shared by the form-posting routes
"""
from typing import Optional
from urllib.parse import urlencode

from fastapi.responses import RedirectResponse

from habitdesk.core.exceptions import ValidationError


def redirect_home(**params) -> RedirectResponse:
    """Redirect to the dashboard with flash flags in the query string"""
    url = "/"
    if params:
        url += "?" + urlencode(params)
    return RedirectResponse(url=url, status_code=302)


def parse_id(value: Optional[str]) -> int:
    """
    Parse an id posted by a form

    Raises:
        ValidationError: If the value is missing or not an integer
    """
    try:
        return int((value or "").strip())
    except ValueError:
        raise ValidationError(f"Invalid id '{value}'", field="invalid")


def parse_quantity(value: Optional[str]) -> Optional[int]:
    """
    Parse an optional quantity; a blank field means "not supplied"

    Raises:
        ValidationError: If the value is not an integer
    """
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid quantity '{value}'", field="quantity")
