"""HTTP client used by the Streamlit pages to talk to the Perkhub API."""
from typing import Dict, List, Optional
import logging

import requests

from .. import config

logger = logging.getLogger(__name__)

TIMEOUT = 10


class ApiError(Exception):
    """Raised when the API answers with an error or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _url(path: str, base_url: Optional[str] = None) -> str:
    return f"{(base_url or config.API_URL).rstrip('/')}/{path.lstrip('/')}"


def _auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _handle(response: requests.Response) -> Dict:
    if response.status_code >= 400:
        try:
            detail = response.json().get("detail", response.reason)
        except ValueError:
            detail = response.reason or "Unknown error"
        raise ApiError(str(detail), status_code=response.status_code)
    return response.json()


def fetch_public_perks(
    search: Optional[str] = None,
    merchant: Optional[str] = None,
    base_url: Optional[str] = None,
) -> List[Dict]:
    """Every public perk, optionally narrowed on the server."""
    params = {}
    if search:
        params["search"] = search
    if merchant:
        params["merchant"] = merchant
    try:
        response = requests.get(_url("perks/all", base_url), params=params, timeout=TIMEOUT)
    except requests.RequestException as e:
        logger.error(f"Could not load perks: {str(e)}")
        raise ApiError(f"Could not reach the API: {str(e)}") from e
    return _handle(response).get("perks", [])


def register(name: str, email: str, password: str, base_url: Optional[str] = None) -> Dict:
    try:
        response = requests.post(
            _url("auth/register", base_url),
            json={"name": name, "email": email, "password": password},
            timeout=TIMEOUT,
        )
    except requests.RequestException as e:
        raise ApiError(f"Could not reach the API: {str(e)}") from e
    return _handle(response)


def login(email: str, password: str, base_url: Optional[str] = None) -> Dict:
    try:
        response = requests.post(
            _url("auth/login", base_url),
            json={"email": email, "password": password},
            timeout=TIMEOUT,
        )
    except requests.RequestException as e:
        raise ApiError(f"Could not reach the API: {str(e)}") from e
    return _handle(response)


def fetch_profile(token: str, base_url: Optional[str] = None) -> Dict:
    try:
        response = requests.get(
            _url("auth/me", base_url),
            headers=_auth_headers(token),
            timeout=TIMEOUT,
        )
    except requests.RequestException as e:
        raise ApiError(f"Could not reach the API: {str(e)}") from e
    return _handle(response)["user"]
