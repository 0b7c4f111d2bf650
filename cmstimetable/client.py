"""
CMS service client (HTTP -> JSON).

Endpoints used, relative to DEFAULT_BASE_URL:

    POST /api/token/                              login with {"username", "password"}
    GET  /api/legacy/students/my/timetable?year=Y  weekly timetable
    GET  /api/legacy/students/my/assembly          assemblies
    GET  /api/legacy/students/my                   student profile

Authentication is cookie based: the token endpoint sets cookies and the
requests.Session sends them with every later request. Decoding is done by
cmstimetable.parse, normalization by cmstimetable.normalize.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests

from cmstimetable.errors import CMSError
from cmstimetable.model import Assembly, UserInformation, Week
from cmstimetable.normalize import normalize
from cmstimetable.parse import parse_assemblies, parse_timetable, parse_user_information
from cmstimetable.timeutil import DEFAULT_PERIOD_TIMES, PeriodTable
from cmstimetable.wire import WireTimetable

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "https://cms.alevel.com.cn"

TOKEN_PATH = "/api/token/"
TIMETABLE_PATH = "/api/legacy/students/my/timetable"
ASSEMBLY_PATH = "/api/legacy/students/my/assembly"
USER_INFORMATION_PATH = "/api/legacy/students/my"


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class CMSClient:
    """
    Small client for the CMS JSON API.

    Authentication is cookie based: login() posts the credentials and the
    session keeps whatever cookies the service sets for later requests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = self.base_url + path
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise CMSError(f"{method} {path} failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise CMSError(f"{method} {path} returned HTTP {resp.status_code}", status_code=resp.status_code)
        return resp

    def _json(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = self._request(method, path, **kwargs)
        try:
            return resp.json()
        except ValueError as exc:
            raise CMSError(f"{method} {path} did not return JSON", status_code=resp.status_code) from exc

    def login(self, username: str, password: str) -> None:
        self._request("POST", TOKEN_PATH, json={"username": username, "password": password})
        logger.info("Logged in as %s", username)

    def fetch_timetable_json(self, year: int) -> Any:
        """
        Return the raw timetable document for a school year.
        """
        return self._json("GET", TIMETABLE_PATH, params={"year": str(year)})

    def fetch_timetable(self, year: int) -> WireTimetable:
        return parse_timetable(self.fetch_timetable_json(year))

    def fetch_week(self, year: int, periods: PeriodTable = DEFAULT_PERIOD_TIMES) -> Week:
        """
        Fetch and normalize. Raises the NormalizationError if the data is bad.
        """
        return normalize(self.fetch_timetable(year), periods).unwrap()

    def fetch_assemblies(self) -> List[Assembly]:
        return parse_assemblies(self._json("GET", ASSEMBLY_PATH))

    def fetch_user_information(self) -> UserInformation:
        return parse_user_information(self._json("GET", USER_INFORMATION_PATH))
