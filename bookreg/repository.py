# bookreg/repository.py
from datetime import datetime
from typing import Iterable, List, Optional
import logging

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from gspread.exceptions import GSpreadException

from .config import SheetConfig
from .errors import LoadError, SaveError
from .models import Row, Submission
from .utils import format_submitted_at

logger = logging.getLogger(__name__)

VALUE_INPUT_OPTION = "USER_ENTERED"

# A 401 makes the session try to refresh a token-only credential, which raises
# RefreshError instead of gspread's APIError.
SHEETS_ERRORS = (GSpreadException, GoogleAuthError, requests.RequestException)


def _http_client(token: str):
    # The bearer token comes from our own JWT exchange; gspread just carries it.
    # Values calls go straight to the endpoint, without a spreadsheet metadata fetch.
    return gspread.authorize(Credentials(token=token)).http_client


def to_values(rows: Iterable[Row], now: Optional[datetime] = None) -> list[list[str]]:
    """Sheet rows: the nine fields in order plus the submission timestamp."""
    stamp = format_submitted_at(now or datetime.now())
    return [row.values() + [stamp] for row in rows]


def append_rows(config: SheetConfig, token: str, rows: List[Row], now: Optional[datetime] = None) -> dict:
    """
    One values.append call for all rows; the API applies it as a whole, so
    either every row is saved or none is.
    """
    values = to_values(rows, now)
    try:
        resp = _http_client(token).values_append(
            config.resource_id,
            config.append_range,
            params={"valueInputOption": VALUE_INPUT_OPTION},
            body={"values": values},
        )
    except SHEETS_ERRORS as e:
        logger.error("Append of %d rows to %s failed: %s", len(values), config.append_range, e)
        raise SaveError() from e
    logger.info("Appended %d rows to %s", len(values), config.append_range)
    return resp


def read_submissions(config: SheetConfig, token: str) -> list[Submission]:
    try:
        resp = _http_client(token).values_get(config.resource_id, config.read_range)
    except SHEETS_ERRORS as e:
        logger.error("Read of %s failed: %s", config.read_range, e)
        raise LoadError() from e
    values = (resp or {}).get("values", []) or []
    submissions = [Submission.from_values(v) for v in values]
    logger.info("Loaded %d submissions from %s", len(submissions), config.read_range)
    return submissions
