from datetime import datetime
from typing import Optional
import logging

from . import auth, repository
from .config import SheetConfig
from .errors import EmptySubmissionError
from .grid import Grid, GridSettings, content_rows
from .models import Submission
from .reducer import Reset, reduce

logger = logging.getLogger(__name__)


class RegistrationService:
    """Token first, then the dependent Sheets call. No retries."""

    def __init__(self, config: SheetConfig, settings: Optional[GridSettings] = None, session=None):
        self.config = config
        self.settings = settings or GridSettings()
        self.session = session

    def _token(self) -> str:
        return auth.get_access_token(self.config, session=self.session)

    def submit(self, grid: Grid, now: Optional[datetime] = None) -> tuple[int, Grid]:
        """
        Append every content-bearing row. Returns (saved count, reset grid).
        On any error the caller keeps its grid as is.
        """
        rows = content_rows(grid)
        if not rows:
            raise EmptySubmissionError()
        repository.append_rows(self.config, self._token(), rows, now=now)
        logger.info("Submitted %d rows", len(rows))
        return len(rows), reduce(grid, Reset(), self.settings)

    def load(self) -> list[Submission]:
        return repository.read_submissions(self.config, self._token())
