"""
PagePicker - Split Service Client

Sends a document and a page list to a running split service and returns
the PDF it builds.
"""

import json
import logging

import requests

from pagepicker.config import CLIENT_TIMEOUT_SECONDS, SPLIT_ENDPOINT
from pagepicker.utils.exceptions import PageSelectionError, SplitRequestError
from pagepicker.utils.i18n import _

logger = logging.getLogger(__name__)


class SplitClient:
    """Client for ``POST /api/pdf/split``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = CLIENT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Service root, e.g. "http://localhost:5000"
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @property
    def split_url(self) -> str:
        return f"{self.base_url}{SPLIT_ENDPOINT}"

    def split(self, doc_bytes: bytes, pages: list[int], filename: str = "document.pdf") -> bytes:
        """Request a new PDF holding ``pages`` of the given document.

        Pages are sent sorted ascending, as the picker submits them.

        Args:
            doc_bytes: Source PDF bytes.
            pages: Selected page numbers.
            filename: Name reported for the uploaded file.

        Returns:
            Bytes of the new PDF.

        Raises:
            PageSelectionError: If ``pages`` is empty; nothing is sent.
            SplitRequestError: If the service is unreachable or reports an error.
        """
        if not pages:
            raise PageSelectionError(_("no pages selected"))

        ordered = sorted(pages)
        logger.info("Requesting pages %s from %s", ordered, self.split_url)

        try:
            response = self._session.post(
                self.split_url,
                files={"file": (filename, doc_bytes, "application/pdf")},
                data={"pages": json.dumps(ordered)},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Split request failed: %s", e)
            raise SplitRequestError(
                _("Could not reach the split service: {error}").format(error=e)
            ) from e

        if response.status_code == 200:
            return response.content

        kind, message = self._parse_error(response)
        logger.error("Split service returned %d (%s): %s", response.status_code, kind, message)
        raise SplitRequestError(message, kind=kind, status_code=response.status_code)

    @staticmethod
    def _parse_error(response: requests.Response) -> tuple[str, str]:
        try:
            error = response.json().get("error", {})
        except ValueError:
            return "internal", response.text or response.reason
        if isinstance(error, dict):
            return error.get("kind", "internal"), error.get("message", response.reason)
        return "internal", str(error)
