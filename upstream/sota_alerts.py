"""Client for the SOTA alerts API."""
import logging
import time
from typing import Any, Dict, List

import requests

from processor.exceptions import UpstreamError

logger = logging.getLogger(__name__)

ALERTS_URL = "https://api-db2.sota.org.uk/api/alerts/12/all/all/"


class SotaAlertsClient:
    """Client fetching activation alerts from api-db2.sota.org.uk."""

    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(self, url: str = ALERTS_URL, timeout: int = 30):
        """
        Initialize the alerts client.

        Args:
            url: Alerts endpoint
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.url = url
        self.timeout = timeout

    def fetch_alerts(self) -> List[Dict[str, Any]]:
        """
        Fetch the current alerts.

        Returns:
            List of alert objects exactly as the API returned them

        Raises:
            UpstreamError: If the API cannot be reached, keeps answering
                with an error status, or returns something other than a
                JSON array
        """
        response = self._get_with_retries()

        try:
            alerts = response.json()
        except ValueError as e:
            raise UpstreamError(
                f"Alerts response is not valid JSON: {e}",
                status_code=response.status_code
            ) from e

        if not isinstance(alerts, list):
            raise UpstreamError(
                f"Expected a JSON array of alerts, got {type(alerts).__name__}",
                status_code=response.status_code
            )

        logger.info(f"Successfully fetched {len(alerts)} alerts")
        return alerts

    def _get_with_retries(self) -> requests.Response:
        """
        GET the alerts endpoint with exponential backoff.

        Returns:
            Successful response

        Raises:
            UpstreamError: If all retry attempts fail
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(f"Fetching alerts (attempt {attempt + 1}/{self.MAX_RETRIES})")
                response = requests.get(self.url, timeout=self.timeout)
                response.raise_for_status()
                return response

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. Last error: {e}"
                    )
                    status_code = e.response.status_code if e.response is not None else None
                    raise UpstreamError(str(e), status_code=status_code) from e
