"""AWS Lambda handler serving SOTA alerts as an iCalendar feed."""
import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from processor.calendar_builder import CalendarBuilder
from processor.exceptions import UpstreamError
from processor.identity import DEFAULT_UID_DOMAIN
from storage.alert_cache import DEFAULT_TTL_SECONDS, AlertCache
from upstream.sota_alerts import ALERTS_URL, SotaAlertsClient

# Attributes every LogRecord has; anything else came in through `extra`.
_RESERVED_LOG_ATTRS = set(vars(logging.LogRecord('', 0, '', 0, '', (), None))) | {'message'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON, including any `extra` fields."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_LOG_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _response(
    status_code: int,
    body: str,
    content_type: str,
    headers: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': content_type, **(headers or {})},
        'body': body
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Serve the alerts feed for an API Gateway or function URL request.

    Returns the ICS calendar by default and the raw alerts as JSON when
    called with ?format=json.

    Args:
        event: HTTP request event payload
        context: Lambda context object

    Returns:
        HTTP response dict with statusCode, headers and body
    """
    # Read configuration from environment variables
    table_name = os.environ.get('TABLE_NAME', 'sota-alerts-cache')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    alerts_url = os.environ.get('ALERTS_URL', ALERTS_URL)
    timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))
    cache_ttl_seconds = int(os.environ.get('CACHE_TTL_SECONDS', str(DEFAULT_TTL_SECONDS)))
    uid_domain = os.environ.get('UID_DOMAIN', DEFAULT_UID_DOMAIN)

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    query = (event or {}).get('queryStringParameters') or {}
    output_format = query.get('format')

    start_time = time.time()
    logger.info(
        "Request received",
        extra={'output_format': output_format or 'ics', 'table_name': table_name}
    )

    try:
        cache = AlertCache(table_name=table_name, ttl_seconds=cache_ttl_seconds)
        alerts = cache.get(alerts_url)

        if alerts is None:
            client = SotaAlertsClient(url=alerts_url, timeout=timeout_seconds)
            try:
                alerts = client.fetch_alerts()
            except UpstreamError as e:
                logger.error(
                    f"Failed to fetch alerts: {e}",
                    extra={'status_code': e.status_code, 'error_type': type(e).__name__}
                )
                return _response(
                    502,
                    f"Upstream fetch error: {e.status_code or e}",
                    'text/plain; charset=utf-8'
                )
            cache.put(alerts_url, alerts)

        if output_format == 'json':
            return _response(200, json.dumps(alerts, indent=2), 'application/json; charset=utf-8')

        builder = CalendarBuilder(uid_domain=uid_domain)
        ics = builder.build_ics(alerts, now=datetime.now(timezone.utc))

        logger.info(
            "Calendar generated",
            extra={'alerts': len(alerts), 'duration_seconds': round(time.time() - start_time, 2)}
        )
        return _response(
            200,
            ics,
            'text/calendar; charset=utf-8',
            {
                'Content-Disposition': 'inline; filename="sota_alerts.ics"',
                'Cache-Control': 'public, max-age=120'
            }
        )

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Request failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return _response(
            500,
            json.dumps({
                'message': 'Failed to build calendar feed',
                'error': str(e),
                'error_type': type(e).__name__
            }),
            'application/json; charset=utf-8'
        )
