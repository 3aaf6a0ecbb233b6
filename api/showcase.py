"""Showcase page endpoint: GET /api/showcase?user_id=<id> returns the generated HTML."""

from http.server import BaseHTTPRequestHandler
from urllib.parse import parse_qs, urlparse
import asyncio
import json

from src.services.showcase_service import build_showcase_for_user
from src.utils.logging import correlation_context, get_structured_logger, mask_user_id
from src.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)


def _run(coro):
    try:
        loop = asyncio.get_event_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    if loop.is_closed():
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for the public showcase page."""

    def _send_json(self, status: int, body: dict):
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(body).encode('utf-8'))

    def do_GET(self):
        """Render the showcase for the agent named in the query string."""
        with correlation_context() as correlation_id:
            query = parse_qs(urlparse(self.path).query)
            user_id = (query.get("user_id") or [""])[0].strip()
            if not user_id:
                logger.warning("Showcase requested without user_id")
                self._send_json(400, {"error": "user_id is required"})
                return

            try:
                document = _run(build_showcase_for_user(user_id))
            except Exception as e:
                logger.error(
                    "Error generating showcase",
                    user_id=mask_user_id(user_id),
                    error=str(e),
                    exc_info=True,
                )
                self._send_json(500, {"error": "showcase generation failed"})
                return

            body = document.html.encode('utf-8')
            self.send_response(200)
            self.send_header('Content-Type', 'text/html; charset=utf-8')
            self.send_header('Content-Length', str(len(body)))
            self.send_header('X-Correlation-ID', correlation_id)
            self.end_headers()
            self.wfile.write(body)
            logger.info(
                "Showcase served",
                user_id=mask_user_id(user_id),
                property_count=document.property_count,
            )
