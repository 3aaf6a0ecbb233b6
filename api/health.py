"""Health check endpoint: GET/POST /api/health."""

from http.server import BaseHTTPRequestHandler
import json
import os

from src.utils.logging_config import LoggingConfig


def health_payload() -> dict:
    """Liveness plus whether record-store credentials are present (never their values)."""
    return {
        "status": "ok",
        "service": LoggingConfig.LOG_SERVICE_NAME,
        "store_configured": bool(
            os.environ.get("SUPABASE_URL") and os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
        ),
    }


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for health checks."""

    def do_GET(self):
        body = json.dumps(health_payload()).encode('utf-8')
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Cache-Control', 'no-store')
        self.end_headers()
        self.wfile.write(body)

    def do_POST(self):
        self.do_GET()
