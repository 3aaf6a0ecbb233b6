"""Showcase configuration with environment variable support."""

import os
import tempfile


class ShowcaseConfig:
    """Deployment-specific defaults for the showcase generator."""

    BRAND_NAME = os.environ.get("SHOWCASE_BRAND_NAME", "Luxe Estate")
    DEFAULT_CITY = os.environ.get("SHOWCASE_DEFAULT_CITY", "Aracaju, SE")
    FALLBACK_WHATSAPP = os.environ.get("SHOWCASE_FALLBACK_WHATSAPP", "5579999999999")

    VIEWERS_MIN = int(os.environ.get("SHOWCASE_VIEWERS_MIN", "113"))
    VIEWERS_MAX = int(os.environ.get("SHOWCASE_VIEWERS_MAX", "284"))
    VIEWER_INITIAL_DELAY_SECONDS = float(os.environ.get("SHOWCASE_VIEWER_INITIAL_DELAY_SECONDS", "1.5"))
    VIEWER_INTERVAL_SECONDS = float(os.environ.get("SHOWCASE_VIEWER_INTERVAL_SECONDS", "58"))
    VIEWER_DISPLAY_SECONDS = float(os.environ.get("SHOWCASE_VIEWER_DISPLAY_SECONDS", "5"))

    MESSAGING_BASE_URL = os.environ.get("SHOWCASE_MESSAGING_BASE_URL", "https://wa.me").rstrip("/")
    MAP_BASE_URL = os.environ.get("SHOWCASE_MAP_BASE_URL", "https://maps.google.com/maps")

    DEFAULT_RATE_PERCENT = float(os.environ.get("SHOWCASE_DEFAULT_RATE_PERCENT", "10.5"))
    TERM_OPTIONS_YEARS = (35, 30)

    OUTPUT_DIR = os.environ.get("SHOWCASE_OUTPUT_DIR", tempfile.gettempdir())
