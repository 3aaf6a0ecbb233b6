"""Standalone showcase page generation."""

import os
import webbrowser
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional
from pydantic import BaseModel, Field

from src.models.profile import Profile
from src.models.property import Property
from src.showcase.catalog import organize_catalog
from src.showcase.detail_view import build_detail_panel
from src.showcase.gallery import Carousel
from src.showcase.loan_calculator import AFFORDABILITY_RATIO, DEFAULT_DOWN_PAYMENT_RATIO
from src.showcase.projector import project
from src.showcase.templating import render
from src.utils.config import ShowcaseConfig
from src.utils.logging import get_structured_logger, timed

logger = get_structured_logger(__name__)

HERO_IMAGE_URL = "https://images.unsplash.com/photo-1600607687939-ce8a6c25118c?auto=format&fit=crop&w=1920&q=80"


class ShowcaseDocument(BaseModel):
    """A generated page and the counts it was built from."""
    html: str
    agent_name: str
    property_count: int = Field(..., description="Properties in the snapshot")
    listed_count: int = Field(..., description="Properties shown in the catalog")
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def write(self, directory: Optional[str] = None, filename: Optional[str] = None) -> str:
        """Write the page to disk and return its path."""
        directory = directory or ShowcaseConfig.OUTPUT_DIR
        os.makedirs(directory, exist_ok=True)
        filename = filename or f"showcase-{self.generated_at.strftime('%Y%m%d-%H%M%S')}.html"
        path = os.path.join(directory, filename)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.html)
        logger.info("Showcase written", path=path, size_bytes=len(self.html.encode("utf-8")))
        return path

    def open(self, directory: Optional[str] = None) -> str:
        """Write the page and open it in a new browser tab."""
        path = self.write(directory)
        webbrowser.open_new_tab(Path(path).resolve().as_uri())
        return path


@timed("showcase.generate")
def generate_showcase(
    profile: Optional[Profile],
    properties: Iterable[Property],
    default_city: Optional[str] = None,
) -> ShowcaseDocument:
    """
    Render the self-contained showcase page for one agent.

    Works on a deep copy of its inputs, so later edits to the records do not
    reach an already generated document.
    """
    profile_snapshot = profile.model_copy(deep=True) if profile else None
    snapshot = [p.model_copy(deep=True) for p in properties]

    display_profile, display_properties = project(profile_snapshot, snapshot, default_city)
    catalog = organize_catalog(display_properties)
    # sold listings have no card, so they get no detail panel either
    panels = {
        p.id: build_detail_panel(p, display_profile)
        for section in catalog.sections
        for p in section.properties
    }

    home_title = f"{ShowcaseConfig.BRAND_NAME} | {display_profile.name}"
    payload = {
        "profile": display_profile.to_view(),
        "panels": [panel.to_view() for panel in panels.values()],
        "config": {
            "brandName": ShowcaseConfig.BRAND_NAME,
            "homeTitle": home_title,
            "messagingBaseUrl": ShowcaseConfig.MESSAGING_BASE_URL,
            "affordabilityRatio": AFFORDABILITY_RATIO,
            "downPaymentRatio": DEFAULT_DOWN_PAYMENT_RATIO,
            "viewer": {
                "initialDelayMs": int(ShowcaseConfig.VIEWER_INITIAL_DELAY_SECONDS * 1000),
                "intervalMs": int(ShowcaseConfig.VIEWER_INTERVAL_SECONDS * 1000),
                "displayMs": int(ShowcaseConfig.VIEWER_DISPLAY_SECONDS * 1000),
            },
        },
    }

    html = render(
        "showcase.html.j2",
        page_title=home_title,
        brand_name=ShowcaseConfig.BRAND_NAME,
        hero_image_url=HERO_IMAGE_URL,
        profile=display_profile,
        catalog=catalog,
        panels=panels,
        make_carousel=Carousel,
        term_options=ShowcaseConfig.TERM_OPTIONS_YEARS,
        default_rate=ShowcaseConfig.DEFAULT_RATE_PERCENT,
        payload=payload,
    )

    listed = sum(section.count for section in catalog.sections)
    logger.info(
        "Showcase generated",
        properties_total=len(display_properties),
        properties_listed=listed,
        neighborhoods=len(catalog.sections),
    )
    return ShowcaseDocument(
        html=html,
        agent_name=display_profile.name,
        property_count=len(display_properties),
        listed_count=listed,
    )
