"""Detail view: Home <-> PropertyDetail transitions over an explicit view state."""

from enum import Enum
from typing import Optional, Sequence

from src.models.property import MediaItem, PropertyStatus
from src.showcase.gallery import Carousel, render_gallery
from src.showcase.links import map_embed_url, whatsapp_link
from src.showcase.loan_calculator import LoanCalculatorPanel
from src.showcase.projector import DisplayModel, DisplayProfile, DisplayProperty, ViewerBounds
from src.showcase.viewer_simulator import ViewerCountSimulator, ViewerSession
from src.utils.config import ShowcaseConfig
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class StatusTone(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class ViewMode(str, Enum):
    HOME = "home"
    PROPERTY_DETAIL = "property_detail"


def status_tone(status: Optional[str]) -> StatusTone:
    label = (status or "").strip().casefold()
    if label == PropertyStatus.LAST_UNITS.value.casefold():
        return StatusTone.WARNING
    if label == PropertyStatus.SOLD.value.casefold():
        return StatusTone.DANGER
    return StatusTone.SUCCESS


class DetailPanel(DisplayModel):
    """Every text and link field of the detail view for one property."""
    property_id: str
    title: str
    page_title: str
    neighborhood: str
    location: str
    price_label: str
    numeric_price: float
    description: str
    bedrooms: int
    suites: int
    bathrooms: int
    parking_spaces: int
    area_label: str
    features: list[str]
    media: list[MediaItem]
    status_label: str
    status_tone: StatusTone
    map_embed_url: str
    contact_url: str
    financing_visible: bool
    viewer_bounds: ViewerBounds
    og_title: str
    og_description: str
    og_image: str


def build_detail_panel(prop: DisplayProperty, profile: DisplayProfile) -> DetailPanel:
    return DetailPanel(
        property_id=prop.id,
        title=prop.display_title,
        page_title=f"{ShowcaseConfig.BRAND_NAME} | {prop.display_title}",
        neighborhood=prop.neighborhood_label,
        location=prop.city_label,
        price_label=prop.price_label,
        numeric_price=prop.numeric_price,
        description=prop.description,
        bedrooms=prop.bedrooms,
        suites=prop.suites,
        bathrooms=prop.bathrooms,
        parking_spaces=prop.parking_spaces,
        area_label=prop.area_label,
        features=prop.features,
        media=prop.media,
        status_label=prop.status or PropertyStatus.AVAILABLE.value,
        status_tone=status_tone(prop.status),
        map_embed_url=map_embed_url(prop.lat, prop.lng, prop.neighborhood_label, prop.city_label),
        contact_url=whatsapp_link(profile.whatsapp_number, prop.effective_contact_message),
        financing_visible=prop.financing_simulator_enabled,
        viewer_bounds=prop.viewer_bounds,
        og_title=f"{prop.display_title} - {prop.neighborhood_label}",
        og_description=f"{prop.bedrooms} Bedrooms • {prop.area_label} • {prop.price_label}",
        og_image=prop.share_image_url,
    )


class ViewState:
    """What is on screen. Owns the gallery position and the viewer timers."""

    def __init__(
        self,
        mode: ViewMode = ViewMode.HOME,
        panel: Optional[DetailPanel] = None,
        gallery: Optional[Carousel] = None,
        viewer_session: Optional[ViewerSession] = None,
    ):
        self.mode = mode
        self.panel = panel
        self.gallery = gallery
        self.viewer_session = viewer_session
        self.notification: Optional[str] = None

    @property
    def catalog_visible(self) -> bool:
        return self.mode is ViewMode.HOME

    @property
    def financing_visible(self) -> bool:
        return bool(self.panel and self.panel.financing_visible)

    @property
    def active_media_html(self) -> str:
        return render_gallery(self.gallery) if self.gallery is not None else ""

    def teardown(self) -> None:
        if self.viewer_session is not None:
            self.viewer_session.stop()
        self.viewer_session = None
        self.gallery = None
        self.panel = None
        self.notification = None
        self.mode = ViewMode.HOME


class DetailViewController:
    """Opens and closes the property detail view.

    ``open_property`` starts viewer timers, so it must run inside an event loop.
    """

    def __init__(
        self,
        profile: DisplayProfile,
        properties: Sequence[DisplayProperty],
        **simulator_options,
    ):
        self.profile = profile
        self.properties = list(properties)
        self.simulator = ViewerCountSimulator(
            on_show=self._show_notification,
            on_hide=self._hide_notification,
            **simulator_options,
        )
        self.state = ViewState()
        self.calculator: Optional[LoanCalculatorPanel] = None

    def _find(self, property_id: str) -> Optional[DisplayProperty]:
        return next((p for p in self.properties if str(p.id) == str(property_id)), None)

    def _show_notification(self, count: int, message: str) -> None:
        self.state.notification = message

    def _hide_notification(self) -> None:
        self.state.notification = None

    def open_property(self, property_id: str) -> ViewState:
        prop = self._find(property_id)
        if prop is None:
            logger.debug("Property not in snapshot, staying put", property_id=property_id)
            return self.state

        self.state.teardown()
        self.calculator = None
        panel = build_detail_panel(prop, self.profile)
        state = ViewState(
            mode=ViewMode.PROPERTY_DETAIL,
            panel=panel,
            gallery=Carousel(prop.media),
        )
        # callbacks write to self.state, so install it before timers exist
        self.state = state
        state.viewer_session = self.simulator.start(prop.viewer_bounds.min, prop.viewer_bounds.max)
        return state

    def close(self) -> ViewState:
        """Back to the catalog; repeated calls are harmless."""
        self.state.teardown()
        self.simulator.stop()
        self.calculator = None
        return self.state

    def next_slide(self) -> Optional[int]:
        return self.state.gallery.next() if self.state.gallery else None

    def previous_slide(self) -> Optional[int]:
        return self.state.gallery.previous() if self.state.gallery else None

    def set_slide(self, index: int) -> Optional[int]:
        return self.state.gallery.jump(index) if self.state.gallery else None

    def open_calculator(self) -> Optional[LoanCalculatorPanel]:
        """Calculator for the open property; None when financing is disabled for it."""
        if not self.state.financing_visible:
            return None
        self.calculator = LoanCalculatorPanel(self.profile.name, self.profile.whatsapp_number)
        self.calculator.open(self.state.panel.numeric_price)
        return self.calculator
