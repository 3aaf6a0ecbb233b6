"""Slide carousels for property cards and the detail-view gallery."""

from typing import Optional, Sequence

from src.models.property import MediaItem
from src.showcase.projector import DisplayProperty
from src.showcase.templating import get_environment, render


class Carousel:
    """Circular slide index over a media sequence.

    Cards and the detail gallery share this arithmetic; the page script
    mirrors it in ``slideCardMedia`` and ``nextDetailSlide``/``prevDetailSlide``.
    """

    def __init__(self, media: Sequence[MediaItem], index: int = 0):
        self.media = list(media)
        self.index = 0
        if self.media:
            self.jump(index)

    @property
    def total(self) -> int:
        return len(self.media)

    @property
    def has_controls(self) -> bool:
        return self.total > 1

    @property
    def current(self) -> Optional[MediaItem]:
        return self.media[self.index] if self.media else None

    @property
    def offset_percent(self) -> int:
        """Horizontal translate of the slide strip, ``-index * 100``."""
        return -self.index * 100

    @property
    def counter(self) -> str:
        return f"{self.index + 1} / {self.total}" if self.media else "0 / 0"

    def step(self, direction: int) -> int:
        if not self.media:
            return self.index
        self.index = (self.index + direction) % self.total
        return self.index

    def next(self) -> int:
        return self.step(1)

    def previous(self) -> int:
        return self.step(-1)

    def jump(self, index: int) -> int:
        """Absolute move, as when a thumbnail is clicked."""
        if not 0 <= index < self.total:
            raise IndexError(f"slide {index} out of range for {self.total} media items")
        self.index = index
        return self.index


def render_card(prop: DisplayProperty, contact_url: str) -> str:
    """Catalog card with its own cover carousel (arrows only for 2+ media)."""
    card = get_environment().get_template("card.html.j2").module.card
    return str(card(prop, Carousel(prop.media), contact_url))


def render_gallery(carousel: Carousel) -> str:
    """Detail-view main viewer plus thumbnail strip for the carousel's position."""
    return render("gallery.html.j2", carousel=carousel)
