"""Icon rendering for glyph and image icons."""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel

from bizdash.models import Glyph, Icon, IconKind, ImageRef

DEFAULT_SIZE = 20


class RenderedIcon(BaseModel):
    """What the frontend needs to draw an icon."""

    kind: IconKind
    size: int
    glyph: str | None = None
    src: str | None = None
    alt: str = ""


def _render_glyph(icon: Glyph, label: str, size: int) -> RenderedIcon:
    return RenderedIcon(kind=IconKind.GLYPH, size=size, glyph=icon.name, alt=label)


def _render_image(icon: ImageRef, label: str, size: int) -> RenderedIcon:
    return RenderedIcon(kind=IconKind.IMAGE, size=size, src=icon.url, alt=label)


_RENDERERS: dict[str, Callable[..., RenderedIcon]] = {
    IconKind.GLYPH: _render_glyph,
    IconKind.IMAGE: _render_image,
}


def render_icon(icon: Icon, label: str = "", size: int = DEFAULT_SIZE) -> RenderedIcon:
    """Render *icon* through the renderer registered for its kind."""
    return _RENDERERS[icon.kind](icon, label, size)
