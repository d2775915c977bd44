"""Fixed page layout for the printable score (A4 portrait, points)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageLayout:
    """Page size, margins and block typography."""

    page_width: float = 595.0
    page_height: float = 842.0
    margin: float = 50.0
    # Space held back below the score for the footer
    header_height: float = 100.0

    title_font_size: float = 20.0
    composer_font_size: float = 12.0
    footer_font_size: float = 8.0
    # Footer top edge sits this far below the bottom margin line
    footer_offset: float = 20.0
    block_font: str = "Helvetica"

    # Line height as a multiple of font size
    leading_ratio: float = 1.2

    def line_height(self, font_size: float) -> float:
        return font_size * self.leading_ratio


A4_LAYOUT = PageLayout()
