"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime

import pytest


SCALE_ABC = "X:1\nT:Scale\nM:4/4\nL:1/4\nK:C\nC D E F | G A B c |"

# Small score-like SVG: staff lines, a filled note head, a text label
SCORE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="600" height="400" viewBox="0 0 600 400">
  <path d="M10 50 L590 50" stroke="#000000" stroke-width="0.75" fill="none"/>
  <path d="M10 60 L590 60" stroke="#000000" stroke-width="0.75" fill="none"/>
  <text x="20" y="30" font-size="18" font-family="Times">Scale</text>
  <path d="M100 55 C100 50 110 50 110 55 C110 60 100 60 100 55 Z" fill="#000000" stroke="none"/>
</svg>'''

# Paths and texts interleaved inside nested groups
NESTED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100">
  <g>
    <text x="1" y="2">first</text>
    <g><path d="M0 0 L10 10"/></g>
  </g>
  <text x="3" y="4"><tspan>sec</tspan><tspan>ond</tspan></text>
  <path d="M5 5 L6 6"/>
</svg>'''

NO_DIMENSIONS_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <path d="M0 0 L10 10"/>
</svg>'''

ZERO_SIZE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="0" height="0">
  <path d="M0 0 L10 10"/>
</svg>'''

# Fits the drawable area as is: no scaling
SMALL_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="200" height="100">
  <path d="M0 0 L200 100" stroke="#333333"/>
</svg>'''

INVISIBLE_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100">
  <path d="M0 0 L100 0 L100 100 Z" fill="none" stroke="none"/>
</svg>'''

MALFORMED_PATH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="100" height="100">
  <path d="12 34 L 5 6"/>
</svg>'''

# Laid out the way verovio engraves: glyph outlines in <defs> referenced by
# <use>, the score in an inner "definition-scale" viewport 25x larger than
# the outer pixel size, and systems placed by group transforms.
VEROVIO_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" version="1.1" overflow="visible" width="840px" height="112px">
  <desc>Engraved by Verovio</desc>
  <defs>
    <g id="E050-clef"><path transform="scale(1,-1)" d="M0 -300 C150 -300 200 -100 100 0 C0 100 -100 300 0 600 C80 700 150 650 120 500 L0 -600 C-20 -700 -150 -650 -120 -500 Z"/></g>
    <g id="E0A4-head"><path transform="scale(1,-1)" d="M0 -39 C0 68 73 172 200 172 C266 172 314 133 314 77 C314 -7 208 -94 96 -94 C32 -94 0 -42 0 -39 Z"/></g>
  </defs>
  <style type="text/css">g.page-margin{font-family:Times,serif;}</style>
  <svg class="definition-scale" color="black" viewBox="0 0 21000 2800">
    <g class="page-margin" transform="translate(500, 500)">
      <g class="system">
        <g class="measure">
          <g class="staff">
            <path d="M0 0 L10000 0" stroke="currentColor" stroke-width="13"/>
            <path d="M0 180 L10000 180" stroke="currentColor" stroke-width="13"/>
            <path d="M0 360 L10000 360" stroke="currentColor" stroke-width="13"/>
            <path d="M0 540 L10000 540" stroke="currentColor" stroke-width="13"/>
            <path d="M0 720 L10000 720" stroke="currentColor" stroke-width="13"/>
            <g class="clef"><use xlink:href="#E050-clef" transform="translate(90, 540) scale(0.72, 0.72)"/></g>
            <g class="layer">
              <g class="note"><use xlink:href="#E0A4-head" transform="translate(600, 810) scale(0.72, 0.72)"/>
                <g class="stem"><path d="M828 792 L828 162" stroke="currentColor" stroke-width="18"/></g></g>
              <g class="note"><use xlink:href="#E0A4-head" transform="translate(1500, 720) scale(0.72, 0.72)"/>
                <g class="stem"><path d="M1728 702 L1728 72" stroke="currentColor" stroke-width="18"/></g></g>
            </g>
          </g>
          <g class="barLine"><path d="M10000 0 L10000 720" stroke="currentColor" stroke-width="27"/></g>
        </g>
      </g>
      <g class="pgHead"><text x="10000" y="-100" font-size="0px"><tspan font-size="405px" text-anchor="middle">Scale</tspan></text></g>
    </g>
  </svg>
</svg>'''

# Older engraver output: <symbol> glyphs with their own viewBox, sized by <use>
SYMBOL_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="100">
  <defs>
    <symbol id="dot" viewBox="0 0 1000 1000"><path d="M0 0 L1000 1000"/></symbol>
  </defs>
  <use xlink:href="#dot" x="10" y="20" width="10" height="10"/>
</svg>'''

FIXED_NOW = datetime(2024, 3, 1, 14, 30, 0)


class FakeRenderer:
    """Stands in for verovio: returns a fixed SVG and records its calls."""

    def __init__(self, svg: str = SCORE_SVG) -> None:
        self.svg = svg
        self.calls: list[str] = []

    def render(self, notation: str) -> str:
        self.calls.append(notation)
        return self.svg


@pytest.fixture
def score_svg() -> str:
    return SCORE_SVG


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW
