"""SVG parser — facade over lxml + svgpathtools.

Converts a raw SVG string → VectorDocument (canvas record + paths and texts
in document order).

Primitives are flattened into the coordinate space of the root canvas:
element transforms, nested <svg> viewBox mappings and <use> references are
resolved during the walk, so engraver output (glyphs in <defs>, staves in
an inner scaled viewport) lands where a browser would draw it.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace

import numpy as np
from lxml import etree
from svgpathtools import parse_path
from svgpathtools.parser import parse_transform
from svgpathtools.path import transform as transform_path

from partitura.errors import ParseError
from partitura.models.vector_document import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    CanvasMetadata,
    PathPrimitive,
    TextPrimitive,
    VectorDocument,
)

logger = logging.getLogger(__name__)

# Leading decimal number; unit suffixes are ignored ("2100px" -> 2100)
_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_VIEWBOX_SPLIT_RE = re.compile(r"[\s,]+")
_STYLE_DECL_RE = re.compile(r"\s*([\w-]+)\s*:\s*([^;]+)")

_XLINK_HREF = "{http://www.w3.org/1999/xlink}href"

# Containers whose children are only drawn when referenced
_NOT_RENDERED = frozenset({
    "defs", "symbol", "clipPath", "mask", "marker", "pattern",
    "linearGradient", "radialGradient", "style", "script",
    "title", "desc", "metadata",
})
# Presentation attributes inherited by descendants and <use> targets
_INHERITED = ("fill", "stroke", "stroke-width", "font-size", "font-family")
_MAX_USE_DEPTH = 16


@dataclass(frozen=True, eq=False)
class _WalkState:
    matrix: np.ndarray
    viewport: tuple[float, float]
    style: dict[str, str]
    use_chain: tuple[str, ...] = ()


def parse_svg(svg_text: str) -> VectorDocument:
    """Parse raw SVG string into a VectorDocument."""
    root = _find_svg_root(svg_text)
    if root is None:
        raise ParseError("Invalid SVG content")

    canvas = _extract_canvas(root)
    ids = {
        el.get("id"): el
        for el in root.getroottree().iter()
        if isinstance(el.tag, str) and el.get("id")
    }
    state = _WalkState(
        matrix=_viewbox_matrix(
            _parse_viewbox(root.get("viewBox")),
            canvas.width,
            canvas.height,
            root.get("preserveAspectRatio"),
        ),
        viewport=(canvas.width, canvas.height),
        style=_presentation(root, {}),
    )

    primitives: list[PathPrimitive | TextPrimitive] = []
    for child in root:
        _walk(child, state, ids, primitives)

    doc = VectorDocument(canvas=canvas, primitives=tuple(primitives))
    logger.info(
        "Parsed SVG: %d paths, %d texts, canvas %.0f×%.0f",
        doc.path_count,
        doc.text_count,
        canvas.width,
        canvas.height,
    )
    return doc


def parse_number(value: str | None) -> float | None:
    """Lenient numeric parse of an attribute value; None when not a finite number."""
    if value is None:
        return None
    m = _NUMBER_RE.match(value)
    if not m:
        return None
    number = float(m.group(1))
    if not math.isfinite(number):
        return None
    return number


def _find_svg_root(svg_text: str) -> etree._Element | None:
    if not svg_text or not svg_text.strip():
        return None
    # lxml parsers must not be shared across threads
    parser = etree.XMLParser(recover=True, resolve_entities=False, no_network=True, remove_comments=True)
    try:
        root = etree.fromstring(svg_text.encode("utf-8"), parser=parser)
    except etree.XMLSyntaxError as e:
        logger.warning("SVG is not well-formed: %s", e)
        return None
    if root is None:
        return None
    if _local_name(root) == "svg":
        return root
    for el in root.iter():
        if _local_name(el) == "svg":
            return el
    return None


def _local_name(el: etree._Element) -> str:
    # Processing instructions and entities carry a non-string tag
    if not isinstance(el.tag, str):
        return ""
    return etree.QName(el).localname


def _extract_canvas(root: etree._Element) -> CanvasMetadata:
    view_box = root.get("viewBox")
    vb = _parse_viewbox(view_box)
    vb_width = vb[2] if vb else None
    vb_height = vb[3] if vb else None

    width = parse_number(root.get("width"))
    height = parse_number(root.get("height"))
    if width is None:
        width = vb_width if vb_width is not None else DEFAULT_CANVAS_WIDTH
    if height is None:
        height = vb_height if vb_height is not None else DEFAULT_CANVAS_HEIGHT

    return CanvasMetadata(view_box=view_box, width=width, height=height)


# --- Tree walk ---


def _walk(el: etree._Element, state: _WalkState, ids: dict, out: list) -> None:
    tag = _local_name(el)
    if not tag or tag in _NOT_RENDERED:
        return

    state = _descend(el, state)
    if tag == "path":
        path = _extract_path(el, state)
        if path is not None:
            out.append(path)
    elif tag == "text":
        text = _extract_text(el, state)
        if text is not None:
            out.append(text)
    elif tag == "use":
        _expand_use(el, state, ids, out)
    elif tag == "svg":
        state = _enter_viewport(el, state, el)
        for child in el:
            _walk(child, state, ids, out)
    else:
        for child in el:
            _walk(child, state, ids, out)


def _descend(el: etree._Element, state: _WalkState) -> _WalkState:
    """Apply the element's own transform and presentation attributes."""
    matrix = state.matrix
    transform = el.get("transform")
    if transform and _local_name(el) != "svg":
        try:
            matrix = matrix @ parse_transform(transform)
        except (ValueError, TypeError, IndexError) as e:
            logger.warning("Ignoring unreadable transform %r: %s", transform, e)
    return replace(state, matrix=matrix, style=_presentation(el, state.style))


def _enter_viewport(el: etree._Element, state: _WalkState, box_source: etree._Element) -> _WalkState:
    """Map a nested viewport (<svg> or referenced <symbol>) onto its parent."""
    x = parse_number(box_source.get("x")) or 0.0
    y = parse_number(box_source.get("y")) or 0.0
    width = _length(box_source.get("width"), state.viewport[0])
    height = _length(box_source.get("height"), state.viewport[1])
    vb = _parse_viewbox(el.get("viewBox"))

    matrix = state.matrix @ _translate(x, y) @ _viewbox_matrix(
        vb, width, height, el.get("preserveAspectRatio")
    )
    viewport = (vb[2], vb[3]) if vb else (width, height)
    return replace(state, matrix=matrix, viewport=viewport)


def _expand_use(el: etree._Element, state: _WalkState, ids: dict, out: list) -> None:
    href = el.get(_XLINK_HREF) or el.get("href") or ""
    if not href.startswith("#"):
        return
    ref_id = href[1:]
    target = ids.get(ref_id)
    if target is None:
        logger.debug("Dangling <use> reference %r", href)
        return
    if ref_id in state.use_chain or len(state.use_chain) >= _MAX_USE_DEPTH:
        logger.warning("Skipping recursive <use> reference %r", href)
        return

    state = replace(state, use_chain=state.use_chain + (ref_id,))
    if _local_name(target) in ("symbol", "svg"):
        # x/y/width/height of the <use> establish the referenced viewport
        state = _enter_viewport(target, replace(state, style=_presentation(target, state.style)), el)
        for child in target:
            _walk(child, state, ids, out)
        return

    x = parse_number(el.get("x")) or 0.0
    y = parse_number(el.get("y")) or 0.0
    state = replace(state, matrix=state.matrix @ _translate(x, y))
    _walk(target, state, ids, out)


# --- Transforms ---


def _translate(x: float, y: float) -> np.ndarray:
    return parse_transform(f"translate({x:.9f} {y:.9f})")


def _viewbox_matrix(
    vb: tuple[float, float, float, float] | None,
    width: float,
    height: float,
    aspect: str | None,
) -> np.ndarray:
    """Matrix taking viewBox user units into a width×height viewport."""
    if vb is None:
        return np.identity(3)
    min_x, min_y, vb_width, vb_height = vb
    if vb_width <= 0 or vb_height <= 0 or width <= 0 or height <= 0:
        return _translate(-min_x, -min_y)

    sx = width / vb_width
    sy = height / vb_height
    tx = ty = 0.0
    if (aspect or "").strip() != "none":
        # xMidYMid meet
        sx = sy = min(sx, sy)
        tx = (width - vb_width * sx) / 2
        ty = (height - vb_height * sy) / 2
    return parse_transform(
        f"translate({tx:.9f} {ty:.9f}) scale({sx:.12f} {sy:.12f}) translate({-min_x:.9f} {-min_y:.9f})"
    )


def _linear_scale(matrix: np.ndarray) -> float:
    """Uniform length factor of a transform (sqrt of the area scale)."""
    return math.sqrt(abs(matrix[0, 0] * matrix[1, 1] - matrix[0, 1] * matrix[1, 0]))


def _transform_commands(d: str, matrix: np.ndarray) -> str:
    if np.allclose(matrix, np.identity(3)):
        return d
    try:
        transformed = transform_path(parse_path(d), matrix).d()
    except Exception as e:
        # Left as-is; the page engine reports unreadable path data
        logger.warning("Path data left untransformed: %s", e)
        return d
    return transformed or d


# --- Attribute helpers ---


def _parse_viewbox(view_box: str | None) -> tuple[float, float, float, float] | None:
    if not view_box:
        return None
    parts = _VIEWBOX_SPLIT_RE.split(view_box.strip())
    if len(parts) < 4:
        return None
    values = [parse_number(p) for p in parts[:4]]
    if any(v is None for v in values):
        return None
    return values[0], values[1], values[2], values[3]


def _length(value: str | None, reference: float) -> float:
    if value is None:
        return reference
    number = parse_number(value)
    if number is None:
        return reference
    if value.strip().endswith("%"):
        return reference * number / 100.0
    return number


def _presentation(el: etree._Element, inherited: dict[str, str]) -> dict[str, str]:
    style = dict(inherited)
    for name in _INHERITED:
        value = el.get(name)
        if value is not None:
            style[name] = value
    inline = el.get("style")
    if inline:
        for name, value in _STYLE_DECL_RE.findall(inline):
            if name in _INHERITED:
                style[name] = value.strip()
    return style


def _first_descendant_attr(el: etree._Element, name: str) -> str | None:
    for child in el.iterdescendants():
        if isinstance(child.tag, str) and child.get(name) is not None:
            return child.get(name)
    return None


# --- Primitive extraction ---


def _extract_path(el: etree._Element, state: _WalkState) -> PathPrimitive | None:
    d = el.get("d")
    if not d or not d.strip():
        return None

    stroke_width = parse_number(state.style.get("stroke-width"))
    if stroke_width is None or stroke_width < 0:
        stroke_width = 1.0
    else:
        stroke_width *= _linear_scale(state.matrix)

    return PathPrimitive(
        commands=_transform_commands(d, state.matrix),
        stroke_color=state.style.get("stroke") or "#000000",
        stroke_width=stroke_width,
        fill_color=state.style.get("fill") or "none",
    )


def _extract_text(el: etree._Element, state: _WalkState) -> TextPrimitive | None:
    content = "".join(el.itertext())
    if not content:
        return None

    font_size = parse_number(state.style.get("font-size"))
    if font_size is None or font_size <= 0:
        # Engravers often size the <tspan> and zero the enclosing <text>
        font_size = parse_number(_first_descendant_attr(el, "font-size"))
    scale = _linear_scale(state.matrix)
    if font_size is None or font_size <= 0:
        font_size = 12.0
    elif scale > 0:
        font_size *= scale

    x = parse_number(el.get("x"))
    if x is None:
        x = parse_number(_first_descendant_attr(el, "x"))
    y = parse_number(el.get("y"))
    if y is None:
        y = parse_number(_first_descendant_attr(el, "y"))
    point = state.matrix @ np.array([x or 0.0, y or 0.0, 1.0])

    return TextPrimitive(
        content=content,
        x=float(point[0]),
        y=float(point[1]),
        font_size=font_size,
        font_family=state.style.get("font-family") or "Arial",
    )
