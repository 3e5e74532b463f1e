import xml.etree.ElementTree as ET
from typing import Dict, Optional

from phylonetview.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, STROKE_WIDTH
from phylonetview.layout import Point


###############################################################################
# SVG Element Creation Utilities
###############################################################################
def get_svg_root(width: float, height: float) -> ET.Element:
    """
    Creates an SVG root element with a 0,0 origin and given width/height.
    """
    data = {
        "viewBox": f"0 0 {width} {height}",
        "version": "1.1",
        "xmlns": "http://www.w3.org/2000/svg",
        "xml:space": "preserve",
        "width": str(width),
        "height": str(height),
    }
    return ET.Element("svg", data)


def add_svg_element(parent: ET.Element, tag: str, attrs: Dict[str, str]) -> ET.Element:
    """Add a child element to the parent and return it."""
    return ET.SubElement(parent, tag, attrs)


###############################################################################
# Drawing sink
###############################################################################
class SvgSink:
    """DrawingSink that collects primitives into an SVG document."""

    def __init__(
        self,
        font_family: str = DEFAULT_FONT_FAMILY,
        font_size: int = DEFAULT_FONT_SIZE,
    ):
        self.font_family = font_family
        self.font_size = font_size
        self.root: Optional[ET.Element] = None

    def _require_root(self) -> ET.Element:
        if self.root is None:
            raise RuntimeError("clear() must be called before drawing")
        return self.root

    def clear(self, width: float, height: float) -> None:
        self.root = get_svg_root(width, height)

    def draw_line(self, start: Point, end: Point, color: str) -> None:
        add_svg_element(
            self._require_root(),
            "line",
            {
                "class": "links",
                "x1": str(start[0]),
                "y1": str(start[1]),
                "x2": str(end[0]),
                "y2": str(end[1]),
                "stroke": color,
                "stroke-width": str(STROKE_WIDTH),
            },
        )

    def draw_circle(self, center: Point, radius: float, fill_color: str) -> None:
        add_svg_element(
            self._require_root(),
            "circle",
            {
                "class": "nodes",
                "cx": str(center[0]),
                "cy": str(center[1]),
                "r": str(radius),
                "fill": fill_color,
            },
        )

    def draw_text(self, text: str, position: Point, color: str) -> None:
        label = add_svg_element(
            self._require_root(),
            "text",
            {
                "x": str(position[0]),
                "y": str(position[1]),
                "text-anchor": "middle",
                "font-size": str(self.font_size),
                "font-family": self.font_family,
                "fill": color,
            },
        )
        label.text = text

    def to_string(self) -> str:
        return ET.tostring(self._require_root(), encoding="unicode")
