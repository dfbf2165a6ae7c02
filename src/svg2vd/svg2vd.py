"""A library for converting simple SVG files to Android VectorDrawables.

This module provides a converter from a subset of SVG (`path`, `rect` and
`circle` elements carrying `fill` and `stroke` attributes) to Android
VectorDrawable XML. Transforms, groups, gradients and stylesheets are not
interpreted.

The intended usage is either as a module within other projects or from the
command-line, reading SVG on stdin and writing the drawable to stdout.

Example:
    To convert an SVG file to VectorDrawable XML::

        from svg2vd.svg2vd import svg2vd
        xml = svg2vd("foo.svg")

    To convert from the command-line::

        $ svg2vd < foo.svg > foo.xml
"""

import logging
import os
import pathlib
import re
from collections import namedtuple
from typing import Any, List, Optional, Union

import cssselect2
from lxml import etree

from .utils import (
    circle_path_data,
    format_number,
    normalise_color,
    parse_number,
    rect_path_data,
)

logger = logging.getLogger(__name__)

ANDROID_NS = "http://schemas.android.com/apk/res/android"
XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>'

Box = namedtuple("Box", ["x", "y", "width", "height"])

# A converted shape. Color and stroke width fields are None when omitted.
PathEntry = namedtuple(
    "PathEntry", ["path_data", "fill_color", "stroke_color", "stroke_width"]
)

split_view_box = re.compile(r"[^ \t\r\n\f,]+").findall


class Svg2VdError(Exception):
    """Base class for conversion errors."""


class ViewBoxError(Svg2VdError, ValueError):
    """Raised when the viewport of a document cannot be determined."""


class AttributeConverter:
    """Convert SVG attribute values to VectorDrawable values."""

    def convertLength(self, svgAttr: str, default: float = 0.0) -> float:
        """Convert a length in implicit user units to a float.

        Units are not interpreted, "10px" reads as 10. Empty or non-numeric
        values give `default`.
        """
        return parse_number(svgAttr, default=default)

    def convertColor(self, svgAttr: str) -> str:
        """Convert a CSS color token to an opaque `#AARRGGBB` string."""
        return normalise_color(svgAttr)


class NodeTracker(cssselect2.ElementWrapper):
    """A wrapper for lxml nodes to track attribute usage.

    This class wraps an lxml node and keeps a record of which attributes
    have been accessed, which is useful for spotting attributes the
    converter silently drops.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.usedAttrs: List[str] = []

    def __repr__(self) -> str:
        return f"<NodeTracker for node {self.etree_element}>"

    def getAttribute(self, name: str) -> str:
        """Get an attribute value and record that it has been used."""
        if name not in self.usedAttrs:
            self.usedAttrs.append(name)
        return self.etree_element.attrib.get(name, "")

    def __getattr__(self, name: str) -> Any:
        """Forward attribute access to the wrapped lxml node."""
        return getattr(self.etree_element, name)


class SvgShapeConverter:
    """Convert SVG shapes to VectorDrawable path data.

    Each supported shape `X` has a `convertX` method returning the path data
    string, or None when the shape is degenerate and should be dropped.
    """

    def __init__(self, attrConverter: Optional[AttributeConverter] = None) -> None:
        self.attrConverter = attrConverter or AttributeConverter()

    @classmethod
    def get_handled_shapes(cls) -> List[str]:
        """Return a list of SVG shape names that this converter can handle."""
        return [
            key[7:].lower()
            for key in dir(cls)
            if key.startswith("convert")
            and key[7:].isalpha()
            and key != "convertShape"
        ]

    def convertShape(self, name: str, node: Any) -> Optional[str]:
        """Convert an SVG shape by calling the appropriate `convertX` method.

        Args:
            name: The name of the SVG shape (e.g., "rect", "circle").
            node: The NodeTracker for the shape.

        Returns:
            The path data, or None if the shape is not handled or produces
            no geometry.
        """
        if name not in self.get_handled_shapes():
            return None
        method_name = f"convert{name.capitalize()}"
        return getattr(self, method_name)(node)

    def convert_length_attrs(self, node: Any, *attrs: str) -> List[float]:
        """Convert a list of length attributes from a node, defaulting to 0."""
        getAttr = (
            node.getAttribute
            if hasattr(node, "getAttribute")
            else lambda attr: node.attrib.get(attr, "")
        )
        convLength = self.attrConverter.convertLength
        return [convLength(getAttr(attr)) for attr in attrs]

    def convertPath(self, node: Any) -> str:
        """Pass the `d` attribute of an SVG <path> through unchanged."""
        return node.getAttribute("d")

    def convertRect(self, node: Any) -> Optional[str]:
        """Convert an SVG <rect> element to path data."""
        x, y, width, height = self.convert_length_attrs(
            node, "x", "y", "width", "height"
        )
        if width <= 0 or height <= 0:
            return None
        return rect_path_data(x, y, width, height)

    def convertCircle(self, node: Any) -> Optional[str]:
        """Convert an SVG <circle> element to path data."""
        cx, cy, r = self.convert_length_attrs(node, "cx", "cy", "r")
        if r <= 0:
            return None
        return circle_path_data(cx, cy, r)


# ## the main meat ###


class SvgRenderer:
    """A class to render an SVG document into VectorDrawable XML.

    Shapes are collected in document order from the whole tree, so shapes
    nested in groups or definitions are converted too (without their
    containers' transforms).
    """

    def __init__(self) -> None:
        self.attrConverter = AttributeConverter()
        self.shape_converter = SvgShapeConverter(self.attrConverter)
        self.handled_shapes = self.shape_converter.get_handled_shapes()

    def render(self, svg_node: Any) -> str:
        """Render an SVG root node into VectorDrawable XML.

        Args:
            svg_node: The root lxml node of the SVG document.

        Returns:
            The VectorDrawable document, without a trailing newline.

        Raises:
            ViewBoxError: If the document has no usable viewport.
        """
        node = NodeTracker.from_xml_root(svg_node)
        view_box = self.get_box(node)
        width = format_number(view_box.width)
        height = format_number(view_box.height)

        lines = [
            XML_HEADER,
            f'<vector xmlns:android="{ANDROID_NS}"',
            f'    android:width="{width}dp"',
            f'    android:height="{height}dp"',
            f'    android:viewportWidth="{width}"',
            f'    android:viewportHeight="{height}">',
        ]
        for shape_node in node.query_all(", ".join(self.handled_shapes)):
            entry = self.renderNode(shape_node)
            if entry is not None:
                lines.extend(self.renderPathEntry(entry))
        lines.append("</vector>")
        return "\n".join(lines)

    def get_box(self, svg_node: NodeTracker) -> Box:
        """Get the viewBox of the root node.

        Without a viewBox, positive `width` and `height` attributes on the
        root give a box at the origin.

        Raises:
            ViewBoxError: If neither source describes a viewport.
        """
        view_box = svg_node.getAttribute("viewBox")
        if view_box:
            values = split_view_box(view_box)
            if len(values) != 4:
                raise ViewBoxError(f"Expected 4 numbers in viewBox, got {view_box!r}")
            try:
                return Box(*(float(v) for v in values))
            except ValueError:
                raise ViewBoxError(f"Invalid viewBox {view_box!r}") from None

        width, height = self.shape_converter.convert_length_attrs(
            svg_node, "width", "height"
        )
        if width > 0 and height > 0:
            logger.debug("No viewBox, using width/height %s x %s", width, height)
            return Box(0, 0, width, height)
        raise ViewBoxError("The root element has no viewBox attribute")

    def renderNode(self, node: NodeTracker) -> Optional[PathEntry]:
        """Convert a single shape node.

        Returns:
            A PathEntry, or None when the node yields no path.
        """
        name = node_name(node)
        path_data = self.shape_converter.convertShape(name, node)
        if not path_data:
            logger.debug("Ignoring node: %s", name)
            return None

        getAttr = node.getAttribute
        fill = getAttr("fill") or "#000000"
        stroke = getAttr("stroke") or "none"
        stroke_width = getAttr("stroke-width") or "0"

        fill_color = None
        if fill != "none":
            fill_color = self.attrConverter.convertColor(fill)
        stroke_color = None
        if stroke != "none":
            stroke_color = self.attrConverter.convertColor(stroke)
        else:
            stroke_width = None

        self.print_unused_attributes(node)
        return PathEntry(path_data, fill_color, stroke_color, stroke_width)

    def renderPathEntry(self, entry: PathEntry) -> List[str]:
        """Return the lines of a VectorDrawable <path> element."""
        lines = [
            "    <path",
            f'        android:pathData="{entry.path_data}"',
        ]
        if entry.fill_color is not None:
            lines.append(f'        android:fillColor="{entry.fill_color}"')
        if entry.stroke_color is not None:
            lines.append(f'        android:strokeColor="{entry.stroke_color}"')
            lines.append(f'        android:strokeWidth="{entry.stroke_width}"')
        lines.append("    />")
        return lines

    def print_unused_attributes(self, node: NodeTracker) -> None:
        """Log the attributes of a node that the conversion did not read.

        This is a debugging helper to identify unsupported SVG attributes.
        """
        if not logger.isEnabledFor(logging.DEBUG):
            return
        unused_attrs = [attr for attr in node.attrib if attr not in node.usedAttrs]
        if unused_attrs:
            logger.debug("Unused attrs: %s %s", node_name(node), unused_attrs)


def svg2vd(
    path: Union[str, os.PathLike[str], Any], resolve_entities: bool = False
) -> Optional[str]:
    """Convert an SVG file to VectorDrawable XML.

    Args:
        path: A file path, file-like object, or pathlib.Path to the SVG file.
        resolve_entities: Whether to resolve XML entities (default False).

    Returns:
        The VectorDrawable document, or None if the file cannot be parsed.

    Raises:
        ViewBoxError: If the document has no usable viewport.
    """
    if isinstance(path, pathlib.Path):
        path = str(path)

    svg_root = load_svg_file(path, resolve_entities=resolve_entities)
    if svg_root is None:
        return None

    return SvgRenderer().render(svg_root)


def svgstring2vd(text: str, resolve_entities: bool = False) -> Optional[str]:
    """Convert SVG source text to VectorDrawable XML.

    See `svg2vd` for the return value and errors.
    """
    svg_root = load_svg_string(text, resolve_entities=resolve_entities)
    if svg_root is None:
        return None
    return SvgRenderer().render(svg_root)


def _svg_parser(resolve_entities: bool) -> etree.XMLParser:
    return etree.XMLParser(
        remove_comments=True, recover=True, resolve_entities=resolve_entities
    )


def load_svg_file(
    path: Union[str, os.PathLike[str], Any], resolve_entities: bool = False
) -> Optional[Any]:
    """Load an SVG file and return the root lxml node.

    Args:
        path: A file path or file-like object for the SVG file.
        resolve_entities: Whether to resolve XML entities.

    Returns:
        The root lxml node of the SVG document, or None on failure.
    """
    parser = _svg_parser(resolve_entities)
    try:
        doc = etree.parse(path, parser=parser)
        svg_root = doc.getroot()
    except Exception as exc:
        logger.error("Failed to load input file! (%s)", exc)
        return None
    if svg_root is None:
        logger.error("Failed to load input file! (no root element)")
    return svg_root


def load_svg_string(text: str, resolve_entities: bool = False) -> Optional[Any]:
    """Parse SVG source text and return the root lxml node, or None on failure."""
    parser = _svg_parser(resolve_entities)
    try:
        # lxml refuses str input that carries an encoding declaration
        svg_root = etree.fromstring(text.encode("utf-8"), parser=parser)
    except Exception as exc:
        logger.error("Failed to load input file! (%s)", exc)
        return None
    if svg_root is None:
        logger.error("Failed to load input file! (no root element)")
    return svg_root


def node_name(node: Any) -> Optional[str]:
    """Return the name of an lxml node without the namespace prefix."""
    try:
        return node.tag.split("}")[-1]
    except AttributeError:
        return None
