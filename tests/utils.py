from textwrap import dedent
from typing import Any, Optional

from lxml.etree import XML

from svg2vd.svg2vd import ANDROID_NS, NodeTracker, svgstring2vd


def vd_from_svg(content: str) -> Optional[str]:
    """Convert a SVG string to VectorDrawable XML."""
    return svgstring2vd(dedent(content).strip())


def minimal_svg_node(content: str) -> NodeTracker:
    """Convert a minimal SVG snippet to a NodeTracker."""
    return NodeTracker(XML(content), None, 0, None, False)


def android_attrs(element: Any) -> dict:
    """Return the android:* attributes of a parsed drawable element."""
    prefix = f"{{{ANDROID_NS}}}"
    return {
        key[len(prefix) :]: value
        for key, value in element.attrib.items()
        if key.startswith(prefix)
    }
