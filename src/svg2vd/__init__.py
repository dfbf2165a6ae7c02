"""A tool for converting SVG to Android VectorDrawable XML.

This module provides high-level functions for converting SVG documents to
VectorDrawable files. It also serves as the main entry point for the svg2vd
package.

The module includes:
- svg2xml(): Convert SVG files to VectorDrawable files programmatically.
- main(): Command-line interface, reading stdin or a list of files.
- Automatic file path handling and output generation.
"""

import argparse
import logging
import sys
import textwrap
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from os.path import basename, dirname, exists, splitext
from typing import Optional

from svg2vd import svg2vd

try:
    __version__ = version("svg2vd")
except PackageNotFoundError:
    __version__ = "unknown"

logger = logging.getLogger(__name__)


def output_path(path: str, outputPat: Optional[str] = None) -> str:
    """Derive the output file name for an input SVG file.

    Args:
        path: Path to the input SVG file.
        outputPat: Optional output path pattern. Supports placeholders:
            - %(dirname)s: Directory of input file
            - %(basename)s: Full filename with extension
            - %(base)s: Filename without extension
            - %(ext)s: File extension
            - %(now)s: Current datetime object
            - %(format)s: Output format (always "xml")
            Also supports {name} format strings.

    Examples:
        >>> output_path("res/icon.svg")
        'res/icon.xml'
    """
    file_info = {
        "dirname": dirname(path) or ".",
        "basename": basename(path),
        "base": basename(splitext(path)[0]),
        "ext": splitext(path)[1],
        "now": datetime.now(),
        "format": "xml",
    }
    out_pattern = outputPat or "%(dirname)s/%(base)s.%(format)s"
    # allow classic %%(name)s notation
    out_path = out_pattern % file_info
    # allow also newer {name} notation
    return out_path.format(**file_info)


def svg2xml(path: str, outputPat: Optional[str] = None) -> Optional[str]:
    """Convert an SVG file to a VectorDrawable XML file.

    Args:
        path: Path to the input SVG file.
        outputPat: Optional output path pattern, see `output_path`.

    Returns:
        The path of the written file, or None if the input could not be
        parsed.

    Raises:
        ViewBoxError: If the document has no usable viewport.
        OSError: If the output file cannot be written.

    Note:
        The function will overwrite existing files without warning.
    """
    out_path = output_path(path, outputPat)
    try:
        drawable = svg2vd.svg2vd(path)
    except svg2vd.Svg2VdError:
        logger.error("Conversion of %s failed.", path)
        raise

    if drawable is None:
        return None
    write_drawable(drawable, out_path)
    return out_path


def write_drawable(drawable: str, out_path: Optional[str] = None) -> None:
    """Write a drawable with a trailing newline to a file, or to stdout."""
    if out_path is None:
        sys.stdout.write(drawable + "\n")
        sys.stdout.flush()
    else:
        with open(out_path, "w", encoding="utf-8") as fp:
            fp.write(drawable + "\n")


def convert_stdin(out_path: Optional[str] = None) -> bool:
    """Convert an SVG document read from stdin.

    Returns:
        True if a drawable was written.
    """
    text = sys.stdin.buffer.read().decode("utf-8", errors="replace")
    drawable = svg2vd.svgstring2vd(text)
    if drawable is None:
        return False
    write_drawable(drawable, out_path)
    return True


# command-line usage stuff
def main() -> None:
    """Main entry point for the CLI."""
    ext = "xml"
    format_args = dict(
        prog=basename(sys.argv[0]),
        version=__version__,
        ext=ext,
    )
    desc = "{prog} v. {version}\n".format(**format_args)
    desc += "A converter from SVG to Android VectorDrawable {ext}\n".format(
        **format_args
    )
    epilog = textwrap.dedent(
        """\
        examples:
          # convert SVG on stdin to a drawable on stdout
          {prog} < icon.svg > icon.{ext}

          # convert stdin to a file
          {prog} -o res/drawable/icon.{ext} < icon.svg

          # convert path/file.svg to path/file.{ext}
          {prog} path/file.svg

          # convert all SVG files in path/ to drawables with names like:
          # path/ic-home.svg -> res/drawable/ic-home.{ext}
          {prog} -o "res/drawable/%(base)s.{ext}" path/*.svg
        """.format(**format_args)
    )
    p = argparse.ArgumentParser(
        description=desc,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    p.add_argument(
        "-v", "--version", help="Print version number and exit.", action="store_true"
    )

    p.add_argument(
        "--debug", help="Log debugging details to stderr.", action="store_true"
    )

    p.add_argument(
        "-o",
        "--output",
        metavar="PATH_PAT",
        help="Set output path. With input files, the placeholders dirname, "
        "basename, base, ext, now are expanded in both, %%(name)s and {name} "
        "notations.",
    )

    p.add_argument(
        "input",
        metavar="PATH",
        nargs="*",
        help="Input SVG file path. Reads stdin when omitted.",
    )

    args = p.parse_args()

    if args.version:
        print(__version__)
        sys.exit()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    if not args.input:
        try:
            ok = convert_stdin(args.output)
        except svg2vd.ViewBoxError as exc:
            logger.error("%s", exc)
            ok = False
    else:
        ok = True
        for path in args.input:
            if not exists(path):
                logger.error("No such file: %s", path)
                ok = False
                continue
            try:
                if svg2xml(path, outputPat=args.output) is None:
                    ok = False
            except svg2vd.ViewBoxError as exc:
                logger.error("%s: %s", path, exc)
                ok = False

    if not ok:
        sys.exit(1)
