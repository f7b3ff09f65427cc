"""Well-known mark names <-> SVG glyph basenames."""

from __future__ import annotations

import posixpath
from types import MappingProxyType

from mapnikstyle.domain.errors import UnsupportedSymbolError

WELL_KNOWN_GLYPHS = MappingProxyType(
    {
        "X": "x.svg",
        "Cross": "cross.svg",
        "Square": "square.svg",
        "Star": "star.svg",
        "Triangle": "triangle.svg",
        "shape://backslash": "shape-backslash.svg",
        "shape://carrow": "shape-carrow.svg",
        "shape://dot": "shape-dot.svg",
        "shape://horline": "shape-horline.svg",
        "shape://oarrow": "shape-oarrow.svg",
        "shape://plus": "shape-plus.svg",
        "shape://slash": "shape-slash.svg",
        "shape://vertline": "shape-vertline.svg",
    }
)

_NAMES_BY_BASENAME = MappingProxyType({v: k for k, v in WELL_KNOWN_GLYPHS.items()})


def resolve_glyph(name: str, base_path: str | None = None) -> str:
    """Return the glyph file for a well-known name, joined onto *base_path* if given.

    Raises:
        UnsupportedSymbolError: *name* has no glyph.
    """
    basename = WELL_KNOWN_GLYPHS.get(name)
    if basename is None:
        raise UnsupportedSymbolError(name)
    if base_path:
        return posixpath.join(base_path, basename)
    return basename


def lookup_glyph(path: str) -> str | None:
    """Return the well-known name whose glyph is *path*'s basename, or None.

    None is the defined fallback: the caller keeps *path* as an icon image.
    """
    basename = posixpath.basename(path.replace("\\", "/"))
    return _NAMES_BY_BASENAME.get(basename)
