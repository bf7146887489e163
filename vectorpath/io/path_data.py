"""
Path Formatting and Persistence for VectorPath

Walks Path.to_curves() output to produce:
- SVG path data ("M x y C ... Z") and standalone SVG documents
- CSS clip-path declarations
- JSON-ready dictionaries and .json path files
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional
from xml.etree import ElementTree as ET

from ..core.path import Path
from ..errors import UnsupportedInputError
from ..geometry.math_utils import round_to

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
FORMAT_VERSION = "1.0"


def _fmt(value: float, decimals: int) -> str:
    """Shortest text for a rounded coordinate (no trailing zeros)."""
    text = f"{round_to(value, decimals):.{decimals}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text


def to_path_data(paths: Iterable[Path], decimals: int = 2) -> str:
    """
    Generate SVG path data for paths.
    
    Every curve is written as an absolute cubic command; closed paths end
    with Z. Paths without curves are skipped.
    """
    parts: List[str] = []
    for path in paths:
        curves = path.to_curves()
        if not curves:
            continue
        
        start = curves[0].p0
        parts.append(f"M {_fmt(start.x, decimals)} {_fmt(start.y, decimals)}")
        for curve in curves:
            parts.append(
                f"C {_fmt(curve.p1.x, decimals)} {_fmt(curve.p1.y, decimals)}, "
                f"{_fmt(curve.p2.x, decimals)} {_fmt(curve.p2.y, decimals)}, "
                f"{_fmt(curve.p3.x, decimals)} {_fmt(curve.p3.y, decimals)}"
            )
        if path.closed:
            parts.append("Z")
    
    return " ".join(parts)


def to_svg_string(paths: Iterable[Path], width: float = 800, height: float = 600,
                  decimals: int = 2) -> str:
    """Standalone SVG document with one stroked <path> per path."""
    ET.register_namespace('', SVG_NS)
    root = ET.Element(f"{{{SVG_NS}}}svg", {
        'width': _fmt(width, decimals),
        'height': _fmt(height, decimals),
        'viewBox': f"0 0 {_fmt(width, decimals)} {_fmt(height, decimals)}",
    })
    group = ET.SubElement(root, f"{{{SVG_NS}}}g")
    
    for path in paths:
        d = to_path_data([path], decimals)
        if not d:
            continue
        ET.SubElement(group, f"{{{SVG_NS}}}path", {
            'id': path.id,
            'd': d,
            'fill': 'none',
            'stroke': 'black',
            'stroke-width': '1',
        })
    
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding='unicode')


def to_clip_path(paths: Iterable[Path], decimals: int = 2) -> str:
    """CSS clip-path declaration for paths."""
    return f"clip-path: path('{to_path_data(paths, decimals)}');"


def paths_to_dict(paths: Iterable[Path]) -> Dict[str, Any]:
    """Convert a list of paths to a JSON-ready dictionary."""
    return {
        'version': FORMAT_VERSION,
        'paths': [path.to_dict() for path in paths]
    }


def paths_from_dict(data: Dict[str, Any]) -> List[Path]:
    """
    Convert paths_to_dict() output back to paths.
    
    Raises:
        UnsupportedInputError: if the data does not describe a path list
    """
    if not isinstance(data, dict) or not isinstance(data.get('paths'), list):
        raise UnsupportedInputError("Path data must be a dict with a 'paths' list")
    return [Path.from_dict(item) for item in data['paths']]


def save_paths(paths: Iterable[Path], filepath: str) -> bool:
    """
    Save paths to a JSON file.
    
    Returns:
        True if successful, False otherwise
    """
    try:
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(paths_to_dict(paths), f, indent=2)
        return True
    except OSError as e:
        logger.error(f"Error saving paths to {filepath}: {e}")
        return False


def load_paths(filepath: str) -> Optional[List[Path]]:
    """
    Load paths from a JSON file written by save_paths().
    
    Returns:
        The paths if successful, None otherwise
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return paths_from_dict(data)
    except (OSError, json.JSONDecodeError, UnsupportedInputError) as e:
        logger.error(f"Error loading paths from {filepath}: {e}")
        return None
