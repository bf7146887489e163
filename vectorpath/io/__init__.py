"""
VectorPath I/O Module

Formatting and persistence of paths.
"""

from .path_data import (
    to_path_data, to_svg_string, to_clip_path,
    paths_to_dict, paths_from_dict, save_paths, load_paths
)

__all__ = [
    'to_path_data', 'to_svg_string', 'to_clip_path',
    'paths_to_dict', 'paths_from_dict', 'save_paths', 'load_paths',
]
