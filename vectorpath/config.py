"""
VectorPath Numeric Configuration

Fixed tolerances that form the implicit contract of the geometry kernel,
plus the settings objects that let callers override them per call.
"""

from dataclasses import dataclass


EPSILON = 1e-9                  # General floating-point equality
DEFAULT_MERGE_THRESHOLD = 0.1   # Curve intersection merge distance (world units)
DEFAULT_MAX_DEPTH = 12          # Subdivision depth cap for curve intersection
STITCH_TOLERANCE_SQ = 0.01      # Squared endpoint distance for loop stitching
PARAMETER_MERGE = 1e-5          # Minimum gap between split parameters on one curve


@dataclass(frozen=True)
class GeometryTolerances:
    """Default tolerances, grouped for introspection."""
    epsilon: float = EPSILON
    merge_threshold: float = DEFAULT_MERGE_THRESHOLD
    max_depth: int = DEFAULT_MAX_DEPTH
    stitch_tolerance_sq: float = STITCH_TOLERANCE_SQ
    parameter_merge: float = PARAMETER_MERGE


DEFAULT_TOLERANCES = GeometryTolerances()


@dataclass
class BooleanSettings:
    """Settings for boolean path operations."""
    
    # Curve-curve intersection
    merge_threshold: float = DEFAULT_MERGE_THRESHOLD
    max_depth: int = DEFAULT_MAX_DEPTH
    
    # Segmentation and loop reconstruction
    parameter_merge: float = PARAMETER_MERGE
    stitch_tolerance_sq: float = STITCH_TOLERANCE_SQ
    
    # Bake each input's affine transform into its nodes before operating
    bake_transforms: bool = True
    
    def validate(self) -> tuple[bool, str]:
        """
        Check that the settings describe a usable configuration.
        
        Returns:
            (is_valid, error_message)
        """
        if self.merge_threshold <= 0:
            return False, f"merge_threshold must be positive, got {self.merge_threshold}"
        if self.max_depth < 0:
            return False, f"max_depth must be non-negative, got {self.max_depth}"
        if self.parameter_merge <= 0 or self.parameter_merge >= 0.5:
            return False, f"parameter_merge must be in (0, 0.5), got {self.parameter_merge}"
        if self.stitch_tolerance_sq <= 0:
            return False, f"stitch_tolerance_sq must be positive, got {self.stitch_tolerance_sq}"
        return True, ""
