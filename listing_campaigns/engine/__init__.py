"""Region-mapping engine: suggestion bundle -> render-engine region mutations."""

from .mapping import RegionMappingEngine, build_copy, default_copy
from .properties import PROPERTY_SCHEMA, PropertyKind
from .traits import RegionTraits, classify

__all__ = [
    "PROPERTY_SCHEMA",
    "PropertyKind",
    "RegionMappingEngine",
    "RegionTraits",
    "build_copy",
    "classify",
    "default_copy",
]
