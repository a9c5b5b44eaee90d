"""
Adaptive Resonance Theory clustering.

Online category learning with Fuzzy ART, dual-vigilance and distributed
dual-vigilance Fuzzy ART, and Simplified Fuzzy ARTMAP.
"""

__version__ = "0.1.0"

from .data import DataConfig, complement_code, frame_to_samples, linear_normalization, map_class_ids
from .ddvfa import DDVFA
from .dvfa import DVFA
from .errors import MISMATCH, ARTError, ConfigurationError, InvariantError
from .evaluation import map_labels_to_true, performance, smooth_labels, sweep_vigilance
from .fuzzy_art import FuzzyART, GammaNormalizedFuzzyART
from .options import (
    ActivationRule,
    DDVFAOptions,
    DVFAOptions,
    FuzzyARTOptions,
    Linkage,
    MatchRule,
    SFAMOptions,
)
from .sfam import SFAM

__all__ = [
    "MISMATCH",
    "ARTError",
    "ConfigurationError",
    "InvariantError",
    "DataConfig",
    "complement_code",
    "linear_normalization",
    "frame_to_samples",
    "map_class_ids",
    "ActivationRule",
    "MatchRule",
    "Linkage",
    "FuzzyARTOptions",
    "DVFAOptions",
    "DDVFAOptions",
    "SFAMOptions",
    "FuzzyART",
    "GammaNormalizedFuzzyART",
    "DVFA",
    "DDVFA",
    "SFAM",
    "performance",
    "map_labels_to_true",
    "smooth_labels",
    "sweep_vigilance",
]
