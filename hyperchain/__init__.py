"""
hyperchain: chain complexes as hypercomplexes, and rational plane curves

- Wrap a finite chain or cochain complex of free modules into a lazily
  evaluated one-dimensional hypercomplex, optionally extended by zero.
- Rational parametrization, adjoint ideals and rational normal curves of
  projective plane curves, computed by the Singular engine.
"""

from .modules import FreeModule, FreeModuleElement, ModuleHom, hom, zero_hom, compose
from .complex import (
    ComplexOfMorphisms,
    chain_complex,
    cochain_complex,
    CHAIN,
    COCHAIN,
)
from .hypercomplex import (
    HyperComplex,
    HyperComplexChainFactory,
    HyperComplexMapFactory,
    HyperComplexIndexError,
    NotComputableError,
    SimpleComplexWrapper,
)
from .adapter import (
    ChainFactoryFromComplex,
    MapFactoryFromComplex,
    hyper_complex,
    simple_complex_wrapper,
)
from .engine import SingularConfig, SingularSession, SingularError, SingularNotFoundError
from .curves import (
    ProjectivePlaneCurve,
    ProjectiveCurve,
    NumberField,
    EngineRing,
    RingElements,
    parametrization,
    adjoint_ideal,
    rational_point_conic,
    parametrization_conic,
    map_to_rational_normal_curve,
    rat_normal_curve_anticanonical_map,
    rat_normal_curve_it_proj_odd,
    rat_normal_curve_it_proj_even,
    invert_birational_map,
)
from .serialization import load_complex_json, save_complex_json, complex_from_dict, complex_to_dict
from .report import build_complex_report, validate_complex_report, flatten_report

version = "0.1.0"

__all__ = [
    "FreeModule",
    "FreeModuleElement",
    "ModuleHom",
    "hom",
    "zero_hom",
    "compose",
    "ComplexOfMorphisms",
    "chain_complex",
    "cochain_complex",
    "CHAIN",
    "COCHAIN",
    "HyperComplex",
    "HyperComplexChainFactory",
    "HyperComplexMapFactory",
    "HyperComplexIndexError",
    "NotComputableError",
    "SimpleComplexWrapper",
    "ChainFactoryFromComplex",
    "MapFactoryFromComplex",
    "hyper_complex",
    "simple_complex_wrapper",
    "SingularConfig",
    "SingularSession",
    "SingularError",
    "SingularNotFoundError",
    "ProjectivePlaneCurve",
    "ProjectiveCurve",
    "NumberField",
    "EngineRing",
    "RingElements",
    "parametrization",
    "adjoint_ideal",
    "rational_point_conic",
    "parametrization_conic",
    "map_to_rational_normal_curve",
    "rat_normal_curve_anticanonical_map",
    "rat_normal_curve_it_proj_odd",
    "rat_normal_curve_it_proj_even",
    "invert_birational_map",
    "load_complex_json",
    "save_complex_json",
    "complex_from_dict",
    "complex_to_dict",
    "build_complex_report",
    "validate_complex_report",
    "flatten_report",
    "version",
]


def info():
    """
    Returns package version and scope.
    """
    return f"""
    hyperchain v{version}
    Complexes of free modules as hypercomplexes; rational plane curves via Singular.
    """
