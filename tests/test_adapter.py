"""
Tests for wrapping a conventional complex into a hypercomplex.
"""

import pytest
from sympy import QQ

from hyperchain.adapter import (
    ChainFactoryFromComplex,
    MapFactoryFromComplex,
    hyper_complex,
    simple_complex_wrapper,
)
from hyperchain.complex import chain_complex, cochain_complex
from hyperchain.hypercomplex import HyperComplexIndexError, NotComputableError
from hyperchain.modules import FreeModule, hom


def _build_chain_complex():
    # 0 <- QQ <- QQ^2 <- QQ <- 0 at indices 0, 1, 2
    F2 = FreeModule(QQ, 1)
    F1 = FreeModule(QQ, 2)
    F0 = FreeModule(QQ, 1)
    d2 = hom(F2, F1, [[1, 1]])
    d1 = hom(F1, F0, [[1], [-1]])
    return chain_complex([d2, d1])


def _build_cochain_complex():
    F0 = FreeModule(QQ, 1)
    F1 = FreeModule(QQ, 2)
    F2 = FreeModule(QQ, 1)
    d0 = hom(F0, F1, [[1, 1]])
    d1 = hom(F1, F2, [[1], [-1]])
    return cochain_complex([d0, d1], seed=3)


def test_objects_in_range_are_the_originals():
    C = _build_chain_complex()
    hc = hyper_complex(C)
    for k in C.range:
        assert hc.can_compute_index((k,))
        assert hc[(k,)] is C[k]


def test_objects_outside_range_are_not_computable():
    C = _build_chain_complex()
    hc = hyper_complex(C)
    assert not hc.can_compute_index((-1,))
    assert not hc.can_compute_index((3,))
    with pytest.raises(NotComputableError):
        hc[(3,)]


def test_maps_in_range_are_the_originals():
    C = _build_chain_complex()
    hc = hyper_complex(C)
    for k in C.map_range:
        assert hc.can_compute_map(1, (k,))
        assert hc.map(1, (k,)) is C.map(k)
    assert not hc.can_compute_map(1, (0,))
    assert not hc.can_compute_map(1, (3,))
    with pytest.raises(NotComputableError):
        hc.map(1, (0,))


def test_auto_extend_synthesizes_zero_modules():
    C = _build_chain_complex()
    hc = hyper_complex(C, auto_extend=True)
    for k in (-5, -1, 3, 10):
        assert hc.can_compute_index((k,))
        M = hc[(k,)]
        assert M.rank == 0
        assert M.base_ring == C[0].base_ring
    assert hc[(1,)] is C[1]


def test_auto_extend_synthesizes_zero_maps():
    C = _build_chain_complex()
    hc = hyper_complex(C, auto_extend=True)
    for k in (-1, 0, 3, 4):
        assert hc.can_compute_map(1, (k,))
        f = hc.map(1, (k,))
        assert f.is_zero()
        assert f.domain is hc[(k,)]
        assert f.codomain is hc[(k - 1,)]
    assert hc.map(1, (2,)) is C.map(2)


def test_zero_map_into_the_complex():
    C = _build_chain_complex()
    hc = hyper_complex(C, auto_extend=True)
    f = hc.map(1, (0,))
    assert f.domain is C[0]
    assert f.codomain.rank == 0
    assert f.images == (f.codomain.zero(),)


def test_zero_modules_are_fresh_per_factory_call():
    C = _build_chain_complex()
    hc = hyper_complex(C, auto_extend=True)
    fac = ChainFactoryFromComplex(C, auto_extend=True)
    assert fac(hc, (7,)) is not fac(hc, (7,))
    assert hc[(7,)] is hc[(7,)]


def test_factories_without_extension_refuse_outside_range():
    C = _build_chain_complex()
    hc = hyper_complex(C)
    with pytest.raises(NotComputableError):
        ChainFactoryFromComplex(C)(hc, (4,))
    with pytest.raises(NotComputableError):
        MapFactoryFromComplex(C)(hc, 1, (0,))


@pytest.mark.parametrize("auto_extend", [False, True])
def test_wrong_index_arity_is_fatal(auto_extend):
    C = _build_chain_complex()
    hc = hyper_complex(C, auto_extend=auto_extend)
    with pytest.raises(HyperComplexIndexError):
        hc[(0, 1)]
    with pytest.raises(HyperComplexIndexError):
        hc.can_compute_index(())
    with pytest.raises(HyperComplexIndexError):
        hc.map(1, (1, 1))
    with pytest.raises(HyperComplexIndexError):
        ChainFactoryFromComplex(C, auto_extend=auto_extend)(hc, (0, 0))


@pytest.mark.parametrize("auto_extend", [False, True])
def test_wrong_map_degree_is_fatal(auto_extend):
    C = _build_chain_complex()
    hc = hyper_complex(C, auto_extend=auto_extend)
    with pytest.raises(HyperComplexIndexError):
        hc.map(2, (1,))
    with pytest.raises(HyperComplexIndexError):
        hc.can_compute_map(0, (1,))
    with pytest.raises(HyperComplexIndexError):
        MapFactoryFromComplex(C, auto_extend=auto_extend)(hc, 2, (1,))


def test_bounds_for_chain_complex():
    C = _build_chain_complex()
    hc = hyper_complex(C)
    assert hc.dim == 1
    assert hc.direction(1) == "chain"
    assert hc.upper_bound(1) == C.range[0] == 2
    assert hc.lower_bound(1) == C.range[-1] == 0


def test_bounds_for_cochain_complex():
    C = _build_cochain_complex()
    hc = hyper_complex(C)
    assert hc.direction(1) == "cochain"
    assert hc.lower_bound(1) == C.range[0] == 3
    assert hc.upper_bound(1) == C.range[-1] == 5


def test_cochain_maps_pass_through():
    C = _build_cochain_complex()
    hc = hyper_complex(C)
    assert hc.map(1, (3,)) is C.map(3)
    assert hc.map(1, (4,)) is C.map(4)
    assert not hc.can_compute_map(1, (5,))


def test_simple_complex_wrapper_end_to_end():
    C = _build_chain_complex()

    strict = simple_complex_wrapper(C)
    assert strict.typ == "chain"
    assert [strict.can_compute_index(k) for k in (-1, 0, 1, 2, 3)] == [False, True, True, True, False]
    for k in (0, 1, 2):
        assert strict[k] is C[k]
    assert strict.map(1) is C.map(1)

    extended = simple_complex_wrapper(C, auto_extend=True)
    low = extended.map(0)
    high = extended.map(3)
    assert low.domain is extended[0] is C[0]
    assert low.codomain is extended[-1]
    assert high.domain is extended[3]
    assert high.codomain is extended[2] is C[2]
    for M in (extended[-1], extended[3]):
        assert M.rank == 0
        assert M.base_ring == QQ
    assert extended.upper_bound == 2
    assert extended.lower_bound == 0
