"""
Hypercomplex report tests.
"""

import json
import os

import pytest
from jsonschema import ValidationError
from sympy import QQ

from hyperchain.adapter import hyper_complex
from hyperchain.complex import chain_complex
from hyperchain.modules import FreeModule, hom
from hyperchain.report import (
    build_complex_report,
    flatten_report,
    load_complex_report_schema,
    validate_complex_report,
)

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")


def _build_chain_complex():
    F2 = FreeModule(QQ, 1)
    F1 = FreeModule(QQ, 2)
    F0 = FreeModule(QQ, 1)
    return chain_complex([hom(F2, F1, [[1, 1]]), hom(F1, F0, [[1], [-1]])])


def test_report_matches_example_fixture():
    report = build_complex_report(
        hyper_complex(_build_chain_complex()),
        (-1, 3),
        notes=["Chain complex 0 <- QQ <- QQ^2 <- QQ <- 0"],
    )
    with open(os.path.join(FIXTURES, "complex_report_example.json"), "r", encoding="utf-8") as handle:
        expected = json.load(handle)
    assert report == expected
    validate_complex_report(report)


def test_extended_report_covers_whole_window():
    report = build_complex_report(hyper_complex(_build_chain_complex(), auto_extend=True), (-2, 4))
    assert all(obj["computable"] for obj in report["objects"])
    assert [obj["rank"] for obj in report["objects"]] == [0, 0, 1, 2, 1, 0, 0]
    zero_maps = [m for m in report["maps"] if m["index"] in (-2, -1, 0, 3, 4)]
    assert all(m["is_zero"] for m in zero_maps)
    assert report["homology"] == {str(k): 0 for k in range(-2, 5)}
    validate_complex_report(report)


def test_window_must_be_ordered():
    with pytest.raises(ValueError):
        build_complex_report(hyper_complex(_build_chain_complex()), (3, 1))


def test_schema_rejects_malformed_report():
    report = build_complex_report(hyper_complex(_build_chain_complex()), (0, 2))
    report["typ"] = "sideways"
    with pytest.raises(ValidationError):
        validate_complex_report(report, schema=load_complex_report_schema())


def test_flatten_report_expands_lists():
    report = build_complex_report(hyper_complex(_build_chain_complex()), (0, 1))
    flat = flatten_report(report)
    assert flat["objects.0.index"] == "0"
    assert flat["maps.1.shape.0"] == "2"
    assert flat["bounds.upper"] == "2"
