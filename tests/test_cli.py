"""
Command-line interface tests.
"""

import csv
import json
import os

from hyperchain import cli
from hyperchain.engine import SingularConfig, SingularSession

FIXTURES = os.path.join(os.path.dirname(__file__), "fixtures")
KOSZUL = os.path.join(FIXTURES, "koszul_complex.json")


def test_describe_prints_report(capsys):
    assert cli.main(["describe", "--input", KOSZUL]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["window"] == [-1, 3]
    assert [o["computable"] for o in report["objects"]] == [False, True, True, True, False]


def test_describe_auto_extend_with_window(capsys, tmp_path):
    out = tmp_path / "report.json"
    assert cli.main([
        "describe", "--input", KOSZUL, "--auto-extend",
        "--window", "-3", "5", "--out", str(out),
    ]) == 0
    with open(out, "r") as handle:
        report = json.load(handle)
    assert report["window"] == [-3, 5]
    assert all(o["computable"] for o in report["objects"])


def test_describe_csv_appends(tmp_path):
    out = tmp_path / "reports.csv"
    cli.main(["describe", "--input", KOSZUL, "--out", str(out), "--out-format", "csv"])
    cli.main(["describe", "--input", KOSZUL, "--out", str(out), "--out-format", "csv", "--append"])
    with open(out, newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 2
    assert rows[0] == rows[1]
    assert rows[0]["objects.1.rank"] == "1"


def test_betti(capsys):
    assert cli.main(["betti", "--input", KOSZUL]) == 0
    assert json.loads(capsys.readouterr().out) == {"2": 0, "1": 0, "0": 0}


class _ScriptedSession(SingularSession):
    output = ""

    def __init__(self, config=None):
        super().__init__(config or SingularConfig())

    def run(self, script):
        return self.output


def test_parametrize_uses_engine(monkeypatch, capsys):
    _ScriptedSession.output = "@@BEGIN ring\ns,t\n@@END ring\n@@BEGIN PARACONIC\ns^2-t^2\n2*s*t\ns^2+t^2\n@@END PARACONIC\n"
    monkeypatch.setattr(cli, "SingularSession", _ScriptedSession)
    assert cli.main(["parametrize", "--equation", "x^2+y^2-z^2", "--conic", "--timeout", "5"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["gens"] == ["s", "t"]
    assert result["minpoly"] is None
    assert len(result["polynomials"]) == 3


def test_point_reports_minpoly(monkeypatch, capsys):
    _ScriptedSession.output = "@@BEGIN ring\nx,y,z\na\n(a^2-2)\n@@END ring\n@@BEGIN point\n(-1/4*a)\n(-1/4*a+1/4)\n0\n@@END point\n"
    monkeypatch.setattr(cli, "SingularSession", _ScriptedSession)
    equation = "x^2+2*y^2+5*z^2-4*x*y+3*x*z+17*y*z"
    assert cli.main(["point", "--equation", equation]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["minpoly"] == "a**2 - 2"
    assert result["polynomials"][2] == "0"
