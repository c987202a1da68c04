"""Command-line interface for hyperchain."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from typing import Any, Dict

from sympy import symbols

from .adapter import hyper_complex
from .curves import (
    ProjectivePlaneCurve,
    RingElements,
    adjoint_ideal,
    parametrization,
    parametrization_conic,
    rational_point_conic,
)
from .engine import SingularConfig, SingularSession
from .report import build_complex_report, flatten_report, validate_complex_report
from .serialization import load_complex_json


def _write_report(report: Dict[str, Any], args: argparse.Namespace) -> None:
    out_format = args.out_format
    if out_format == "json":
        if args.out:
            with open(args.out, "w") as handle:
                json.dump(report, handle, indent=2)
            print(f"Report saved to {args.out}")
        print(json.dumps(report, indent=2))
        return

    if out_format == "jsonl":
        line = json.dumps(report)
        if args.out:
            mode = "a" if args.append else "w"
            with open(args.out, mode) as handle:
                handle.write(line + "\n")
            print(f"Report saved to {args.out}")
        print(line)
        return

    if out_format == "csv":
        row = flatten_report(report)
        if args.out:
            mode = "a" if args.append else "w"
            with open(args.out, mode, newline="") as handle:
                writer = csv.DictWriter(handle, fieldnames=sorted(row.keys()))
                if mode == "w":
                    writer.writeheader()
                writer.writerow(row)
            print(f"Report saved to {args.out}")
        else:
            writer = csv.DictWriter(sys.stdout, fieldnames=sorted(row.keys()))
            writer.writeheader()
            writer.writerow(row)
        return

    raise ValueError(f"Unsupported out-format: {out_format}")


def _cmd_describe(args: argparse.Namespace) -> int:
    C = load_complex_json(args.input)
    hc = hyper_complex(C, auto_extend=args.auto_extend)
    if args.window:
        window = (args.window[0], args.window[1])
    else:
        window = (min(C.range) - 1, max(C.range) + 1)

    report = build_complex_report(hc, window)
    if not args.no_validate:
        validate_complex_report(report)
    _write_report(report, args)
    return 0


def _cmd_betti(args: argparse.Namespace) -> int:
    C = load_complex_json(args.input)
    bettis = {str(k): v for k, v in C.betti_numbers().items()}
    print(json.dumps(bettis, indent=2))
    return 0


def _session(args: argparse.Namespace) -> SingularSession:
    config = SingularConfig.from_env()
    if args.singular or args.timeout is not None:
        config = SingularConfig(
            executable=args.singular or config.executable,
            timeout=args.timeout if args.timeout is not None else config.timeout,
        )
    return SingularSession(config)


def _curve(args: argparse.Namespace) -> ProjectivePlaneCurve:
    gens = symbols(args.vars.replace(",", " "))
    return ProjectivePlaneCurve(args.equation, gens=gens)


def _elements_to_json(result: RingElements) -> Dict[str, Any]:
    nf = result.ring.number_field
    return {
        "gens": [str(g) for g in result.ring.gens],
        "minpoly": str(nf.minpoly.as_expr()) if nf is not None else None,
        "polynomials": [str(p) for p in result.as_exprs()],
    }


def _cmd_parametrize(args: argparse.Namespace) -> int:
    curve = _curve(args)
    session = _session(args)
    if args.conic:
        result = parametrization_conic(curve, session)
    else:
        result = parametrization(curve, session)
    print(json.dumps(_elements_to_json(result), indent=2))
    return 0


def _cmd_adjoint(args: argparse.Namespace) -> int:
    result = adjoint_ideal(_curve(args), _session(args))
    print(json.dumps(_elements_to_json(result), indent=2))
    return 0


def _cmd_point(args: argparse.Namespace) -> int:
    result = rational_point_conic(_curve(args), _session(args))
    print(json.dumps(_elements_to_json(result), indent=2))
    return 0


def _add_curve_arguments(cmd: argparse.ArgumentParser) -> None:
    cmd.add_argument("--equation", required=True, help="Homogeneous defining equation")
    cmd.add_argument("--vars", default="x,y,z", help="Comma-separated coordinate names")
    cmd.add_argument("--singular", default=None, help="Singular executable")
    cmd.add_argument("--timeout", type=float, default=None, help="Engine timeout in seconds")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hyperchain")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    describe = sub.add_parser("describe", help="Report on a complex wrapped as a hypercomplex")
    describe.add_argument("--input", required=True, help="Input complex JSON path")
    describe.add_argument("--auto-extend", action="store_true", help="Extend by zero outside the complex")
    describe.add_argument("--window", type=int, nargs=2, metavar=("LOW", "HIGH"), help="Index window")
    describe.add_argument("--out", help="Output path")
    describe.add_argument("--out-format", choices=["json", "jsonl", "csv"], default="json", help="Output format")
    describe.add_argument("--append", action="store_true", help="Append to output file for jsonl/csv")
    describe.add_argument("--no-validate", action="store_true", help="Disable schema validation")
    describe.set_defaults(func=_cmd_describe)

    betti = sub.add_parser("betti", help="Homology ranks of a complex")
    betti.add_argument("--input", required=True, help="Input complex JSON path")
    betti.set_defaults(func=_cmd_betti)

    para = sub.add_parser("parametrize", help="Rational parametrization of a plane curve")
    _add_curve_arguments(para)
    para.add_argument("--conic", action="store_true", help="Use the conic parametrization")
    para.set_defaults(func=_cmd_parametrize)

    adj = sub.add_parser("adjoint", help="Adjoint ideal of a plane curve")
    _add_curve_arguments(adj)
    adj.set_defaults(func=_cmd_adjoint)

    point = sub.add_parser("point", help="Point on a plane conic")
    _add_curve_arguments(point)
    point.set_defaults(func=_cmd_point)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
