"""
Rational parametrization of a quartic with three singular points.
Needs a Singular installation (set HYPERCHAIN_SINGULAR if it is not on PATH).
"""

import logging

from sympy import symbols

from hyperchain import (
    ProjectivePlaneCurve,
    SingularSession,
    adjoint_ideal,
    map_to_rational_normal_curve,
    parametrization,
)

logging.basicConfig(level=logging.INFO)

x, y, z = symbols("x y z")
C = ProjectivePlaneCurve(y**4 - 2 * x**3 * z + 3 * x**2 * z**2 - 2 * y**2 * z**2, gens=(x, y, z))
session = SingularSession()

print("Adjoint ideal:", adjoint_ideal(C, session).as_exprs())
print("Rational normal curve:", map_to_rational_normal_curve(C, session))

para = parametrization(C, session)
print("Parametrization:", para.as_exprs())
if para.ring.number_field is not None:
    print("over QQ(a) with minpoly", para.ring.number_field.minpoly.as_expr())
