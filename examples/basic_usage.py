"""
Basic usage example for hyperchain.
Wraps the Koszul complex of (x, y) into a hypercomplex and reports on it.
"""

from sympy import QQ, symbols

from hyperchain import (
    FreeModule,
    hom,
    chain_complex,
    hyper_complex,
    build_complex_report,
)

x, y = symbols("x y")
R = QQ[x, y]

# Step 1: Build 0 <- R <- R^2 <- R <- 0
F2, F1, F0 = FreeModule(R, 1), FreeModule(R, 2), FreeModule(R, 1)
C = chain_complex([hom(F2, F1, [[y, -x]]), hom(F1, F0, [[x], [y]])])

# Step 2: Wrap it, once strictly and once extended by zero
strict = hyper_complex(C)
extended = hyper_complex(C, auto_extend=True)

# Step 3: Query outside the original range
print("strict can compute (3,):", strict.can_compute_index((3,)))
print("extended object at (3,):", extended[(3,)])
print("extended map at (3,):", extended.map(1, (3,)))

# Step 4: Summarize
print("Report:")
print(build_complex_report(extended, (-1, 3)))
