# Brightness ramp, darkest/densest first (10 levels)
DEFAULT_RAMP = "@%#*+=-:. "

# Edge glyphs indexed by direction class: 0 vertical, 1 and 3 diagonals, 2 horizontal.
# The tail entries are fallbacks and never selected by the detector.
EDGE_RAMP = "|/-\\+*. "

VERTICAL = 0
DIAGONAL_UP = 1
HORIZONTAL = 2
DIAGONAL_DOWN = 3
