# All ramps run from visually darkest to visually lightest.

# Classic ten-step ramp
DEFAULT_RAMP = "@%#*+=-:. "

# Longer ramp with finer steps in the midtones
DETAILED = "MWNXK0Okxol:,. "

# Paul Bourke's 70-level ramp
BOURKE = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "

# Block elements, full to empty
BLOCKS = "█▓▒░ "

# Two-level threshold
BINARY = "# "

RAMPS = {
    "default": DEFAULT_RAMP,
    "detailed": DETAILED,
    "bourke": BOURKE,
    "blocks": BLOCKS,
    "binary": BINARY,
}
