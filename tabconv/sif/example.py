"""A ready-made SIF document for trying out the format."""

SIF_EXAMPLE = """\
# Section: Verse 5
# Tempo: 120
# Time: 4/4
# Instruction: let ring
---
MEASURE 65 | Em
e0 B0 G2 D2 A0 : 4
G2 D2 : 8
e0 B0 : 8
e0 B0 G0 : 4
G2 : 8
e0 B0 G0 : 8
e0 B0 G0 D2 : 4 | "Mir-"
B2 : 8 | "rors"

MEASURE 66 | B7
e2 : 8
e0 B2 G1 : 4 | "on"
G2 D2 : 8 | "the"
e0 B2 : 4 | "cei-"
e2 : 8
e0 B2 G2 : 4 | "ling"
e0 B1 G1 : 8
"""
