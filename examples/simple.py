import sys

from tabconv import parse_ascii_tab, tablature_to_alphatex

text = """e|--0--3--|--5h7--|
B|--1-----|-------|
G|--------|---7/9-|
"""
tab = parse_ascii_tab(text)

# Access measures and beats
for measure in tab.measures:
    sys.stdout.write(f"Measure {measure.number}: {len(measure.beats)} beats\n")

# Convert to alphaTex
sys.stdout.write(tablature_to_alphatex(tab) + "\n")
