"""Equipment Lab: executable virtual equipment over finite data.

This package implements:
- Finite path categories generated by acyclic multigraphs
- A strict tight layer of functors and natural transformations
- The virtual equipment core (proarrows, frames, restrictions, 2-cells)
- Street-calculus pasting and red/green comparison
- Companion/conjoint search, extensions, lifts, weighted (co)limits, density,
  absoluteness and full faithfulness analyzers
- Bicategory coherence (pentagon, triangle, unitor invertibility)
- A finite span equipment with genuinely non-trivial associators

Designed to support reproducible coherence experiments.
"""

__all__ = [
    "category",
    "tight",
    "equipment",
    "street",
    "companions",
    "extensions",
    "limits",
    "absoluteness",
    "faithfulness",
    "loose",
    "skew",
    "bicategory",
    "spans",
]
