"""sipcalc: investment growth projections for recurring, lump-sum and fixed-deposit plans."""

__version__ = "0.1.0"
