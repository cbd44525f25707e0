"""Score Calculators - GPA and standardized-test score derivation engine."""

__version__ = "1.0.0"
