"""corrank - ranks the strongest pairwise correlations in a CSV export."""

__version__ = "1.0.0"
