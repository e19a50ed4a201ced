"""Operations and helpers for rule-based filtering of structured data."""

__version__ = "0.1.0"
__all__ = ["kinds", "utils", "registry", "comparison", "membership", "ip_range", "match"]