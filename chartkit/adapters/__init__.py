from .normalize import entries_from_values, normalize_values, series_from_values

__all__ = ["entries_from_values", "normalize_values", "series_from_values"]
