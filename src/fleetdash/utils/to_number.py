def to_number(value: object) -> float | None:
    """Coerce a backend numeric value to a float if possible.

    PostgREST returns ``numeric`` columns either as JSON numbers or as
    strings, and nullable columns as ``None``.

    Args:
        value: Value to coerce.

    Returns:
        Float value, ``0.0`` for ``None``, or ``None`` when the value is not numeric.
    """

    if value is None:
        return 0.0
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip() or 0)
        except ValueError:
            return None
    return None
