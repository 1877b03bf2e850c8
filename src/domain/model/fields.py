"""Field casting shared by the domain models."""

from domain.model.errors import ValidationError


def cast_string(value, model: str, path: str) -> str | None:
    """Cast ``value`` to str the way a document schema would.

    None passes through; numbers become their string form; anything else
    (bools, lists, dicts) fails with a ValidationError naming the path.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(f"{model} validation failed: {path}: Cast to string failed for value {value!r}")
