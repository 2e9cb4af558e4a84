"""IngredientId value object.

Immutable, validated identifier for the Ingredient aggregate root.
"""

from dataclasses import dataclass

from domain.shared.errors import ValidationError


@dataclass(frozen=True)
class IngredientId:
    """Value object for Ingredient ID.

    Opaque non-empty identifier. Frozen dataclass gives equality by value
    and makes it usable as a dict key.

    Examples:
        >>> ingredient_id = IngredientId.create("patty")
        >>> str(ingredient_id)
        'patty'

        >>> IngredientId.create("   ")
        Traceback (most recent call last):
        ...
        ValidationError: Ingredient ID cannot be empty
    """

    value: str

    def __post_init__(self) -> None:
        """Validate identifier invariants."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Ingredient ID cannot be empty")

    @classmethod
    def create(cls, raw: str) -> "IngredientId":
        """Create IngredientId from raw string.

        Args:
            raw: Raw identifier (must be non-blank)

        Returns:
            IngredientId instance

        Raises:
            ValidationError: If raw is empty or whitespace.
        """
        return cls(raw)

    def __str__(self) -> str:
        """String representation as raw id."""
        return self.value

    def __repr__(self) -> str:
        """Developer representation."""
        return f"IngredientId({self.value!r})"
