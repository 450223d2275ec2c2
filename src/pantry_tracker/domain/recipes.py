"""Domain models for recipe candidates and match results."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class RecipeIngredient:
    """Single ingredient descriptor of a recipe."""

    name: str
    text: str | None = None


@dataclass(frozen=True)
class RecipeCandidate:
    """Recipe returned by a recipe source, before scoring."""

    id: str
    title: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    source_url: str | None = None
    image_url: str | None = None
    total_time_minutes: int | None = None
    servings: int | None = None


@dataclass(frozen=True)
class ScoredRecipe:
    """Recipe candidate annotated with inventory match statistics."""

    recipe: RecipeCandidate
    available_count: int
    missing_count: int
    missing_names: list[str]
    expiring_used: list[UUID]
    match_fraction: float
    score: float

    @property
    def total_count(self) -> int:
        """Number of ingredients considered."""
        return self.available_count + self.missing_count
