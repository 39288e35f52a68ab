from typing import Literal, Optional
from pydantic import BaseModel, Field

PathCost = Literal["uniform", "weighted"]

# Product path policy. "uniform" is breadth-first (fewest steps),
# "weighted" is Dijkstra with sqrt(2) diagonals (geometrically shortest).
DEFAULT_PATH_COST: PathCost = "weighted"


class BattleConfig(BaseModel):
    """Battle configuration schema."""
    field_width: int = Field(default=27, gt=0)
    field_height: int = Field(default=21, gt=0)
    max_units_per_type: int = Field(default=11, ge=0)
    path_cost: PathCost = DEFAULT_PATH_COST
    max_rounds: Optional[int] = Field(default=None, gt=0)  # None = no stalemate guard
    deploy_columns: int = Field(default=3, gt=0)
