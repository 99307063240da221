# core/domain/entities/trendline_entity.py
import math
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt

# Per-instance chart handle attached by the renderer; never persisted.
TRANSIENT_FIELDS = frozenset({"series"})


class TrendPoint(BaseModel):
    # Strict: strings and booleans are not coordinates.
    time: Union[StrictInt, StrictFloat]
    price: Union[StrictInt, StrictFloat]

    model_config = ConfigDict(extra="allow")


class TrendlineEntity(BaseModel):
    """
    A user-drawn two-point line over the price series.

    Presentation fields (color, width, id, ...) are kept as extras so a
    save/load cycle returns them untouched.
    """

    start: TrendPoint
    end: TrendPoint

    model_config = ConfigDict(extra="allow")

    def is_valid(self) -> bool:
        values = (self.start.time, self.start.price, self.end.time, self.end.price)
        if not all(math.isfinite(v) for v in values):
            return False
        return (
            self.start.time < self.end.time
            and self.start.price > 0
            and self.end.price > 0
        )

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude=set(TRANSIENT_FIELDS))
