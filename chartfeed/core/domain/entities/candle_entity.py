# core/domain/entities/candle_entity.py
from pydantic import BaseModel, ConfigDict, Field, model_validator


class CandleEntity(BaseModel):
    """
    One OHLCV bucket as handed to the chart.

    `time` is the bucket open time in UTC epoch seconds.
    Construction fails (pydantic ValidationError) unless
    low <= min(open, close), high >= max(open, close) and every field is finite.
    """

    time: int = Field(..., ge=0)
    open: float = Field(..., gt=0, allow_inf_nan=False)
    high: float = Field(..., gt=0, allow_inf_nan=False)
    low: float = Field(..., gt=0, allow_inf_nan=False)
    close: float = Field(..., gt=0, allow_inf_nan=False)
    volume: float = Field(..., ge=0, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="after")
    def _check_ohlc(self) -> "CandleEntity":
        if self.high < self.low:
            raise ValueError("high must be >= low")
        if self.high < max(self.open, self.close):
            raise ValueError("high must be >= max(open, close)")
        if self.low > min(self.open, self.close):
            raise ValueError("low must be <= min(open, close)")
        return self
