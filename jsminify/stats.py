from typing import List

from pydantic import BaseModel, Field, TypeAdapter


class MinificationStats(BaseModel):
    input_file: str
    output_file: str
    original_size: int = Field(ge=0)
    minified_size: int = Field(ge=0)
    reduction_percentage: float
    process_time_ms: float

    @classmethod
    def measure(cls, input_file, output_file, original, minified, elapsed):
        """Build stats from the two texts and the elapsed time in seconds."""
        original_size = len(original.encode('utf-8'))
        minified_size = len(minified.encode('utf-8'))
        if original_size:
            reduction = (original_size - minified_size) / original_size * 100
        else:
            reduction = 0.0
        return cls(
            input_file=str(input_file),
            output_file=str(output_file),
            original_size=original_size,
            minified_size=minified_size,
            reduction_percentage=reduction,
            process_time_ms=elapsed * 1000.0,
        )


StatsList = TypeAdapter(List[MinificationStats])
