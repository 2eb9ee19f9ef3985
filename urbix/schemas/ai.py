from typing import Optional

from pydantic import BaseModel, model_validator


class AnalyzeRequest(BaseModel):
    description: Optional[str] = None
    image: Optional[str] = None

    @model_validator(mode='after')
    def _needs_input(self) -> 'AnalyzeRequest':
        if not (self.description or '').strip() and not self.image:
            raise ValueError('description or image is required')
        return self
