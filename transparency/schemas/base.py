# transparency/schemas/base.py
from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict

# Form inputs arrive either as numbers or as raw text field values
FormNumber = Union[float, str, None]

class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

class TimestampMixin(BaseModel):
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
