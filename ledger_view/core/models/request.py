# ledger_view/core/models/request.py

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from ledger_view.core.config.settings import settings


class LoadRequest(BaseModel):
    """
    Represents the input payload for (re)loading the canonical transaction set.
    """
    count: Optional[int] = Field(
        None,
        ge=1,
        le=settings.MAX_LOAD_COUNT,
        description="Number of transactions to load. Defaults to DEFAULT_LOAD_COUNT."
    )

    model_config = ConfigDict(
        json_schema_extra = {
            "example": {"count": 10000}
        },
        extra='ignore'
    )
