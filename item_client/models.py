from pydantic import BaseModel, ConfigDict, StrictStr


class ItemDetail(BaseModel):
    """Item record returned by GET /items/{id}. Unknown fields are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    data_field: StrictStr
    correct_field_name: StrictStr
