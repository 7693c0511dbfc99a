from pydantic import BaseModel, ConfigDict


class Branch(BaseModel):
    """A branch office. `id` is assigned by the store and never changes."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    address: str
    phone: str
