from pydantic import BaseModel


class Place(BaseModel):
    """A single place returned by a places source."""

    name: str
    category: str
    rating: str
    address: str
    phone: str
    website: str
    hours: str
