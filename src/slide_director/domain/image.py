from pydantic import BaseModel


class ImageEntry(BaseModel):
    """An image asset that slides may reference by URL."""

    name: str
    reference_url: str
