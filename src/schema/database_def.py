from pydantic import BaseModel


class DatabaseInfo(BaseModel):
    """A database visible on a server connection."""

    name: str

    model_config = {"frozen": True}
