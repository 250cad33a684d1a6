from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Acknowledgement returned by write endpoints."""
    message: str
