from pydantic import BaseModel

class MessageResponse(BaseModel):
    message: str

class MessageEnvelope(BaseModel):
    data: MessageResponse
