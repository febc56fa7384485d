from pydantic import BaseModel
from typing import Optional

class Token(BaseModel):
    access_token: str
    token_type: str
    admin: dict

class TokenData(BaseModel):
    email: Optional[str] = None
    rol: Optional[str] = None
