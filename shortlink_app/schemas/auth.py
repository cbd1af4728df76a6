from pydantic import BaseModel


class SessionResponse(BaseModel):
    """Returned by login and account creation; the token is also set as a cookie"""
    token: str
    expires_in: int
