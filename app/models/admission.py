from pydantic import BaseModel, Field
from typing import Optional


class AdmissionState(BaseModel):
    admitted: bool = False
    identifier: Optional[str] = None


class AdminLogin(BaseModel):
    identifier: str = Field(..., min_length=1)
    secret: str = Field(..., min_length=1)


class AdmissionStatus(BaseModel):
    admitted: bool
    identifier: Optional[str] = None
    message: Optional[str] = None
