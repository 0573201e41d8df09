from pydantic import BaseModel
from typing import Any, List, Optional

class Attachment(BaseModel):
    name: str
    url: str = ""  # data: URIs are decoded, anything else becomes an empty placeholder

class TaskRequest(BaseModel):
    email: str
    secret: str
    task: str
    round: int
    nonce: str
    brief: str
    checks: List[Any] = []
    evaluation_url: Optional[str] = None
    attachments: List[Attachment] = []

class ProvisioningResult(BaseModel):
    email: str
    task: str
    round: int
    nonce: str
    repo_url: str
    commit_sha: str
    pages_url: str

class DeliveryOutcome(BaseModel):
    url: str
    attempts: int = 0
    delivered: bool = False
    last_error: Optional[str] = None

class TaskResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    data: Optional[ProvisioningResult] = None
