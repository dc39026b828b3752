"""
Jira schemas
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any

class JiraConfig(BaseModel):
    """Jira connection settings"""
    base_url: str = Field(..., pattern=r"^https?://", description="e.g. https://acme.atlassian.net")
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$", description="Account email")
    api_token: str = Field(..., min_length=1, description="API token")
    project_key: Optional[str] = Field(None, description="Default project key")

class JiraField(BaseModel):
    """Custom field that may hold story points"""
    id: str
    name: str
    custom: bool = True
    schema_type: Optional[str] = None

class JiraSyncResult(BaseModel):
    """Result of a story points update"""
    success: bool
    issue_key: str
    story_points: int
    field_id: str
    message: str
    jira_response: Optional[Dict[str, Any]] = None

class JiraConnectionStatus(BaseModel):
    """Connectivity probe"""
    connected: bool
    message: str

class JiraFieldsResponse(BaseModel):
    """Candidate story points fields"""
    fields: List[JiraField]
    message: str
