"""
Jira API routes
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from typing import Optional

from app.core.exceptions import UpstreamError
from app.schemas.jira_schemas import JiraConnectionStatus, JiraFieldsResponse
from app.services.jira_service import JiraService, get_jira_service

router = APIRouter()

NOT_CONFIGURED = "Jira not configured. Set JIRA_BASE_URL, JIRA_EMAIL, and JIRA_API_TOKEN environment variables."

@router.get("/test", response_model=JiraConnectionStatus)
async def test_jira_connection(jira_service: Optional[JiraService] = Depends(get_jira_service)):
    """Check the Jira credentials"""
    if jira_service is None:
        return JSONResponse(status_code=400, content={"connected": False, "message": NOT_CONFIGURED})

    try:
        connected = await jira_service.test_connection()
    except UpstreamError as e:
        return JSONResponse(status_code=e.status_code, content={"connected": False, "message": e.message})

    return JiraConnectionStatus(connected=connected, message="Jira connection successful")

@router.get("/fields", response_model=JiraFieldsResponse)
async def get_jira_fields(jira_service: Optional[JiraService] = Depends(get_jira_service)):
    """Custom fields that may hold story points"""
    if jira_service is None:
        return JSONResponse(status_code=400, content={"fields": [], "message": NOT_CONFIGURED})

    try:
        fields = await jira_service.get_custom_fields()
    except UpstreamError as e:
        return JSONResponse(status_code=e.status_code, content={"fields": [], "message": e.message})

    return JiraFieldsResponse(fields=fields, message="Custom fields retrieved successfully")
