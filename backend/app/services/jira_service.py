"""
Jira integration service
"""

import httpx
from typing import Any, Dict, List, Optional

from app.core.config import Settings, settings
from app.core.exceptions import UpstreamError
from app.schemas.jira_schemas import JiraConfig, JiraField, JiraSyncResult

# Story points field on most Jira Cloud sites
DEFAULT_STORY_POINTS_FIELD = "customfield_10016"


class JiraService:
    """Jira REST API v3 client"""

    def __init__(self, config: JiraConfig, timeout: int = 30,
                 default_field: str = DEFAULT_STORY_POINTS_FIELD,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.base_url = config.base_url.rstrip('/')
        self.timeout = timeout
        self.default_field = default_field
        self.transport = transport

    async def _request(self, endpoint: str, method: str = "GET", body: Optional[dict] = None) -> Any:
        """Send an authenticated request, raising UpstreamError on any failure"""
        url = f"{self.base_url}/rest/api/3{endpoint}"
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json"
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                auth=(self.config.email, self.config.api_token),
                transport=self.transport
            ) as client:
                response = await client.request(method, url, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Jira API request failed: {e}") from e

        if response.is_error:
            raise UpstreamError(f"Jira API Error ({response.status_code}): {response.text}")

        # PUT /issue answers 204 without a body
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def get_issue(self, issue_key: str) -> Dict[str, Any]:
        try:
            return await self._request(f"/issue/{issue_key}")
        except UpstreamError as e:
            raise UpstreamError(f"Failed to fetch issue {issue_key}: {e}") from e

    async def update_story_points(self, story_id: str, story_points: int,
                                  field_id: Optional[str] = None) -> JiraSyncResult:
        """Write the estimate into the story points field of an issue"""
        field = field_id or self.default_field
        try:
            # make sure the issue exists before writing to it
            await self.get_issue(story_id)
            result = await self._request(
                f"/issue/{story_id}",
                method="PUT",
                body={"fields": {field: story_points}}
            )
        except UpstreamError as e:
            raise UpstreamError(f"Failed to update story points for {story_id}: {e}") from e

        return JiraSyncResult(
            success=True,
            issue_key=story_id,
            story_points=story_points,
            field_id=field,
            message=f"Successfully updated story points for {story_id}",
            jira_response=result
        )

    async def get_project(self, project_key: Optional[str] = None) -> Dict[str, Any]:
        key = project_key or self.config.project_key
        if not key:
            raise ValueError("Project key is required")
        try:
            return await self._request(f"/project/{key}")
        except UpstreamError as e:
            raise UpstreamError(f"Failed to fetch project {key}: {e}") from e

    async def get_custom_fields(self) -> List[JiraField]:
        """Custom fields that look like story points"""
        try:
            fields = await self._request("/field")
        except UpstreamError as e:
            raise UpstreamError(f"Failed to fetch custom fields: {e}") from e

        return [
            JiraField(
                id=field["id"],
                name=field["name"],
                custom=True,
                schema_type=(field.get("schema") or {}).get("type")
            )
            for field in fields or []
            if field.get("custom") and "story" in field.get("name", "").lower()
        ]

    async def test_connection(self) -> bool:
        try:
            await self._request("/myself")
        except UpstreamError as e:
            raise UpstreamError(f"Jira connection test failed: {e}") from e
        return True


def create_jira_service_from_settings(app_settings: Settings = settings) -> Optional[JiraService]:
    """Build the client from settings, None when Jira is not configured"""
    if not (app_settings.JIRA_BASE_URL and app_settings.JIRA_EMAIL and app_settings.JIRA_API_TOKEN):
        return None

    try:
        config = JiraConfig(
            base_url=app_settings.JIRA_BASE_URL,
            email=app_settings.JIRA_EMAIL,
            api_token=app_settings.JIRA_API_TOKEN,
            project_key=app_settings.JIRA_PROJECT_KEY
        )
    except ValueError as e:
        print(f"⚠️ Invalid Jira configuration: {e}")
        return None

    return JiraService(
        config,
        timeout=app_settings.JIRA_TIMEOUT,
        default_field=app_settings.JIRA_STORY_POINTS_FIELD
    )


def get_jira_service() -> Optional[JiraService]:
    """FastAPI dependency, overridden in tests"""
    return create_jira_service_from_settings(settings)
