"""Tests for the MCP server wiring - tool listing and routing through the invoker."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests
from mcp.types import TextContent

from learnify_mcp.config.settings import ApiSettings
from learnify_mcp.server import LearnifyMCPServer


@pytest.fixture
def server():
    return LearnifyMCPServer(ApiSettings(base_url="http://learnify.test"))


def fake_response(data, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.url = "http://learnify.test"
    response.json.return_value = {"success": True, "message": "", "data": data}
    return response


class TestListTools:
    """Test tool listing."""

    def test_lists_every_tool(self, server):
        tools = server.list_tools()

        assert len(tools) == 75
        assert len({tool.name for tool in tools}) == 75

    def test_tool_schema(self, server):
        tools = {tool.name: tool for tool in server.list_tools()}
        get_course = tools["get_course"]

        assert get_course.description == "Get course details by ID"
        assert get_course.inputSchema == {
            "type": "object",
            "properties": {"course_id": {"description": "The course ID", "type": "integer"}},
            "required": ["course_id"],
        }

    def test_no_schema_exposes_cancellation(self, server):
        for tool in server.list_tools():
            assert "cancellation_token" not in tool.inputSchema["properties"]

    def test_structured_parameter_advertised_as_string(self, server):
        tools = {tool.name: tool for tool in server.list_tools()}
        schema = tools["create_multiple_answers"].inputSchema

        assert schema["properties"]["answers"]["type"] == "string"
        assert schema["required"] == ["question_id"]


class TestCallTool:
    """Test routing calls through the invoker."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, server):
        content = await server.call_tool("Missing", {})

        assert isinstance(content[0], TextContent)
        assert json.loads(content[0].text) == {"success": False, "message": "Tool 'Missing' not found"}

    @pytest.mark.asyncio
    async def test_call_routes_to_api(self, server):
        with patch.object(requests.Session, "request", return_value=fake_response({"id": 3})) as request:
            content = await server.call_tool("get_lesson", {"lesson_id": "3"})

        result = json.loads(content[0].text)
        assert result["success"] is True
        assert request.call_args.args == ("GET", "http://learnify.test/api/lessons/3")

    @pytest.mark.asyncio
    async def test_structured_argument_from_json_text(self, server):
        answers = json.dumps([{"answerText": "Yes", "isCorrect": True, "orderIndex": 1}])

        with patch.object(requests.Session, "request", return_value=fake_response({"processedCount": 1})) as request:
            content = await server.call_tool("create_multiple_answers", {"question_id": 2, "answers": answers})

        assert json.loads(content[0].text)["success"] is True
        assert request.call_args.kwargs["json"]["answers"] == [
            {"answerText": "Yes", "isCorrect": True, "orderIndex": 1},
        ]

    @pytest.mark.asyncio
    async def test_missing_list_argument(self, server):
        with patch.object(requests.Session, "request") as request:
            content = await server.call_tool("create_multiple_answers", {"question_id": 2})

        assert json.loads(content[0].text) == {
            "success": False,
            "message": "Invalid or empty answers data provided",
        }
        request.assert_not_called()

    @pytest.mark.asyncio
    async def test_none_arguments(self, server):
        with patch.object(requests.Session, "request", return_value=fake_response([])):
            content = await server.call_tool("get_courses", None)

        assert json.loads(content[0].text)["success"] is True
