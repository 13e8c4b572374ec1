"""Tests for the course and category tools against a mocked Learnify API."""

import json

import pytest

from learnify_mcp.features.categories.services import CategoryApiService
from learnify_mcp.features.courses.services import CourseApiService

COURSE = {
    "id": 7, "title": "Python 101", "description": "Long text", "shortDescription": "Intro",
    "instructorId": 2, "instructorName": "Ada", "price": 49.0, "discountPrice": None,
    "level": 1, "language": "English", "isPublished": True, "isFeatured": False,
    "createdAt": "2024-01-01T00:00:00Z", "prerequisites": "None",
}


@pytest.fixture
def courses(session, settings):
    return CourseApiService(session, settings)


@pytest.fixture
def categories(session, settings):
    return CategoryApiService(session, settings)


class TestCourseTools:
    """Test course tools."""

    @pytest.mark.asyncio
    async def test_get_courses_sends_filters(self, courses, respond, sent):
        respond((200, {"items": [], "totalCount": 0}))

        result = json.loads(await courses.get_courses(category_id=3, is_published=False, page=2))

        assert result["success"] is True
        assert result["message"] == "Courses retrieved successfully"
        method, url, params, _ = sent()
        assert (method, url) == ("GET", "http://learnify.test/api/courses")
        assert params == {"categoryId": 3, "isPublished": "false", "page": 2, "pageSize": 10}

    @pytest.mark.asyncio
    async def test_get_course_not_found(self, courses, respond):
        respond((404, None))

        result = json.loads(await courses.get_course(99))

        assert result == {"success": False, "message": "Course with ID 99 not found"}

    @pytest.mark.asyncio
    async def test_create_course_body(self, courses, respond, sent):
        respond((200, COURSE))

        result = json.loads(await courses.create_course(
            title="Python 101", description="Long text", instructor_id=2, category_id=3,
            price=49.0, duration_hours=10, level=1, language="English",
        ))

        assert result["data"]["id"] == 7
        method, url, _, body = sent()
        assert (method, url) == ("POST", "http://learnify.test/api/courses")
        assert body["title"] == "Python 101"
        assert body["instructorId"] == 2
        assert body["durationHours"] == 10
        assert body["level"] == 1
        assert body["isPublished"] is False

    @pytest.mark.asyncio
    async def test_create_course_rejects_unknown_level(self, courses, session):
        with pytest.raises(ValueError):
            await courses.create_course(
                title="t", description="d", instructor_id=1, category_id=1,
                price=1.0, duration_hours=1, level=9, language="en",
            )

        session.request.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name, action", [
        ("publish_course", "publish"),
        ("unpublish_course", "unpublish"),
        ("feature_course", "feature"),
        ("unfeature_course", "unfeature"),
    ])
    async def test_course_actions(self, courses, respond, sent, tool_name, action):
        respond((200, COURSE))

        result = json.loads(await getattr(courses, tool_name)(7))

        assert result["success"] is True
        assert sent()[:2] == ("PUT", f"http://learnify.test/api/courses/7/{action}")

    @pytest.mark.asyncio
    async def test_delete_course(self, courses, respond):
        respond((204, None))

        result = json.loads(await courses.delete_course(7))

        assert result == {"success": True, "message": "Course deleted successfully"}

    @pytest.mark.asyncio
    async def test_course_exists(self, courses, respond):
        respond((200, COURSE), (404, None))

        found = json.loads(await courses.check_course_exists(7))
        missing = json.loads(await courses.check_course_exists(8))

        assert found["exists"] is True and found["message"] == "Course exists"
        assert missing["exists"] is False and missing["message"] == "Course does not exist"

    @pytest.mark.asyncio
    async def test_course_summary_keeps_basic_fields(self, courses, respond):
        respond((200, COURSE))

        data = json.loads(await courses.get_course_summary(7))["data"]

        assert data["shortDescription"] == "Intro"
        assert "description" not in data
        assert "prerequisites" not in data

    @pytest.mark.asyncio
    async def test_api_failure_becomes_error_payload(self, courses, respond):
        respond((500, None))

        result = json.loads(await courses.get_course_stats(7))

        assert result["success"] is False


class TestCategoryTools:
    """Test category tools."""

    @pytest.mark.asyncio
    async def test_get_root_categories(self, categories, respond, sent):
        respond((200, []))

        await categories.get_root_categories(active_only=True)

        _, url, params, _ = sent()
        assert url == "http://learnify.test/api/categories"
        assert params == {"rootOnly": "true", "isActive": "true", "page": 1, "pageSize": 10}

    @pytest.mark.asyncio
    async def test_category_tree(self, categories, respond, sent):
        respond((200, [{"id": 1, "children": []}]))

        result = json.loads(await categories.get_category_tree())

        assert result["message"] == "Category tree retrieved successfully"
        assert sent()[1:3] == ("http://learnify.test/api/categories/tree", {})

    @pytest.mark.asyncio
    async def test_move_category_to_root(self, categories, respond, sent):
        respond((200, {"id": 4, "parentCategoryId": None}))

        result = json.loads(await categories.move_category(4))

        assert result["message"] == "Category moved successfully"
        method, url, _, body = sent()
        assert (method, url) == ("PUT", "http://learnify.test/api/categories/4/move")
        assert body == {"newParentCategoryId": None}

    @pytest.mark.asyncio
    async def test_create_category_defaults_active(self, categories, respond, sent):
        respond((200, {"id": 5}))

        await categories.create_category(name="Data", description="Data science")

        assert sent()[3] == {
            "name": "Data",
            "description": "Data science",
            "iconUrl": None,
            "parentCategoryId": None,
            "isActive": True,
        }

    @pytest.mark.asyncio
    async def test_subcategories_query(self, categories, respond, sent):
        respond((200, []))

        await categories.get_subcategories(3, active_only=False, page=1, page_size=5)

        _, url, params, _ = sent()
        assert url == "http://learnify.test/api/categories/3/subcategories"
        assert params == {"activeOnly": "false", "page": 1, "pageSize": 5}

    @pytest.mark.asyncio
    async def test_deactivate_missing_category(self, categories, respond):
        respond((404, None))

        result = json.loads(await categories.deactivate_category(42))

        assert result == {"success": False, "message": "Category with ID 42 not found"}

    @pytest.mark.asyncio
    async def test_category_summary(self, categories, respond):
        respond((200, {"id": 1, "name": "Dev", "courseCount": 3, "updatedAt": "x"}))

        data = json.loads(await categories.get_category_summary(1))["data"]

        assert data["courseCount"] == 3
        assert "updatedAt" not in data
