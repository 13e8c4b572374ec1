"""Wire models shared by every Learnify API feature."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel):
    """Envelope every Learnify API endpoint wraps its payload in."""

    model_config = ConfigDict(extra="ignore")

    data: Any = None
    message: str = ""
    success: bool = True
    errors: Optional[List[str]] = None

