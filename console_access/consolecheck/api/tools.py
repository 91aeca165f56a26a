"""Tool-invocation endpoints wrapping the validator."""

from __future__ import annotations

import json
import logging
from typing import Any, Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from consolecheck.deps import get_options
from consolecheck.options import Options
from consolecheck.template.loader import TemplateDecodeError
from consolecheck.validator import DEFAULT_REGION, ValidationResult, validate_text

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tools"])

VALIDATE_TOOL = "validate-cloudformation"


class ToolDefinition(BaseModel):
    name: str
    description: str
    inputSchema: dict[str, Any]


class ToolListResponse(BaseModel):
    tools: list[ToolDefinition] = Field(default_factory=list)


class ToolCallRequest(BaseModel):
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallResponse(BaseModel):
    content: list[TextContent] = Field(default_factory=list)
    isError: bool = False


class ValidateArguments(BaseModel):
    """Arguments of the validate-cloudformation tool."""

    template: str = Field(..., description="CloudFormation template as JSON or YAML text")
    region: str | None = Field(None, description="AWS region (default: us-east-1)")


TOOLS = [
    ToolDefinition(
        name=VALIDATE_TOOL,
        description=(
            "Validates a CloudFormation template for AWS Console Private Access requirements"
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "template": {
                    "type": "string",
                    "description": "CloudFormation template as JSON string",
                },
                "region": {
                    "type": "string",
                    "description": "AWS region (default: us-east-1)",
                    "default": DEFAULT_REGION,
                },
            },
            "required": ["template"],
        },
    ),
]


def _text_result(payload: Any, is_error: bool = False) -> ToolCallResponse:
    text = payload if isinstance(payload, str) else json.dumps(payload, indent=2, ensure_ascii=False)
    return ToolCallResponse(content=[TextContent(text=text)], isError=is_error)


@router.get("/tools", response_model=ToolListResponse)
async def list_tools() -> ToolListResponse:
    """List the tools this server exposes."""
    return ToolListResponse(tools=TOOLS)


@router.post("/tools/call", response_model=ToolCallResponse)
async def call_tool(
    body: ToolCallRequest,
    options: Options = Depends(get_options),
) -> ToolCallResponse:
    """Invoke a tool by name."""
    if body.name != VALIDATE_TOOL:
        logger.warning("Unknown tool requested: %s", body.name)
        return _text_result(f"Unknown tool: {body.name}", is_error=True)

    try:
        args = ValidateArguments.model_validate(body.arguments)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        )

    region = args.region or options.default_region
    try:
        result = validate_text(args.template, region)
    except TemplateDecodeError as e:
        logger.info("Template decode failed: %s", e)
        return _text_result(
            {"valid": False, "checks": [], "summary": f"Error parsing template: {e}"},
            is_error=True,
        )

    return _text_result(result.to_dict())


@router.post("/validate", response_model=ValidationResult, response_model_exclude_none=True)
async def validate_template(
    body: ValidateArguments,
    options: Options = Depends(get_options),
) -> ValidationResult:
    """Validate a template and return the structured result."""
    try:
        return validate_text(body.template, body.region or options.default_region)
    except TemplateDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Error parsing template: {e}")
