"""
Resume agent proxy.

Forwards chat turns to the OpenAI Responses API (with a server-side
conversation for continuity) and normalizes the heterogeneous output items
into a single ``AgentTurn``: accumulated reply text, an optional generated
image as a data URL, and which tool the agent used.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from openai import OpenAI, OpenAIError

from resume_agent.core.config import get_settings
from resume_agent.core.errors import ProviderError
from resume_agent.core.image_payload import extract_file_id, to_image_data_url
from resume_agent.core.logging import get_logger
from resume_agent.data.chapters import build_resume_text, get_all_projects

logger = get_logger(__name__)

OWNER_NAME = "Brendan"

FALLBACK_REPLY = (
    f"I'm ready to tell you about {OWNER_NAME}'s experience. What would you like to know?"
)

AGENT_TOOLS: list[dict] = [
    {"type": "web_search"},
    {"type": "image_generation"},
    {"type": "code_interpreter", "container": {"type": "auto"}},
]

IMAGE_TOOLS: list[dict] = [{"type": "image_generation"}]

TEXT_CHUNK_TYPES = {"text", "output_text"}
FILE_CHUNK_TYPES = {"tool_file"}

# Output item type -> tool name reported to the client
TOOL_CALL_TYPES = {
    "image_generation_call": "image_generation",
    "web_search_call": "web_search",
    "code_interpreter_call": "code_interpreter",
}


@dataclass
class AgentTurn:
    """Normalized agent reply."""
    conversation_id: str | None
    content: str
    image_url: str | None = None
    tool_used: str | None = None


def _get_client() -> OpenAI:
    """Get OpenAI client instance."""
    settings = get_settings()
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def _to_dict(value: Any) -> Any:
    """SDK models become plain dicts; everything else passes through."""
    if hasattr(value, "model_dump"):
        return value.model_dump()
    return value


def _project_index() -> str:
    projects = get_all_projects()
    if not projects:
        return "- No project cards are currently listed in the chapter data."
    return "\n".join(
        f"- {project.name} ({chapter.title})\n"
        f"  Live: {project.url}\n"
        f"  Description: {project.description}\n"
        f"  Status: {project.status or 'Unspecified'}"
        for chapter, project in projects
    )


@lru_cache(maxsize=1)
def build_agent_instructions() -> str:
    """
    System instructions for the resume agent.

    Built from chapter data once per process; chapters are static.
    """
    return f"""You are an AI agent representing {OWNER_NAME}'s professional experience and dual-track operating profile.
You are embedded in an interactive resume website that {OWNER_NAME} built to showcase real, shipped work.

## Your Role
- Answer questions about {OWNER_NAME}'s background, skills, project work, and operating approach
- Be professional, warm, and genuinely enthusiastic about his work
- Speak in third person about {OWNER_NAME} (not first person)
- Keep the narrative additive: tech investing + applied AI (avoid framing it as a career switch)
- Be specific with technologies, architecture choices, and project links; avoid inventing confidential metrics
- When asked "why should we hire {OWNER_NAME}", make a compelling case using concrete evidence from projects and operating methods

## Flagship Project Evidence
{_project_index()}

## Timeline Content
{build_resume_text()}

## Tool Usage Guidelines
- **Image Generation**: When a user asks to "visualize" something, or asks for an illustration
  of a career chapter, or when it would enhance the conversation, generate an image using
  the image generation tool. Use cinematic, editorial, photorealistic prompts.
- **Web Search**: When asked about current events, recent developments in AI/tech, or
  anything that might need up-to-date information, use web search.
- **Code Interpreter**: When asked to demonstrate technical skills, run calculations,
  or show code examples, use the code interpreter.

## Personality
- Knowledgeable and articulate, but not arrogant
- Shows genuine passion for the intersection of finance and AI
- Can discuss both high-level strategy and low-level implementation details
- Acknowledges areas of growth honestly while emphasizing learning velocity

## Important Context
When asked about projects, ONLY use projects listed in chapter data.
Do not invent repo URLs. If GitHub links are not explicitly provided, say they are not listed in the current profile data."""


def download_image(client: OpenAI, file_id: str) -> str:
    """Download a generated file and return it as an image data URL."""
    payload = client.files.content(file_id)
    return to_image_data_url(payload)


def _resolve_file_chunk(client: OpenAI, chunk: Any) -> str | None:
    file_id = extract_file_id(chunk)
    if not file_id:
        keys = sorted(chunk.keys()) if isinstance(chunk, dict) else []
        logger.warning(
            "tool_file chunk missing file id",
            extra={"extra_data": {"chunk_keys": keys}},
        )
        return None
    try:
        return download_image(client, file_id)
    except (OpenAIError, ProviderError) as e:
        logger.error(f"Failed to download generated image {file_id}: {e}")
        return None


def _decode_inline_image(result: Any) -> str | None:
    try:
        return to_image_data_url(result)
    except ProviderError as e:
        logger.error(f"Failed to decode generated image: {e}")
        return None


def normalize_response(
    client: OpenAI,
    response: Any,
    conversation_id: str | None = None,
) -> AgentTurn:
    """
    Flatten provider output items into an AgentTurn.

    Text comes from plain string chunks and ``text``/``output_text`` chunks.
    Images come either inline (``image_generation_call.result``) or as
    ``tool_file`` chunks that must be downloaded by file id.
    """
    data = _to_dict(response) or {}
    outputs = data.get("output") or data.get("outputs") or []

    conversation = data.get("conversation")
    if isinstance(conversation, dict):
        conversation = conversation.get("id")
    resolved_id = conversation or data.get("conversation_id") or conversation_id

    text_parts: list[str] = []
    image_url: str | None = None
    tool_used: str | None = None

    for raw_output in outputs:
        output = _to_dict(raw_output)
        if not isinstance(output, dict):
            continue

        item_type = output.get("type")
        if item_type in TOOL_CALL_TYPES and tool_used != "image_generation":
            tool_used = TOOL_CALL_TYPES[item_type]

        if item_type == "image_generation_call" and output.get("result"):
            image_url = _decode_inline_image(output["result"]) or image_url
            continue

        content = output.get("content")
        if content is None:
            continue

        for chunk in content if isinstance(content, list) else [content]:
            chunk = _to_dict(chunk)
            if isinstance(chunk, str):
                text_parts.append(chunk)
            elif not isinstance(chunk, dict):
                continue
            elif chunk.get("type") in TEXT_CHUNK_TYPES and chunk.get("text"):
                text_parts.append(chunk["text"])
            elif chunk.get("type") in FILE_CHUNK_TYPES:
                tool_used = "image_generation"
                image_url = _resolve_file_chunk(client, chunk) or image_url

    return AgentTurn(
        conversation_id=resolved_id,
        content="".join(text_parts),
        image_url=image_url,
        tool_used=tool_used,
    )


def start_conversation(message: str) -> AgentTurn:
    """
    Start a new stored conversation with the resume agent.

    Raises:
        ProviderError: If the provider call fails
    """
    settings = get_settings()
    client = _get_client()

    try:
        conversation = client.conversations.create()
        response = client.responses.create(
            model=settings.AGENT_MODEL,
            instructions=build_agent_instructions(),
            tools=AGENT_TOOLS,
            input=message,
            conversation=conversation.id,
            store=True,
        )
    except OpenAIError as e:
        logger.error(f"Failed to start conversation: {e}")
        raise ProviderError(f"Agent request failed: {e}", operation="start_conversation", cause=e) from e

    logger.info(
        f"Started conversation {conversation.id}",
        extra={"extra_data": {"conversation_id": conversation.id}},
    )
    return normalize_response(client, response, conversation_id=conversation.id)


def continue_conversation(conversation_id: str, message: str) -> AgentTurn:
    """
    Append a user turn to an existing conversation.

    Raises:
        ProviderError: If the provider call fails
    """
    settings = get_settings()
    client = _get_client()

    try:
        response = client.responses.create(
            model=settings.AGENT_MODEL,
            instructions=build_agent_instructions(),
            tools=AGENT_TOOLS,
            input=message,
            conversation=conversation_id,
            store=True,
        )
    except OpenAIError as e:
        logger.error(f"Failed to continue conversation {conversation_id}: {e}")
        raise ProviderError(
            f"Agent request failed: {e}", operation="continue_conversation", cause=e
        ) from e

    return normalize_response(client, response, conversation_id=conversation_id)


def generate_image(prompt: str) -> AgentTurn:
    """
    Ask the agent to render an image for ``prompt`` without storing the exchange.

    Raises:
        ProviderError: If the provider call fails
    """
    settings = get_settings()
    client = _get_client()

    try:
        response = client.responses.create(
            model=settings.AGENT_MODEL,
            instructions=build_agent_instructions(),
            tools=IMAGE_TOOLS,
            tool_choice={"type": "image_generation"},
            input=(
                "Please generate an image with this exact prompt "
                f'(use your image generation tool): "{prompt}"'
            ),
            store=False,
        )
    except OpenAIError as e:
        logger.error(f"Image generation failed: {e}")
        raise ProviderError(f"Image generation failed: {e}", operation="generate_image", cause=e) from e

    return normalize_response(client, response)
