"""Base utilities for AI agents.

This module provides common utilities for creating and running AI agents
using the OpenAI Agents SDK.
"""

import logging
import os
from typing import Any, Callable, Optional

# Disable tracing to avoid noisy 503 errors from telemetry
os.environ.setdefault("OPENAI_AGENTS_DISABLE_TRACING", "1")

from agents import Agent, AgentOutputSchema, Runner

logger = logging.getLogger(__name__)

# Default model to use for agents
DEFAULT_MODEL = "gpt-4o"


def get_model(override: Optional[str] = None) -> str:
    """Get the model to use for agents.

    Checks the explicit override, then the OPENAI_MODEL environment
    variable, then falls back to the default.

    Returns:
        Model name string.
    """
    return override or os.environ.get("OPENAI_MODEL", DEFAULT_MODEL)


def get_api_key(override: Optional[str] = None) -> Optional[str]:
    """Get the OpenAI API key.

    Returns:
        API key string or None if not configured.
    """
    return override or os.environ.get("OPENAI_API_KEY") or None


def create_agent(
    name: str,
    instructions: str,
    tools: Optional[list[Callable[..., Any]]] = None,
    model: Optional[str] = None,
    output_type: Optional[type] = None,
) -> Agent:
    """Create an AI agent with the specified configuration.

    Args:
        name: Name of the agent.
        instructions: System instructions for the agent.
        tools: Optional list of tool functions the agent can use.
        model: Optional model override. Uses default if not specified.
        output_type: Optional pydantic model for structured output.

    Returns:
        Configured Agent instance.
    """
    kwargs: dict[str, Any] = {}
    if output_type is not None:
        kwargs["output_type"] = AgentOutputSchema(output_type, strict_json_schema=False)

    return Agent(
        name=name,
        instructions=instructions,
        tools=tools or [],
        model=get_model(model),
        **kwargs,
    )


def run_agent_sync(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """Run an agent synchronously and return its final output.

    Args:
        agent: The agent to run.
        message: User message to send to the agent.
        context: Optional context dictionary to pass to the agent.

    Returns:
        Agent's final output (a string, or the structured output type).
    """
    logger.info("Running agent %s (model %s)", agent.name, agent.model)
    result = Runner.run_sync(agent, message, context=context)
    return result.final_output


async def run_agent_async(
    agent: Agent,
    message: str,
    context: Optional[dict[str, Any]] = None,
) -> Any:
    """Run an agent asynchronously and return its final output.

    Args:
        agent: The agent to run.
        message: User message to send to the agent.
        context: Optional context dictionary to pass to the agent.

    Returns:
        Agent's final output (a string, or the structured output type).
    """
    logger.info("Running agent %s (model %s)", agent.name, agent.model)
    result = await Runner.run(agent, message, context=context)
    return result.final_output
