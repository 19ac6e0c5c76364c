"""Chat completion access through the Microsoft Agent Framework (MAF).

The narrative generator is the only component that talks to a language
model. It depends on the small :class:`ChatClient` protocol so tests can hand
it a scripted double, while :class:`MAFChatClient` adapts the framework's
provider-specific chat clients at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module
from typing import Any, Iterable, List, Protocol

from agent_framework import ChatMessage as MAFChatMessage, Role

from .config import ModelSettings


def _coerce_role(role: str) -> Role:
    try:
        return Role(role)
    except ValueError as exc:
        raise ValueError(f"Unsupported role for MAF chat message: {role}") from exc


@dataclass(slots=True)
class ChatMessage:
    """Role/content pair exchanged with the model."""

    role: str
    content: str


class ChatClient(Protocol):
    async def complete(self, messages: Iterable[ChatMessage]) -> ChatMessage:
        """Return the assistant reply for ``messages``."""
        ...


class MAFIntegrationError(RuntimeError):
    """Raised when the MAF client cannot be initialized."""


_PROVIDERS = {
    "azure-openai": ("agent_framework.azure", "AzureOpenAIChatClient"),
    "azure_openai": ("agent_framework.azure", "AzureOpenAIChatClient"),
    "azure": ("agent_framework.azure", "AzureOpenAIChatClient"),
    "openai": ("agent_framework.openai", "OpenAIChatClient"),
    "oai": ("agent_framework.openai", "OpenAIChatClient"),
}


class MAFChatClient:
    """Dispatches chat completion calls through a MAF provider client."""

    def __init__(self, settings: ModelSettings) -> None:
        self._settings = settings
        self._client = self._create_client(settings)

    @staticmethod
    def _create_client(settings: ModelSettings) -> Any:
        provider = settings.provider.lower()
        target = _PROVIDERS.get(provider)
        if target is None:
            raise MAFIntegrationError(
                f"Unsupported MAF provider '{settings.provider}'."
            )
        module_name, class_name = target
        try:
            client_cls = getattr(import_module(module_name), class_name)
        except ModuleNotFoundError as exc:  # pragma: no cover - MAF runtime
            missing = exc.name or "a required dependency"
            raise MAFIntegrationError(
                f"Microsoft Agent Framework dependency '{missing}' is missing."
            ) from exc
        if class_name == "AzureOpenAIChatClient":
            return client_cls(
                api_key=settings.api_key,
                deployment_name=settings.model,
                endpoint=settings.endpoint,
                api_version=settings.api_version,
            )
        return client_cls(
            api_key=settings.api_key,
            model_id=settings.model,
            base_url=settings.endpoint,
        )

    @staticmethod
    def _to_framework_message(message: ChatMessage) -> MAFChatMessage:
        return MAFChatMessage(role=_coerce_role(message.role), text=message.content)

    async def complete(self, messages: Iterable[ChatMessage]) -> ChatMessage:
        """Execute a chat completion call through the underlying MAF client."""

        payload: List[MAFChatMessage] = [
            self._to_framework_message(message) for message in messages
        ]
        response = await self._client.get_response(messages=payload)
        return ChatMessage(role="assistant", content=response.text or "")
