# thinking_tools/llm/session.py
from __future__ import annotations
from typing import Dict, List, Protocol
import logging

from thinking_tools.core.types import Exchange

logger = logging.getLogger(__name__)


class ChatModel(Protocol):
    def chat(self, messages: List[Dict[str, str]]) -> str: ...


class ChatSession:
    """Conversation held for one tool invocation.

    Every send() replays the explicit transcript of earlier exchanges, so a
    later prompt sees earlier answers as context. Failed sends are not
    recorded. Sessions are never shared across invocations.
    """

    def __init__(self, client: ChatModel):
        self._client = client
        self.history: List[Exchange] = []

    def transcript(self) -> List[Dict[str, str]]:
        messages: List[Dict[str, str]] = []
        for ex in self.history:
            messages.append({"role": "user", "content": ex.prompt})
            messages.append({"role": "assistant", "content": ex.response})
        return messages

    def send(self, prompt: str) -> str:
        messages = self.transcript() + [{"role": "user", "content": prompt}]
        logger.info("sending prompt to model", extra={"chars": len(prompt)})
        text = self._client.chat(messages)
        logger.info("received model response", extra={"chars": len(text)})
        self.history.append(Exchange(prompt=prompt, response=text))
        return text
