"""LangChain prompt pipeline composing the text sent to the provider."""

from __future__ import annotations

from langchain_core.prompts import PromptTemplate

from ..models.chat_request import ChatRequest
from ..prompts import QUESTION_PROMPT, TAX_SYSTEM_PROMPT, USER_CONTEXT_PROMPT


class TaxPromptChain:
    """Builds the single prompt string for a tax question.

    The instruction block, the user context block and the question are
    joined in that order.  The user's text is passed as a template value,
    so braces inside it are never interpreted.
    """

    def __init__(self, system_prompt: str | None = None) -> None:
        self._system_prompt = system_prompt or TAX_SYSTEM_PROMPT
        self._template = PromptTemplate.from_template(
            "{system_prompt}\n\n" + USER_CONTEXT_PROMPT + "\n\n" + QUESTION_PROMPT
        )

    def build_prompt(self, request: ChatRequest) -> str:
        context = request.user_context
        return self._template.format(
            system_prompt=self._system_prompt,
            timestamp=context.resolved_timestamp(),
            timezone=context.resolved_timezone(),
            question=request.message,
        )
