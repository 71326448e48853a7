from __future__ import annotations

from langchain_core.messages import HumanMessage

from src.agents.base_agent import BaseAgent
from src.utils.errors import EnhancerFailure


SYSTEM_PROMPT = """
You are a helpful assistant that improves prompt wording without changing intent.

Given the resolved prompt in the next message, rewrite it to be clear, concise,
and effective for LLMs.

Rules:
- Keep every fact, name, and requirement from the original.
- Leave any remaining {{placeholder}} tokens exactly as written.
- Return only the improved prompt. No preamble, no analysis, no quotes.
""".strip()


class PromptEnhancerAgent(BaseAgent):
    """Rewrites a resolved prompt through a chat model."""

    def __init__(self, llm, logger):
        super().__init__(
            name="PromptEnhancer",
            llm=llm,
            logger=logger,
            # braces are doubled so ChatPromptTemplate keeps them literal
            system_prompt=SYSTEM_PROMPT.replace("{", "{{").replace("}", "}}"),
        )

    async def enhance(self, prompt_text: str) -> str:
        content = await self.run([HumanMessage(content=f"Resolved Prompt:\n\n{prompt_text}")])
        improved = (content or "").strip()
        if not improved:
            raise EnhancerFailure("model returned an empty response")
        return improved
