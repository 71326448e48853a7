from typing import List, Optional

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate


class BaseAgent:
    def __init__(
        self,
        name: str,
        llm,
        system_prompt: str,
        logger,
    ):
        self.name = name
        self.logger = logger
        self.logger.info(f"{self.name} Agent Initializing")

        self.llm = llm
        self.system_prompt = system_prompt

        prompt = ChatPromptTemplate.from_messages(
            [
                ("system", system_prompt),
                ("placeholder", "{messages}"),
            ]
        )
        self.agent = prompt | llm

    async def run(self, messages: Optional[List[BaseMessage]] = None) -> str:
        """Invoke the chain once and return the text content of the reply."""
        messages = messages or []
        self.logger.debug(f"[{self.name}] Agent Running | messages={len(messages)}")

        response = await self.agent.ainvoke({"messages": messages})

        content = getattr(response, "content", "")
        if not isinstance(content, str):
            # some chat models return a list of content blocks
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block) for block in content or []
            )

        self.logger.debug(f"[{self.name}] LLM response received | content_length={len(content)}")
        if content:
            self.logger.debug(f"[{self.name}] response_preview={content[:300]!r}")

        return content
