from .base_agent import BaseAgent
from .prompt_enhancer_agent import PromptEnhancerAgent

__all__ = [
    "BaseAgent",
    "PromptEnhancerAgent",
]
