import asyncio
import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from langgraph.graph import StateGraph, END

from src.templates.engine import extract_placeholders, render_template
from src.utils.errors import EnhancerUnavailable, InvalidInput
from src.workflow.response import GenerationResult
from src.workflow.state import GenerationState


class PromptEnhancer(Protocol):
    async def enhance(self, prompt_text: str) -> str:
        """Returns an improved rewrite of prompt_text; may raise."""
        ...


class GenerationWorkflow:
    """
    Renders a template locally and, on request, passes the result through
    the enhancer. Enhancement is best effort: one attempt, bounded by
    `timeout_seconds`, falling back to the local render on any failure.
    """

    def __init__(
        self,
        enhancer: Optional[PromptEnhancer],
        logger: logging.Logger,
        timeout_seconds: float = 30.0,
    ):
        self.enhancer = enhancer
        self.logger = logger
        self.timeout_seconds = timeout_seconds

        builder = StateGraph(GenerationState)

        # ---- Node definitions (MUST be async defs, not lambdas) ----

        async def render_node(state: GenerationState) -> Dict[str, Any]:
            template = state["template"]
            resolved = render_template(template, state.get("values") or {})
            variables = extract_placeholders(template)
            self.logger.debug(
                f"[Generation] rendered template_len={len(template)} variables={variables}"
            )
            return {"resolved": resolved, "variables": variables, "source": "local", "note": None}

        async def enhance_node(state: GenerationState) -> Dict[str, Any]:
            return await self._enhance(state["resolved"])

        builder.add_node("render", render_node)
        builder.add_node("enhance", enhance_node)

        builder.set_entry_point("render")

        def improve_router(state: GenerationState):
            if state.get("improve"):
                return "enhance"
            return END

        builder.add_conditional_edges(
            "render",
            improve_router,
            {
                "enhance": "enhance",
                END: END,
            },
        )
        builder.add_edge("enhance", END)

        self.app = builder.compile()

    @property
    def enhancer_configured(self) -> bool:
        return self.enhancer is not None

    async def generate(
        self,
        template: str,
        values: Optional[Mapping[str, Any]] = None,
        improve: bool = False,
    ) -> GenerationResult:
        if not template or not isinstance(template, str):
            raise InvalidInput("template is required")
        if improve and not self.enhancer_configured:
            raise EnhancerUnavailable()

        initial_state: GenerationState = {
            "template": template,
            "values": dict(values or {}),
            "improve": bool(improve),
        }

        final_state = await self.app.ainvoke(initial_state)

        result = GenerationResult(
            resolved=final_state.get("resolved", ""),
            variables=final_state.get("variables") or [],
            source=final_state.get("source") or "local",
            note=final_state.get("note"),
        )
        self.logger.debug(
            f"[Generation] done source={result.source!r} resolved_len={len(result.resolved)} "
            f"note={result.note!r}"
        )
        return result

    async def _enhance(self, resolved: str) -> Dict[str, Any]:
        try:
            improved = await asyncio.wait_for(self.enhancer.enhance(resolved), timeout=self.timeout_seconds)
            if not improved or not str(improved).strip():
                raise ValueError("enhancer returned an empty response")
        except asyncio.TimeoutError:
            reason = f"timed out after {self.timeout_seconds:g}s"
        except Exception as e:
            reason = str(e) or type(e).__name__
        else:
            return {"resolved": str(improved), "source": "enhanced", "note": None}

        # Fail soft: keep the local render and say why
        self.logger.warning(f"[Generation] enhancement failed, using local render: {reason}")
        return {"resolved": resolved, "source": "local", "note": f"Enhancement failed: {reason}"}
