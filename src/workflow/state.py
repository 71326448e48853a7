from typing import TypedDict, Dict, Any, List, Optional


class GenerationState(TypedDict, total=False):
    # ===== Input =====
    template: str                       # raw template text
    values: Dict[str, Any]              # placeholder name -> value
    improve: bool                       # caller asked for AI enhancement

    # ===== Rendering =====
    resolved: str                       # local render, or enhancer output
    variables: List[str]                # placeholder names, first-occurrence order

    # ===== Enhancement =====
    source: str                         # "local" | "enhanced"
    note: Optional[str]                 # why enhancement was skipped/failed
