import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from langchain_openai import ChatOpenAI

from src.accounts.directory import TEMPLATES_COLLECTION, USERS_COLLECTION, AccountDirectory
from src.accounts.models import Identity, Session
from src.agents.prompt_enhancer_agent import PromptEnhancerAgent
from src.config import Settings
from src.storage.record_store import RecordStore
from src.storage.sqlite_record_store import SQLiteRecordStore
from src.templates.fixtures.templates import DEFAULT_TEMPLATES
from src.templates.models import Template
from src.templates.store import TemplateStore
from src.utils.errors import Unauthorized
from src.utils.logging import new_ecid
from src.workflow.response import GenerationResult
from src.workflow.workflow import GenerationWorkflow, PromptEnhancer

SEED_COLLECTIONS = {
    TEMPLATES_COLLECTION: DEFAULT_TEMPLATES,
    USERS_COLLECTION: [],
}


def build_enhancer(settings: Settings, logger: logging.Logger) -> Optional[PromptEnhancer]:
    if not settings.enhancer_configured:
        logger.info("No OpenAI API key configured; prompt enhancement disabled")
        return None

    llm = ChatOpenAI(
        model=settings.enhancer_model,
        temperature=settings.enhancer_temperature,
        api_key=settings.openai_api_key,
        timeout=settings.enhancer_timeout_seconds,
        max_retries=0,
    )
    return PromptEnhancerAgent(llm, logger)


class PromptDesigner:
    """
    Entry point for the UI: one method per user action.
    Everything except register/login is scoped by a session token.
    """

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        record_store: Optional[RecordStore] = None,
        enhancer: Optional[PromptEnhancer] = None,
    ):
        self.settings = settings
        self.logger = logger

        if record_store is None:
            record_store = SQLiteRecordStore(settings.db_path, seed=SEED_COLLECTIONS)
        if enhancer is None:
            enhancer = build_enhancer(settings, logger)

        self.accounts = AccountDirectory(record_store, settings, logger)
        self.templates = TemplateStore(self.accounts, logger)
        self.workflow = GenerationWorkflow(enhancer, logger, timeout_seconds=settings.enhancer_timeout_seconds)

    # ---- auth ----

    def register(self, email: str, password: str) -> Session:
        new_ecid()
        _, session = self.accounts.register(email, password)
        return session

    def login(self, email: str, password: str) -> Session:
        new_ecid()
        return self.accounts.authenticate(email, password)

    def whoami(self, token: str) -> Identity:
        new_ecid()
        return self._identity(token)

    # ---- templates ----

    def list_templates(self, token: str) -> List[Template]:
        new_ecid()
        return self.templates.list(self._identity(token).account_id)

    def get_template(self, token: str, template_id: str) -> Template:
        new_ecid()
        return self.templates.get(self._identity(token).account_id, template_id)

    def create_template(self, token: str, payload: Mapping[str, Any]) -> Template:
        new_ecid()
        return self.templates.create(self._identity(token).account_id, payload)

    def update_template(self, token: str, template_id: str, patch: Mapping[str, Any]) -> Template:
        new_ecid()
        return self.templates.update(self._identity(token).account_id, template_id, patch)

    # ---- generation ----

    async def generate(
        self,
        token: str,
        template: str,
        values: Optional[Dict[str, Any]] = None,
        improve: bool = False,
    ) -> GenerationResult:
        new_ecid()
        # token check reads the record store, which may block
        await asyncio.to_thread(self._identity, token)

        template_len = len(template) if isinstance(template, str) else -1
        value_keys = sorted(values.keys()) if isinstance(values, dict) else None
        self.logger.debug(
            f"generate inputs: template_len={template_len} value_keys={value_keys} improve={improve!r}"
        )
        return await self.workflow.generate(template, values, improve)

    def _identity(self, token: str) -> Identity:
        identity = self.accounts.resolve(token)
        if self.accounts.get_account(identity.account_id) is None:
            self.logger.info(f"Token for unknown account id={identity.account_id}")
            raise Unauthorized()
        return identity
