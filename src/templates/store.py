from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from pydantic import ValidationError

from src.templates.models import Template, TemplatePatch
from src.utils.errors import CapacityExceeded, DuplicateId, InvalidInput, NotFound, Unauthorized

MAX_TEMPLATES_PER_ACCOUNT = 4


class TemplateStore:
    """
    Per-account template collections, stored inside account records.

    Enforces the capacity limit and id uniqueness. Every mutation validates
    first and then persists the whole account once, so a rejected call never
    writes anything.
    """

    def __init__(self, account_directory, logger):
        self.accounts = account_directory
        self.logger = logger

    def list(self, account_id: str) -> List[Template]:
        account = self.accounts.get_account(account_id)
        if account is None:
            return []
        return list(account.templates)

    def get(self, account_id: str, template_id: str) -> Template:
        for tpl in self.list(account_id):
            if tpl.id == template_id:
                return tpl
        raise NotFound()

    def create(self, account_id: str, candidate: Union[Template, Mapping[str, Any]]) -> Template:
        data: Dict[str, Any] = candidate.model_dump() if isinstance(candidate, Template) else dict(candidate or {})
        if not data.get("id") or not data.get("name") or not data.get("body"):
            raise InvalidInput("id, name, and body are required")

        try:
            tpl = Template(
                id=data["id"],
                name=data["name"],
                description=data.get("description") or "",
                body=data["body"],
            )
        except ValidationError as e:
            raise InvalidInput(str(e)) from e

        account = self.accounts.get_account(account_id)
        if account is None:
            raise Unauthorized()

        if len(account.templates) >= MAX_TEMPLATES_PER_ACCOUNT:
            self.logger.info(f"[TemplateStore] account={account_id} at capacity, rejecting {tpl.id!r}")
            raise CapacityExceeded(f"Template limit reached ({MAX_TEMPLATES_PER_ACCOUNT} per account)")

        if any(t.id == tpl.id for t in account.templates):
            raise DuplicateId()

        account.templates.append(tpl)
        self.accounts.save_account(account)

        self.logger.debug(
            f"[TemplateStore] created template={tpl.id!r} account={account_id} count={len(account.templates)}"
        )
        return tpl

    def update(
        self,
        account_id: str,
        template_id: str,
        patch: Union[TemplatePatch, Mapping[str, Any]],
    ) -> Template:
        if not isinstance(patch, TemplatePatch):
            try:
                patch = TemplatePatch.model_validate(dict(patch or {}))
            except ValidationError as e:
                raise InvalidInput(str(e)) from e

        account = self.accounts.get_account(account_id)
        if account is None:
            raise Unauthorized()

        idx = next((i for i, t in enumerate(account.templates) if t.id == template_id), -1)
        if idx == -1:
            raise NotFound()

        changes = patch.provided()
        updated = account.templates[idx].model_copy(update=changes)
        account.templates[idx] = updated
        self.accounts.save_account(account)

        self.logger.debug(
            f"[TemplateStore] updated template={template_id!r} account={account_id} fields={sorted(changes)}"
        )
        return updated
