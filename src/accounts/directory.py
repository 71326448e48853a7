from __future__ import annotations

from typing import List, Optional, Tuple

import uuid_utils as uuid

from src.accounts.models import Account, Identity, Session
from src.config import Settings
from src.storage.record_store import RecordStore
from src.templates.fixtures.templates import DEFAULT_TEMPLATES
from src.templates.models import Template
from src.templates.store import MAX_TEMPLATES_PER_ACCOUNT
from src.utils.errors import EmailAlreadyRegistered, InvalidCredentials, InvalidInput, Unauthorized
from src.utils.security import decode_token, hash_password, issue_token, verify_password

USERS_COLLECTION = "users"
TEMPLATES_COLLECTION = "templates"


class AccountDirectory:
    """
    Owns account records and their embedded template collections.
    Accounts live in the "users" collection; new accounts copy the
    default catalog from the "templates" collection.
    """

    def __init__(self, record_store: RecordStore, settings: Settings, logger):
        self.store = record_store
        self.settings = settings
        self.logger = logger

    # ---- auth ----

    def register(self, email: str, password: str) -> Tuple[Account, Session]:
        if not email or not password:
            raise InvalidInput("email and password are required")

        accounts = self._load_all()
        if self._find_by_email(accounts, email) is not None:
            self.logger.info(f"[AccountDirectory] register rejected, email taken: {email!r}")
            raise EmailAlreadyRegistered()

        account = Account(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=hash_password(password, rounds=self.settings.bcrypt_rounds),
            templates=self.default_templates(),
        )
        accounts.append(account)
        self._write_all(accounts)

        self.logger.info(
            f"[AccountDirectory] registered account id={account.id} templates={len(account.templates)}"
        )
        return account, self._session_for(account)

    def authenticate(self, email: str, password: str) -> Session:
        if not email or not password:
            raise InvalidInput("email and password are required")

        account = self._find_by_email(self._load_all(), email)
        if account is None or not verify_password(password, account.password_hash):
            self.logger.info(f"[AccountDirectory] login failed for {email!r}")
            raise InvalidCredentials()

        return self._session_for(account)

    def resolve(self, token: str) -> Identity:
        payload = decode_token(self.settings, token)
        return Identity(account_id=str(payload["sub"]), email=str(payload.get("email") or ""))

    # ---- lookup / update ----

    def get_account(self, account_id: str) -> Optional[Account]:
        for account in self._load_all():
            if account.id == account_id:
                return account
        return None

    def save_account(self, account: Account) -> None:
        accounts = self._load_all()
        for idx, existing in enumerate(accounts):
            if existing.id == account.id:
                accounts[idx] = account
                self._write_all(accounts)
                return
        raise Unauthorized()

    def default_templates(self) -> List[Template]:
        """
        Catalog copied into every new account. Falls back to the built-in
        catalog when the collection is empty, and never exceeds the
        per-account limit.
        """
        records = self.store.read_all(TEMPLATES_COLLECTION)
        if not records:
            records = [dict(r) for r in DEFAULT_TEMPLATES]
            self.store.write_all(TEMPLATES_COLLECTION, records)

        # ids must stay unique within the account; first occurrence wins
        unique = {}
        for r in records:
            unique.setdefault(r.get("id"), r)
        records = list(unique.values())

        if len(records) > MAX_TEMPLATES_PER_ACCOUNT:
            self.logger.warning(
                f"[AccountDirectory] default catalog has {len(records)} templates; "
                f"keeping the first {MAX_TEMPLATES_PER_ACCOUNT}"
            )
            records = records[:MAX_TEMPLATES_PER_ACCOUNT]

        return [Template.model_validate(r) for r in records]

    # ---- helpers ----

    def _session_for(self, account: Account) -> Session:
        token = issue_token(self.settings, account_id=account.id, email=account.email)
        return Session(token=token, user=account.public())

    def _load_all(self) -> List[Account]:
        return [Account.model_validate(r) for r in self.store.read_all(USERS_COLLECTION)]

    def _write_all(self, accounts: List[Account]) -> None:
        self.store.write_all(USERS_COLLECTION, [a.model_dump() for a in accounts])

    @staticmethod
    def _find_by_email(accounts: List[Account], email: str) -> Optional[Account]:
        wanted = email.lower()
        for account in accounts:
            if account.email.lower() == wanted:
                return account
        return None
