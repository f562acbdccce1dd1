"""Record stores for credentials and messages.

Learn: The core depends on the CredentialStore and MessageStore
protocols only. Two implementations ship:
- store.sql → SQLAlchemy async sessions (Postgres in production)
- store.memory → plain dicts, for tests and single-process dev runs
"""

from messagely.store.interfaces import CredentialStore, MessageStore

__all__ = ["CredentialStore", "MessageStore"]
