"""Secret scanner.

Reports secret NAMES found in the environment; values are never read into
the detected record.
"""

import os
import re
from collections.abc import Iterable, Mapping

from pactctl.core.catalog import COMMON_SECRETS, SECRET_PATTERNS, SECRET_SKIP
from pactctl.core.secrets import SecretStore
from pactctl.models.detected import SecretDetected
from pactctl.scanners.base import Scanner

_PATTERNS = tuple(re.compile(pattern) for pattern in SECRET_PATTERNS)


def is_secret_name(name: str) -> bool:
    """Check if an environment variable name looks like a secret."""
    if name in SECRET_SKIP:
        return False
    return name in COMMON_SECRETS or any(pattern.search(name) for pattern in _PATTERNS)


class SecretScanner(Scanner[list[SecretDetected]]):
    """Scanner for secrets in the environment and the secret store.

    Common secret names come first, then other matching variables in
    environment order. Manifest secrets missing from the environment are
    still reported when the store holds them.

    Args:
        existing: Secret names already listed in the manifest.
        store: Secret store to check presence in, if any.
        environ: Environment to inspect. Defaults to ``os.environ``.
    """

    def __init__(
        self,
        existing: Iterable[str] = (),
        store: SecretStore | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._existing = list(existing)
        self._store = store
        self._environ = environ if environ is not None else os.environ

    @property
    def module(self) -> str:
        return "secrets"

    def _in_store(self, name: str) -> bool:
        return self._store is not None and self._store.has(name)

    def _record(self, name: str, in_env: bool) -> SecretDetected:
        return SecretDetected(
            name=name,
            in_env=in_env,
            in_keychain=self._in_store(name),
            in_manifest=name in self._existing,
        )

    def scan(self) -> list[SecretDetected]:
        names: list[str] = [
            name for name in COMMON_SECRETS if name in self._environ and name not in SECRET_SKIP
        ]
        seen = set(names)
        for name in self._environ:
            if name not in seen and is_secret_name(name):
                names.append(name)
                seen.add(name)

        detected = [self._record(name, in_env=True) for name in names]
        for name in self._existing:
            if name not in seen and self._in_store(name):
                detected.append(self._record(name, in_env=False))
                seen.add(name)
        return detected
