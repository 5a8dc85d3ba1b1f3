"""
Credential vault backed by the system keyring.

Secrets are stored under a single keyring service name with the account set
to the secret's key. keyring calls block, so each one runs in a worker
thread to keep login and conversion flows awaitable.
"""

import asyncio
import json
from typing import Any, Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from profkit.constants import PROFILES_OPTION_SECURELY_STORED, VAULT_SERVICE_NAME
from profkit.errors import ImperativeError
from profkit.logging import get_logger
from .document import ConfigDocument


class CredentialVault:
    def __init__(self, service: str = VAULT_SERVICE_NAME):
        self.service = service
        self.logger = get_logger("profkit.config.vault")

    async def load(self, key: str, optional: bool = False) -> Optional[str]:
        """
        Load a secret.

        Args:
            key: Secret key, e.g. "zosmf_lpar1_password"
            optional: Return None instead of raising when the secret is missing

        Raises:
            ImperativeError: The secret is missing and not optional, or the
                keyring backend failed
        """
        try:
            value = await asyncio.to_thread(keyring.get_password, self.service, key)
        except KeyringError as e:
            self.logger.error(f"Keyring lookup failed for {key}: {e}")
            raise ImperativeError(f"Unable to load the secure field '{key}': {e}")

        if value is None and not optional:
            raise ImperativeError(f"Unable to load the secure field '{key}'")
        self.logger.debug(f"Loaded secure field {key} (found: {value is not None})")
        return value

    async def save(self, key: str, secret: str) -> None:
        try:
            await asyncio.to_thread(keyring.set_password, self.service, key, secret)
        except KeyringError as e:
            raise ImperativeError(f"Unable to save the secure field '{key}': {e}")
        self.logger.debug(f"Saved secure field {key}")

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(keyring.delete_password, self.service, key)
        except PasswordDeleteError:
            self.logger.debug(f"Secure field {key} was not stored")


def parse_secret(secret: str) -> Any:
    # secrets are JSON-encoded; older entries may be raw strings
    try:
        return json.loads(secret)
    except ValueError:
        return secret


def is_securely_stored(value: Any) -> bool:
    """True for the placeholder a v1 profile file holds in place of a secret"""
    return isinstance(value, str) and value.startswith(PROFILES_OPTION_SECURELY_STORED)


def secured_marker(vault: CredentialVault) -> str:
    return f"{PROFILES_OPTION_SECURELY_STORED} {vault.service}"


def secure_value_key(profile_key: str, prop_name: str) -> str:
    """Vault key of a secure property of a v2 profile"""
    return f"profiles.{profile_key}.properties.{prop_name}"


async def secure_config_values(document: ConfigDocument, vault: CredentialVault) -> int:
    """
    Move values of secure properties out of a config document into the vault.

    Values are JSON-encoded so non-string secrets survive a round trip.

    Returns:
        int: Number of values moved
    """
    moved = 0
    for profile_key, profile in document.profiles.items():
        for prop_name in profile.secure:
            if prop_name not in profile.properties:
                continue
            value = profile.properties.pop(prop_name)
            await vault.save(secure_value_key(profile_key, prop_name), json.dumps(value))
            moved += 1
    return moved
