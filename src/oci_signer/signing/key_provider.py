"""
Key providers supplying private key material and key identifiers

A key provider is the single source of key material for a signer. The
credentials provider backed by ``SignerConfig`` is the default; callers can
plug in their own implementation of ``KeyProvider``.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional, Union

from ..config import SignerConfig
from ..exceptions import PrivateKeyFileNotFoundError

logger = logging.getLogger(__name__)


class KeyProvider(ABC):
    """Source of the private key and key identifier used for signing"""

    @abstractmethod
    def get_private_key(self) -> Union[str, bytes]:
        """
        Return the PEM encoded private key.

        Returns:
            PEM text or bytes
        """

    @abstractmethod
    def get_key_id(self) -> str:
        """
        Return the identifier placed in the Authorization header's keyId.
        """


class CredentialsKeyProvider(KeyProvider):
    """
    Key provider backed by tenancy, user, fingerprint and key file credentials.
    """

    def __init__(self, config: SignerConfig):
        self.config = config

    def key_file_exists(self) -> bool:
        filename = self.config.private_key_filename
        return bool(filename) and os.path.exists(filename)

    def get_private_key(self) -> Optional[bytes]:
        """
        Read the private key file.

        Returns:
            bytes: Raw file contents, or None when no key file is configured

        Raises:
            PrivateKeyFileNotFoundError: If the key file does not exist
        """
        filename = self.config.private_key_filename
        if not filename:
            return None

        if not os.path.exists(filename):
            raise PrivateKeyFileNotFoundError(filename)

        logger.debug(f"Reading private key from {filename}")
        with open(filename, 'rb') as f:
            return f.read()

    def get_key_id(self) -> str:
        return self.config.key_id


class StaticKeyProvider(KeyProvider):
    """Key provider holding PEM material in memory"""

    def __init__(self, key_id: str, private_key: Union[str, bytes]):
        if not key_id:
            raise ValueError("Key ID cannot be empty")
        self._key_id = key_id
        self._private_key = private_key

    def get_private_key(self) -> Union[str, bytes]:
        return self._private_key

    def get_key_id(self) -> str:
        return self._key_id
