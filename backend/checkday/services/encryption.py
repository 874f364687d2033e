"""
Server-side Encryption Service
Task titles are encrypted before they are written and decrypted on read
"""
import base64
from typing import Optional, List
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


class EncryptionService:
    """Encrypts and decrypts stored strings"""

    def __init__(self, secret_key: str):
        """
        Derive the Fernet key from the configured secret
        Args:
            secret_key: Secret taken from the environment
        """
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=b'checkday_encryption_salt_v1',
            iterations=100000,
        )
        key = base64.urlsafe_b64encode(kdf.derive(secret_key.encode()))
        self.cipher = Fernet(key)

    def encrypt(self, data: str) -> str:
        if not data:
            return data
        encrypted = self.cipher.encrypt(data.encode())
        return base64.urlsafe_b64encode(encrypted).decode()

    def decrypt(self, encrypted_data: str) -> str:
        if not encrypted_data:
            return encrypted_data
        try:
            decoded = base64.urlsafe_b64decode(encrypted_data.encode())
            return self.cipher.decrypt(decoded).decode()
        except (InvalidToken, ValueError):
            # Rows written before encryption was enabled hold plain text
            return encrypted_data

    def encrypt_items(self, items: List[dict]) -> List[dict]:
        """Encrypt the title of every template item or task"""
        return [
            {**item, 'title': self.encrypt(item['title'])} if item.get('title') else item
            for item in items
        ]

    def decrypt_items(self, items: List[dict]) -> List[dict]:
        """Decrypt the title of every template item or task"""
        return [
            {**item, 'title': self.decrypt(item['title'])} if isinstance(item.get('title'), str) else item
            for item in items
        ]


# Singleton instance
_encryption_service: Optional[EncryptionService] = None


def init_encryption(secret_key: str):
    """Initialize the encryption service"""
    global _encryption_service
    _encryption_service = EncryptionService(secret_key)


def get_encryption() -> EncryptionService:
    """Get the encryption service"""
    if _encryption_service is None:
        raise RuntimeError("Encryption not initialized. Call init_encryption() first.")
    return _encryption_service
