"""MD5 digests and AES-CBC encryption with PKCS#7 padding."""

from __future__ import annotations

import hashlib

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_BLOCK_SIZE = 16


def md5(s: str, salt: str = "") -> str:
    """Hex MD5 digest of s followed by salt."""
    h = hashlib.md5()
    h.update(s.encode("utf-8"))
    if salt:
        h.update(salt.encode("utf-8"))
    return h.hexdigest()


def _cipher(key: bytes) -> Cipher:
    # The initialisation vector is the first block of the key.
    return Cipher(algorithms.AES(key), modes.CBC(key[:_BLOCK_SIZE]))


def _pkcs7_pad(data: bytes) -> bytes:
    padding = _BLOCK_SIZE - len(data) % _BLOCK_SIZE
    return data + bytes([padding]) * padding


def _pkcs7_unpad(data: bytes) -> bytes:
    if not data:
        raise ValueError("encrypt error")
    padding = data[-1]
    if padding > len(data):
        raise ValueError("encrypt error")
    return data[: len(data) - padding]


def aes_encrypt(data: bytes, key: bytes) -> bytes:
    """Encrypt data with AES-CBC; key must be 16, 24 or 32 bytes long."""
    encryptor = _cipher(bytes(key)).encryptor()
    return encryptor.update(_pkcs7_pad(bytes(data))) + encryptor.finalize()


def aes_decrypt(data: bytes, key: bytes) -> bytes:
    """Decrypt data produced by aes_encrypt with the same key."""
    cipher = _cipher(bytes(key))
    if len(data) % _BLOCK_SIZE:
        raise ValueError("input not full blocks")
    decryptor = cipher.decryptor()
    plain = decryptor.update(bytes(data)) + decryptor.finalize()
    return _pkcs7_unpad(plain)