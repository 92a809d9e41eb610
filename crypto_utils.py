
import os
import hashlib
from typing import Tuple, Union
from cryptography.hazmat.primitives.ciphers import Cipher, CipherContext, algorithms, modes

KEY_SIZE = 32
IV_SIZE = 16

Seed = Union[str, bytes, os.PathLike]

def seed_to_bytes(seed: Seed) -> bytes:
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, str):
        return seed.encode()
    return os.fsencode(seed)

def derivation_message(seed: Seed, length: int) -> bytes:
    return seed_to_bytes(seed) + b";" + str(length).encode()

def derive_key_iv(seed: Seed, length: int) -> Tuple[bytes, bytes]:
    if length < 0:
        raise ValueError("length must be non-negative")
    h = hashlib.sha256()
    h.update(derivation_message(seed, length))
    key = h.digest()
    iv = hashlib.sha256(key).digest()[:IV_SIZE]
    return key, iv

def create_cipher(mode: str, key: bytes, iv: bytes) -> CipherContext:
    # AES-256 in CTR mode works as a stream cipher: update() takes any length, no padding
    cipher = Cipher(algorithms.AES256(key), modes.CTR(iv))
    if mode == "encrypt":
        return cipher.encryptor()
    if mode == "decrypt":
        return cipher.decryptor()
    raise ValueError(f"Unknown cipher mode: {mode!r}")

def create_encryptor(key: bytes, iv: bytes) -> CipherContext:
    return create_cipher("encrypt", key, iv)

def create_decryptor(key: bytes, iv: bytes) -> CipherContext:
    return create_cipher("decrypt", key, iv)
