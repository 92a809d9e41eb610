
import enum
from typing import Iterator, List
from cryptography.hazmat.primitives.ciphers import CipherContext
from crypto_utils import Seed, derive_key_iv, create_encryptor, create_decryptor

BLOCK_SIZE = 16


def check_block_size(block_size: int) -> int:
    if not isinstance(block_size, int) or block_size <= 0:
        raise ValueError("block_size must be a positive integer")
    return block_size


class VerifyResult(enum.Enum):
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    FAILURE = "failure"


class ContentGenerator:
    """Emits the keystream of a CTR cipher, block by block, up to `length` bytes.

    Encrypting zero bytes under a stream cipher gives back the keystream, so the
    generated content is the cipher's keystream truncated to `length`.
    Once `length` bytes have been produced every call returns b"".
    """

    def __init__(self, cipher: CipherContext, length: int, block_size: int = BLOCK_SIZE):
        if length < 0:
            raise ValueError("length must be non-negative")
        self.cipher = cipher
        self.block_size = check_block_size(block_size)
        self.remaining_length = length

    def next_block(self) -> bytes:
        if self.remaining_length == 0:
            return b""
        n = min(self.block_size, self.remaining_length)
        self.remaining_length -= n
        return self.cipher.update(b"\0" * n)

    def __iter__(self) -> Iterator[bytes]:
        while True:
            block = self.next_block()
            if not block:
                return
            yield block


class ContentVerifier:
    """Checks previously generated content against the keystream, block by block.

    A failure is sticky: after the first FAILURE every later feed() fails too,
    whatever the input. Feeding more bytes than `length` in total is a failure.
    """

    def __init__(self, cipher: CipherContext, length: int):
        if length < 0:
            raise ValueError("length must be non-negative")
        self.cipher = cipher
        self.remaining_length = length
        self.failed = False

    @property
    def result(self) -> VerifyResult:
        if self.failed or self.remaining_length < 0:
            return VerifyResult.FAILURE
        if self.remaining_length == 0:
            return VerifyResult.SUCCESS
        return VerifyResult.PARTIAL_SUCCESS

    def feed(self, block: bytes) -> VerifyResult:
        self.remaining_length -= len(block)
        if self.remaining_length < 0 or self.failed:
            self.failed = True
            return VerifyResult.FAILURE

        plaintext = self.cipher.update(block)
        if plaintext != b"\0" * len(block):
            self.failed = True
            return VerifyResult.FAILURE

        if self.remaining_length == 0:
            return VerifyResult.SUCCESS
        return VerifyResult.PARTIAL_SUCCESS


def deterministic_stream(seed: Seed, length: int, block_size: int = BLOCK_SIZE) -> ContentGenerator:
    key, iv = derive_key_iv(seed, length)
    return ContentGenerator(create_encryptor(key, iv), length, block_size)


def deterministic_verifier(seed: Seed, length: int) -> ContentVerifier:
    key, iv = derive_key_iv(seed, length)
    return ContentVerifier(create_decryptor(key, iv), length)


def round_trip(seed: Seed = "foobar", length: int = 35, force_fail: bool = False,
               block_size: int = BLOCK_SIZE, verbose: bool = False) -> VerifyResult:
    check_block_size(block_size)
    blocks: List[bytes] = []
    for block in deterministic_stream(seed, length, block_size):
        if verbose:
            print(f"cipher_block: {block.hex()}")
        blocks.append(block)
    content = bytearray(b"".join(blocks))

    if force_fail and content:
        content[0] = (content[0] + 1) % 256

    if verbose:
        print(f"cipher_text_length: {len(content)}")

    verifier = deterministic_verifier(seed, length)
    res = verifier.result
    for start in range(0, len(content), block_size):
        res = verifier.feed(bytes(content[start:start + block_size]))
        if verbose:
            print(f"res: {res.name} at [{start}, {start + block_size})")

    if verbose:
        print(f"decryption: {res.name}")
    return res
