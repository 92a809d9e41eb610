
import os
from pathlib import Path
from typing import Optional
from crypto_utils import Seed, derive_key_iv, derivation_message, create_encryptor, create_decryptor
from deterministic_random import (
    BLOCK_SIZE, ContentGenerator, ContentVerifier, VerifyResult, check_block_size
)

REPORT_EVERY = 100 * 1024 * 1024


class VerificationFailure(ValueError):
    def __init__(self, path, start: int, end: int, reason: str = "content mismatch"):
        self.path = path
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(f"Verification failed for {os.fspath(path)} in bytes [{start}, {end}): {reason}")


def write_file(name: Seed, length: int, block_size: int = BLOCK_SIZE,
               seed: Optional[Seed] = None, verbose: bool = False) -> int:
    check_block_size(block_size)
    seed = name if seed is None else seed
    key, iv = derive_key_iv(seed, length)
    if verbose:
        print(f"[INFO] Creating {length} bytes using [key: {key.hex()}, iv: {iv.hex()}] "
              f"derived from seed: '{derivation_message(seed, length).decode(errors='replace')}'")

    generator = ContentGenerator(create_encryptor(key, iv), length, block_size)
    p = Path(os.fsdecode(name))
    with p.open("wb") as f:
        written = 0
        for block in generator:
            f.write(block)
            written += len(block)
            if verbose and written % REPORT_EVERY < len(block):
                print(f"[INFO] Written {written} bytes")
    return written


def verify_file(name: Seed, block_size: int = BLOCK_SIZE,
                seed: Optional[Seed] = None, verbose: bool = False) -> int:
    """Re-derive the expected content of `name` from its path and size and check it.

    Returns the number of verified bytes. Raises VerificationFailure with the
    range of the first block that did not verify; the range is only as precise
    as `block_size`.
    """
    check_block_size(block_size)
    seed = name if seed is None else seed
    p = Path(os.fsdecode(name))
    length = p.stat().st_size
    key, iv = derive_key_iv(seed, length)
    verifier = ContentVerifier(create_decryptor(key, iv), length)

    offset = 0
    res = verifier.result
    with p.open("rb") as f:
        while res is VerifyResult.PARTIAL_SUCCESS:
            block = f.read(block_size)
            if not block:
                raise VerificationFailure(name, offset, offset + block_size,
                                          f"file ended after {offset} of {length} bytes")
            res = verifier.feed(block)
            if res is VerifyResult.FAILURE:
                raise VerificationFailure(name, offset, offset + block_size)
            offset += len(block)
            if verbose and offset % REPORT_EVERY < len(block):
                print(f"[INFO] Verified {offset} bytes")
    return offset
