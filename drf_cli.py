#!/usr/bin/env python3
import sys
import argparse
from deterministic_random import BLOCK_SIZE, VerifyResult, round_trip
from drf_files import VerificationFailure, write_file, verify_file


def cmd_write(args) -> int:
    out = args.out if args.out is not None else args.seed
    written = write_file(out, args.length, block_size=args.block_size, seed=args.seed, verbose=args.verbose)
    print(f"[INFO] Wrote {written} bytes to {out}")
    return 0


def cmd_verify(args) -> int:
    try:
        verified = verify_file(args.path, block_size=args.block_size, seed=args.seed, verbose=args.verbose)
    except VerificationFailure as e:
        print(f"[!] {e}")
        return 1
    print(f"[+] OK: {args.path} ({verified} bytes)")
    return 0


def cmd_selftest(args) -> int:
    res = round_trip(args.seed, args.length, force_fail=args.force_fail,
                     block_size=args.block_size, verbose=args.verbose)
    expected = VerifyResult.FAILURE if args.force_fail else VerifyResult.SUCCESS
    if res is not expected:
        print(f"[!] Self test returned {res.name}, expected {expected.name}")
        return 1
    print(f"[+] Self test returned {res.name} as expected")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drf",
        description="Write and verify files filled with deterministic pseudo-random content."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("write", help="write LENGTH bytes derived from SEED")
    p.add_argument("seed")
    p.add_argument("length", type=int)
    p.add_argument("--out", default=None, help="output path (default: SEED)")
    p.set_defaults(func=cmd_write)

    p = sub.add_parser("verify", help="verify a file written by 'write'")
    p.add_argument("path")
    p.add_argument("--seed", default=None, help="seed used at write time (default: PATH)")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("selftest", help="generate and verify in memory")
    p.add_argument("--seed", default="foobar")
    p.add_argument("--length", type=int, default=35)
    p.add_argument("--force-fail", action="store_true", help="corrupt the first byte before verifying")
    p.set_defaults(func=cmd_selftest)

    for p in sub.choices.values():
        p.add_argument("--block-size", type=int, default=BLOCK_SIZE)
        p.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.block_size <= 0:
        parser.error("--block-size must be positive")
    if getattr(args, "length", 0) < 0:
        parser.error("length must be non-negative")
    try:
        return args.func(args)
    except OSError as e:
        print(f"[FATAL] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
