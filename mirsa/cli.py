# mirsa/cli.py
from __future__ import annotations

import argparse
import getpass
import sys
import time
from typing import List, Optional

from mirsa import config
from mirsa.cipher_service import genkeys, read_cipher, write_cipher
from mirsa.errors import MirsaError
from mirsa.trace import make_trace


def _seed(value: str) -> int:
    if not value.isdigit():
        raise argparse.ArgumentTypeError(f"invalid seed value '{value}'")
    return int(value)


def _default_key_name() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "mirsa"


def _fail(err: MirsaError) -> int:
    print(f"error: {err}", file=sys.stderr)
    return 1


# ===== mirsa-genkeys =====

def genkeys_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mirsa-genkeys",
        description="Generate a <keyname>.pub / <keyname>.pvt key pair from a primes file.",
    )
    ap.add_argument("-v", "--verbose", action="store_true", default=config.VERBOSE)
    ap.add_argument("-k", "--keyname", default=None, help="key file prefix (default: login name)")
    ap.add_argument("-s", "--seed", type=_seed, default=None, help="random seed (default: current time)")
    ap.add_argument("-p", "--primes", default=config.PRIMES_FILE, help="primes file")
    return ap


def genkeys_main(argv: Optional[List[str]] = None) -> int:
    args = genkeys_parser().parse_args(argv)
    key_name = args.keyname or _default_key_name()
    seed = args.seed if args.seed is not None else int(time.time())
    trace = make_trace(args.verbose, config.TRACE_FILE)

    try:
        genkeys(key_name, args.primes, seed, retries=config.KEYGEN_RETRIES, trace=trace)
    except MirsaError as e:
        return _fail(e)
    return 0


# ===== mirsa-rw =====

RW_EPILOG = """\
Reader use: mirsa-rw [-vh] [-k keyname] -r cipherfile [plainfile]
            If plainfile is not provided, then reader output is to stdout.
Writer use: mirsa-rw [-vh] [-k keyname] -w cipherfile [plainfile]
            If plainfile is not provided, then writer input is from stdin.
"""


def rw_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="mirsa-rw",
        description="Encrypt text into, or decrypt it out of, a cipher file.",
        epilog=RW_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("-v", "--verbose", action="store_true", default=config.VERBOSE)
    ap.add_argument("-k", "--keyname", default=None, help="key file prefix (default: login name)")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("-r", "--read", dest="read", metavar="cipherfile")
    mode.add_argument("-w", "--write", dest="write", metavar="cipherfile")
    ap.add_argument("plainfile", nargs="?", default=None)
    return ap


def rw_main(argv: Optional[List[str]] = None) -> int:
    args = rw_parser().parse_args(argv)
    key_name = args.keyname or _default_key_name()
    trace = make_trace(args.verbose, config.TRACE_FILE)

    try:
        if args.write is not None:
            write_cipher(
                key_name,
                args.write,
                args.plainfile,
                buffer_size=config.BUFFER_SIZE,
                trace=trace,
            )
        else:
            read_cipher(key_name, args.read, args.plainfile, trace=trace)
    except MirsaError as e:
        return _fail(e)
    return 0


def genkeys_entry() -> None:
    sys.exit(genkeys_main())


def rw_entry() -> None:
    sys.exit(rw_main())
