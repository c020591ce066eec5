from mirsa.errors import (
    MirsaError,
    ModulusOverflowError,
    NoValidKeysetError,
    KeyGenerationError,
    KeyFileError,
    CipherIOError,
    CipherFormatError,
    PrimesFileError,
)
from mirsa.keys import Key, KeyPair, Keyset, derive_keys
from mirsa.keygen import make_keys, generate_keys
from mirsa.chunk_cipher import encrypt_bytes, decrypt_bytes, encrypt_stream, decrypt_stream

__version__ = "1.0.0"
