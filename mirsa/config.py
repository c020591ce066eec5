import os
from dotenv import load_dotenv

load_dotenv()

BUFFER_SIZE = int(os.getenv("MIRSA_BUFFER_SIZE", "1024"))
PRIMES_FILE = os.getenv("MIRSA_PRIMES_FILE", "Primes.txt")
KEYGEN_RETRIES = int(os.getenv("MIRSA_KEYGEN_RETRIES", "3"))
VERBOSE = os.getenv("MIRSA_VERBOSE", "0").lower() in ("1", "true", "yes", "on")
TRACE_FILE = os.getenv("MIRSA_TRACE_FILE") or None
