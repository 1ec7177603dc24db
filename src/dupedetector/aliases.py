from dupedetector.core.hasher import XXHASH_ALGORITHMS

ALGORITHM_ALIASES = {
    "sha256": "sha256",
    "sha-256": "sha256",
    "sha512": "sha512",
    "sha-512": "sha512",
    "blake2b": "blake2b",
    "blake2s": "blake2s",
    "sha3-256": "sha3_256",
    "xxh64": "xxh64",
    "xxh3": "xxh3_64",
    "xxh128": "xxh128",
}

ALGORITHM_HELP_TEXT = (
    "Digest algorithm for groups of three or more same-sized files:\n"
    "  sha256     : SHA-256 (default)\n"
    "  sha512     : SHA-512\n"
    "  blake2b    : BLAKE2b, usually faster than SHA-256 on 64-bit CPUs\n"
    f"  {', '.join(XXHASH_ALGORITHMS)}\n"
    "             : xxHash, very fast but NOT cryptographic (trusted data only)\n"
    "Any other hashlib algorithm name is accepted as well.\n"
    "Example    : %(prog)s -a blake2b ~/Pictures\n"
)

EXCLUDE_HELP_TEXT = (
    "Ignore paths matching this regex (repeatable, case-insensitive).\n"
    "The pattern must match a whole trailing part of the path:\n"
    "  -e '\\.git'      : skips every .git folder\n"
    "  -e '.*\\.tmp'    : skips files ending with .tmp\n"
    "  -e '/mnt/old/.*' : skips everything under /mnt/old\n"
)

MIN_SIZE_HELP_TEXT = (
    "Ignore files smaller than this. Default: 1 (skip empty files)\n"
    "Units: k, M, G (powers of 1000) or ki, Mi, Gi (powers of 1024),\n"
    "optionally followed by B. Example: --min 1.5MiB\n"
)

EPILOG_TEXT = """
Nothing is ever moved, changed or deleted; results are only printed.

How it works:
  Files whose sizes are unique are skipped. When exactly two files share a size,
  their contents are compared directly and reading stops at the first difference.
  Three or more same-sized files are each read once to compute a digest.

Examples:
  Find duplicates in two folders
  %(prog)s ~/Pictures /mnt/backup/Pictures

  Only files of 1 MB or more, skipping version-control folders
  %(prog)s --min 1M -e '\\.git' -e '\\.svn' ~/src

  Paths that start with a dash
  %(prog)s -- -weird-folder-name
"""


def resolve_algorithm(name: str) -> str:
    """Maps a user-facing alias to the algorithm name used by the engine."""
    key = name.strip().lower()
    return ALGORITHM_ALIASES.get(key, key)
