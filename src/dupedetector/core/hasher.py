"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements whole-file digesting using CandidateFile and pluggable hash algorithms.

DigesterImpl streams a file through a fixed-size buffer into the algorithm's
accumulator and caches the result on the CandidateFile, so each file is read
at most once no matter how often its digest is asked for.
"""

import hashlib
import logging
from typing import List

import xxhash

from dupedetector.core.models import (
    CandidateFile, Digest, DigestStatus, DIGEST_ERROR, DEFAULT_ALGORITHM, DEFAULT_BUFFER_SIZE
)
from dupedetector.core.interfaces import Digester, DigestAlgorithm, HashAccumulator
from dupedetector.core.state import ScanState

logger = logging.getLogger(__name__)

# Fast, non-cryptographic. Opt-in only.
XXHASH_ALGORITHMS = ("xxh64", "xxh3_64", "xxh3_128", "xxh128")

# SHA-256 and up.
MIN_STRONG_DIGEST_SIZE = 32


class UnsupportedAlgorithmError(ValueError):
    """Raised when a digest algorithm name is not available."""


class HashlibAlgorithmImpl(DigestAlgorithm):
    """Any algorithm hashlib knows about (sha256, sha512, blake2b, sha3_256, ...)."""

    def __init__(self, name: str = DEFAULT_ALGORITHM):
        # SHAKE digests need an explicit length.
        if name.startswith("shake_"):
            raise UnsupportedAlgorithmError(f"This digest algorithm is not available: {name}")
        try:
            hashlib.new(name)
        except (ValueError, TypeError) as e:
            raise UnsupportedAlgorithmError(f"This digest algorithm is not available: {name}") from e
        self.name = name

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.name).digest_size

    def new(self) -> HashAccumulator:
        return hashlib.new(self.name)


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(DigestAlgorithm):
    def __init__(self, name: str = "xxh3_128"):
        if name not in XXHASH_ALGORITHMS:
            raise UnsupportedAlgorithmError(f"This digest algorithm is not available: {name}")
        self.name = name

    @property
    def digest_size(self) -> int:
        return self.new().digest_size

    def new(self) -> HashAccumulator:
        return getattr(xxhash, self.name)()


def get_algorithm(name: str) -> DigestAlgorithm:
    """Look up a digest algorithm by name. Raises UnsupportedAlgorithmError."""
    name = name.strip().lower()
    if name in XXHASH_ALGORITHMS:
        return XXHashAlgorithmImpl(name)
    return HashlibAlgorithmImpl(name)


def is_supported(name: str) -> bool:
    try:
        get_algorithm(name)
        return True
    except UnsupportedAlgorithmError:
        return False


def is_collision_resistant(name: str) -> bool:
    """
    True for cryptographic digests of at least MIN_STRONG_DIGEST_SIZE bytes.
    Weaker digests make a match among 3+ files likely, not certain.
    """
    algorithm = get_algorithm(name)
    return (
        algorithm.name not in XXHASH_ALGORITHMS
        and algorithm.digest_size >= MIN_STRONG_DIGEST_SIZE
    )


def available_algorithms() -> List[str]:
    """Cryptographic algorithms first, then the xxHash family."""
    names = sorted(n.lower() for n in hashlib.algorithms_available)
    return [n for n in dict.fromkeys(names) if is_supported(n)] + list(XXHASH_ALGORITHMS)


class DigesterImpl(Digester):
    """
    Digest engine. Computes and caches a file's digest in its CandidateFile.

    A digest is only trusted if the file was read to the end and closed cleanly;
    any failure (unknown algorithm, open/read/close error) stores DIGEST_ERROR,
    which never matches any other digest. Each first-time computation, successful
    or not, takes one file off the pending counter.
    """

    def __init__(self, state: ScanState, algorithm: str = DEFAULT_ALGORITHM,
                 buffer_size: int = DEFAULT_BUFFER_SIZE):
        self.state = state
        self.algorithm_name = algorithm
        self.buffer_size = buffer_size
        self.files_digested = 0

    def compute_digest(self, file: CandidateFile) -> Digest:
        if file.digest.status is not DigestStatus.NOT_COMPUTED:
            return file.digest

        try:
            file.digest = self._digest_file(file)
        finally:
            self.files_digested += 1
            self.state.reduce_pending(1)
        return file.digest

    def _digest_file(self, file: CandidateFile) -> Digest:
        try:
            accumulator = get_algorithm(self.algorithm_name).new()
        except UnsupportedAlgorithmError as e:
            self.state.report_error(f"This file was not compared because its digest could not be computed: {file.path}", e)
            return DIGEST_ERROR

        try:
            # Closing happens in the with-block exit; a close failure lands here too.
            with open(file.path, 'rb') as f:
                for block in iter(lambda: f.read(self.buffer_size), b''):
                    accumulator.update(block)
        except OSError as e:
            self.state.report_error(f"This file was not compared because it could not be read: {file.path}", e)
            return DIGEST_ERROR

        result = Digest.computed(accumulator.digest())
        logger.debug(f"Digested {file.path}: {result.value.hex()}")
        return result
