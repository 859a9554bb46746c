"""CKB address constants and runtime configuration.

Keep the constants aligned with RFC 0021 (CKB address format) and the
system script list in RFC 0024.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Hashing
CKB_HASH_PERSONALIZATION = b"ckb-default-hash"
HASH_SIZE = 32
BLAKE160_SIZE = 20

# Payload layout
CODE_HASH_SIZE = 32
SHORT_ARGS_SIZE = BLAKE160_SIZE
SINCE_SIZE = 8

# Multisig descriptor limits (each header field is a single byte)
MAX_MULTISIG_MEMBERS = 0xFF
MAX_MULTISIG_HEADER_VALUE = 0xFF

# Network prefixes
PREFIX_MAINNET = "ckb"
PREFIX_TESTNET = "ckt"

# Environment knobs for the command line
ENV_NETWORK = "CKB_ADDRESS_NETWORK"
ENV_LOG_LEVEL = "CKB_ADDRESS_LOG_LEVEL"
ENV_VERBOSE = "CKB_ADDRESS_VERBOSE"


@dataclass
class CliConfig:
    """Runtime settings for the ``ckb-address`` command."""
    network: str = "mainnet"
    log_level: str = "WARNING"
    verbose: bool = False

    @classmethod
    def from_env(cls) -> "CliConfig":
        """Load configuration from environment variables."""
        config = cls()
        config.network = os.environ.get(ENV_NETWORK, config.network).lower()
        config.log_level = os.environ.get(ENV_LOG_LEVEL, config.log_level).upper()
        config.verbose = os.environ.get(ENV_VERBOSE, "").lower() in ("true", "1", "yes")
        if config.verbose:
            config.log_level = "DEBUG"
        return config
