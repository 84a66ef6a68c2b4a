# nttprimes/config.py
# Search budgets, read once from the environment at import time.
# Every public operation takes a keyword override that falls back to these.
import os

MAX_ATTEMPTS        = int(os.getenv("NTT_MAX_ATTEMPTS", "200000"))   # random draws per call
PROTH_BASES         = int(os.getenv("NTT_PROTH_BASES", "32"))        # witness primes tried by Proth
POCKLINGTON_BASES   = int(os.getenv("NTT_POCKLINGTON_BASES", "32"))  # witness primes per factor
FACTOR_BOUND        = int(os.getenv("NTT_FACTOR_BOUND", "65536"))    # Pocklington trial division
TRIAL_BOUND         = int(os.getenv("NTT_TRIAL_BOUND", "65536"))     # root finder trial division
RHO_ITERATIONS      = int(os.getenv("NTT_RHO_ITERATIONS", "500000")) # Pollard-rho f() evaluations
GENERATOR_LIMIT     = int(os.getenv("NTT_GENERATOR_LIMIT", "2000"))  # largest g tried as generator
WORKERS             = int(os.getenv("NTT_WORKERS", "1"))             # 1 => scan in-process
SHARD_SIZE          = int(os.getenv("NTT_SHARD_SIZE", "2048"))       # candidates per descending shard
