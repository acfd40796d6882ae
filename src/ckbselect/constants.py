"""
CKB size and selection constants.

Sizes are molecule-serialized byte counts. Parts that live in a dynamic
vector (outputs, outputs data, witnesses) include the 4-byte offset entry
the vector header spends on them.
"""

from __future__ import annotations

# 1 CKByte = 100_000_000 shannons
COIN = 100_000_000

# Total CKB issuance cap, used as the "no selection yet" waste sentinel
MAX_MONEY = 336 * 10**8 * COIN

# Iteration cap for the Branch and Bound search
TOTAL_TRIES = 100_000

# Fee rates are expressed in shannons per 1000 bytes
FEE_RATE_DENOMINATOR = 1000
DEFAULT_FEE_RATE = 1000

# OutPoint: tx_hash (32) + index (4)
OUT_POINT_SIZE = 36

# CellInput: since (8) + previous_output
INPUT_SIZE = 8 + OUT_POINT_SIZE  # 44 bytes

# CellDep: out_point + dep_type (1)
CELL_DEP_SIZE = OUT_POINT_SIZE + 1  # 37 bytes

# Header deps are plain 32-byte hashes
HEADER_DEP_SIZE = 32

# Molecule length prefix for Bytes and per-item offset in dynvecs
NUMBER_SIZE = 4

# Recoverable secp256k1 signature
SECP_SIGNATURE_SIZE = 65

# WitnessArgs table: header (4 + 3 * 4) + lock as Bytes (4 + 65), empty
# input_type/output_type
SECP_WITNESS_ARGS_SIZE = 16 + NUMBER_SIZE + SECP_SIGNATURE_SIZE  # 85 bytes

# Witness as Bytes in the witnesses dynvec: length prefix + offset
SECP_WITNESS_SIZE = SECP_WITNESS_ARGS_SIZE + NUMBER_SIZE + NUMBER_SIZE  # 93 bytes

# Table header for a table with 3 fields: total size + 3 offsets
TABLE_HEADER_SIZE = 16

# Script: header + code_hash (32) + hash_type (1) + args length prefix
SCRIPT_FIXED_SIZE = TABLE_HEADER_SIZE + 32 + 1 + NUMBER_SIZE  # 53 bytes

# CellOutput: header + capacity (8), scripts added separately
CELL_OUTPUT_FIXED_SIZE = TABLE_HEADER_SIZE + 8
