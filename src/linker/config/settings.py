import os
from dotenv import load_dotenv
load_dotenv()
# ---- Solana JSON-RPC ----
SOLANA_RPC_DEFAULT_ENDPOINT = "https://api.mainnet-beta.solana.com"
SOLANA_RPC_ENDPOINT = os.environ.get("SOLANA_RPC_ENDPOINT") or SOLANA_RPC_DEFAULT_ENDPOINT

SOLANA_RPC_TIMEOUT_SEC = float(os.environ.get("SOLANA_RPC_TIMEOUT_SEC", "30"))
SOLANA_RPC_MAX_RETRIES = int(os.environ.get("SOLANA_RPC_MAX_RETRIES", "5"))
SOLANA_RPC_REQUESTS_PER_SEC = float(os.environ.get("SOLANA_RPC_REQUESTS_PER_SEC", "8.0"))
SOLANA_RPC_PAGE_SIZE = 1000      # hard cap of getSignaturesForAddress
SOLANA_RPC_COMMITMENT = "confirmed"

# ---- History ----
MAX_HISTORY_TRANSACTIONS = 10_000
DEFAULT_HISTORY_TRANSACTIONS = 10_000

# ---- Path search ----
DEFAULT_MAX_DEPTH = 6
DEFAULT_MAX_RESULTS = 10

# Program / sysvar accounts present in a large share of all transactions.
# Linking through them says nothing about the wallets, so --exclude-programs drops them.
KNOWN_PROGRAM_ACCOUNTS = {
    "11111111111111111111111111111111": "System Program",
    "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA": "SPL Token",
    "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb": "SPL Token-2022",
    "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL": "Associated Token Account",
    "ComputeBudget111111111111111111111111111111": "Compute Budget",
    "MemoSq4gqABAXKb96qnH8TysNcWxMyWCqXgDLGmfcHr": "Memo v2",
    "Memo1UhkJRfHyvLMcVucJwxXeuD728EqVDDwQDxFMNo": "Memo v1",
    "Vote111111111111111111111111111111111111111": "Vote Program",
    "Stake11111111111111111111111111111111111111": "Stake Program",
    "AddressLookupTab1e1111111111111111111111111": "Address Lookup Table",
    "SysvarRent111111111111111111111111111111111": "Sysvar Rent",
    "SysvarC1ock11111111111111111111111111111111": "Sysvar Clock",
    "Sysvar1nstructions1111111111111111111111111": "Sysvar Instructions",
    "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4": "Jupiter Aggregator v6",
    "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc": "Orca Whirlpool",
    "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8": "Raydium AMM v4",
}
