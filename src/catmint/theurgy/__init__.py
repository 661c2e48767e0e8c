"""
Theurgy - Command implementations for catmint.

Each module corresponds to a top-level CLI command:
- mint:          Pay LUNA to the cat-mint contract and receive a CAT
- state:         Query contract state and the current mint price
- update_config: Point the contract at a new CAT token (owner only)
"""
