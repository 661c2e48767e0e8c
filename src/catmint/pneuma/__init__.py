"""
Pneuma - On-chain interaction layer for catmint.

Provides the Terra LCD client, transaction types, protobuf wire encoding
and the wallet that signs contract calls.

Uses httpx + eth-keys instead of a full chain SDK.
"""
