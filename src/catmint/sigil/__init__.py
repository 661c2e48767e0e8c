"""
Sigil - Key material: BIP39 mnemonics, secp256k1 keys and bech32 addresses.
"""
