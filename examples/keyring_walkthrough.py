#!/usr/bin/env python3

"""Create an HD keyring, derive accounts, persist it and sign with a software device"""

import asyncio
import json
import logging

import base58

from solana_keyring import (
    CallbackSignerTransport,
    HdKeyringFactory,
    KeyPair,
    LedgerKeyringFactory,
    keyring_from_json,
)
from solana_keyring.runtime.encoding import encode_signature

logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

DEMO_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)


def hd_demo():
    """Derive accounts, drop one and restore from the persisted record"""
    print("=== HD keyring ===")
    keyring = HdKeyringFactory().from_mnemonic(DEMO_MNEMONIC)
    keyring.derive_next()
    keyring.derive_next()
    for index, address in zip(keyring.account_indices, keyring.public_keys()):
        print(f"  account {index}: {address}")

    keyring.delete_public_key(keyring.get_public_key(1))
    print(f"After deleting account 1: indices {keyring.account_indices}")

    record = json.loads(json.dumps(keyring.to_json()))
    restored = keyring_from_json("hd", record)
    assert restored.public_keys() == keyring.public_keys()
    print(f"Restored from JSON: {restored!r}")

    signature = restored.sign_transaction(b"demo transaction", restored.get_public_key(2))
    print(f"Signature from account 2: {signature}")


async def ledger_demo():
    """Route a signing request through an in-process stand-in for a device"""
    print("\n=== Ledger keyring (software device) ===")
    device_key = KeyPair.generate()

    async def device(request):
        print(f"  device received {request['method']} for {request['devicePath']}")
        return {"signature": encode_signature(device_key.sign(base58.b58decode(request["encodedPayload"])))}

    transport = CallbackSignerTransport(device, timeout=5.0)
    keyring = LedgerKeyringFactory(transport).from_accounts([])
    keyring.ledger_import("44'/501'/0'/0'", 0, device_key.address)

    signature = await keyring.sign_message(b"hello from the wallet", device_key.address)
    print(f"Device signature: {signature}")
    print(f"Persisted form: {keyring.to_string()}")


def main():
    """Main example function"""
    hd_demo()
    asyncio.run(ledger_demo())


if __name__ == "__main__":
    main()
