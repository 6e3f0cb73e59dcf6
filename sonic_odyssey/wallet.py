import base64
import json
import re
from typing import List
import base58
from mnemonic import Mnemonic
from solders.keypair import Keypair

SOLANA_DERIVATION_PATH = "m/44'/501'/0'/0'"
BASE58_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]+$")


def is_valid_base58(value: str) -> bool:
    return bool(BASE58_PATTERN.match(value))


def keypair_from_private_key(private_key: str) -> Keypair:
    private_key = private_key.strip()
    if not is_valid_base58(private_key):
        raise ValueError("Invalid private key format: Non-base58 character detected")
    try:
        return Keypair.from_bytes(base58.b58decode(private_key))
    except Exception as e:
        raise ValueError(f"Invalid private key format: {e}") from e


def keypair_from_seed_phrase(seed_phrase: str, passphrase: str = "") -> Keypair:
    words = " ".join(seed_phrase.split())
    mnemo = Mnemonic("english")
    if not mnemo.check(words):
        raise ValueError("Invalid private key format: seed phrase failed checksum")
    seed = Mnemonic.to_seed(words, passphrase=passphrase)
    return Keypair.from_seed_and_derivation_path(seed, SOLANA_DERIVATION_PATH)


def load_keypair(credential: str) -> Keypair:
    if len(credential.split()) > 1:
        return keypair_from_seed_phrase(credential)
    return keypair_from_private_key(credential)


def read_private_keys(file_path) -> List[str]:
    with open(file_path, 'r', encoding='utf-8') as f:
        if str(file_path).endswith('.json'):
            entries = json.load(f)
            if not isinstance(entries, list):
                raise ValueError(f"{file_path} must contain a JSON array of private keys")
        else:
            entries = f.readlines()

    unique_keys = []
    for entry in entries:
        credential = str(entry).strip()
        if credential and credential not in unique_keys:
            unique_keys.append(credential)
    return unique_keys


def sign_message(keypair: Keypair, message: str) -> str:
    signature = keypair.sign_message(message.encode("utf-8"))
    return base64.b64encode(bytes(signature)).decode()


def encoded_public_key(keypair: Keypair) -> str:
    return base64.b64encode(bytes(keypair.pubkey())).decode()


def short_address(address) -> str:
    address = str(address)
    if len(address) <= 10:
        return address
    return f"{address[:4]}...{address[-4:]}"


def generate_random_addresses(count: int) -> List[str]:
    return [str(Keypair().pubkey()) for _ in range(count)]
