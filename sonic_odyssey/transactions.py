import base64
from time import sleep
from solana.rpc.api import Client
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction
from .utils import error_log, warning_log, debug_log

LAMPORTS_PER_SOL = 1_000_000_000


def deserialize_transaction(encoded: str) -> Transaction:
    return Transaction.from_bytes(base64.b64decode(encoded))


def sign_server_transaction(encoded: str, keypair: Keypair) -> Transaction:
    tx = deserialize_transaction(encoded)
    tx.partial_sign([keypair], tx.message.recent_blockhash)
    return tx


class TransactionSubmitter:
    def __init__(self, connection: Client, retries: int = 3, retry_delay: float = 1):
        self.connection = connection
        self.retries = retries
        self.retry_delay = retry_delay

    def submit(self, tx: Transaction) -> str:
        retries_left = self.retries
        while True:
            try:
                response = self.connection.send_raw_transaction(bytes(tx))
                signature = response.value
                debug_log(f"Sent transaction {signature}, waiting for confirmation")
                self.connection.confirm_transaction(signature)
                return str(signature)
            except Exception as e:
                if retries_left <= 0:
                    error_log(f"Error in transaction: {str(e)}")
                    raise
                warning_log(f"Retrying transaction... ({retries_left} retries left)")
                retries_left -= 1
                sleep(self.retry_delay)

    def transfer_sol(self, keypair: Keypair, to_address: str, amount_sol: float) -> str:
        instruction = transfer(
            TransferParams(
                from_pubkey=keypair.pubkey(),
                to_pubkey=Pubkey.from_string(to_address),
                lamports=int(amount_sol * LAMPORTS_PER_SOL),
            )
        )
        blockhash = self.connection.get_latest_blockhash().value.blockhash
        tx = Transaction.new_signed_with_payer(
            [instruction], keypair.pubkey(), [keypair], blockhash
        )
        return self.submit(tx)

    def get_balance(self, address) -> float:
        if isinstance(address, str):
            address = Pubkey.from_string(address)
        lamports = self.connection.get_balance(address).value
        return lamports / LAMPORTS_PER_SOL
