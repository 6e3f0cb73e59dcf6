from time import sleep
from typing import Dict, Optional
from colorama import Fore
from solders.keypair import Keypair
from .api import SonicAPI, SonicAPIError, describe_error
from .transactions import TransactionSubmitter, sign_server_transaction
from .utils import error_log, info_log, success_log, warning_log
from .wallet import generate_random_addresses, short_address

ALREADY_DONE = "already_done"
NOT_READY = "not_ready"
TRANSIENT = "transient"

ALREADY_CLAIMED_CODES = (100015, 100016)
ALREADY_CHECKED_IN_MESSAGE = "current account already checked in"
INTERACT_NOT_FINISHED_MESSAGE = "interact task not finished"

CLAIMED = "claimed"
SKIPPED = "skipped"
FAILED = "failed"


def classify_error(error: Exception) -> str:
    if isinstance(error, SonicAPIError):
        if error.code in ALREADY_CLAIMED_CODES or error.message == ALREADY_CHECKED_IN_MESSAGE:
            return ALREADY_DONE
        if error.message == INTERACT_NOT_FINISHED_MESSAGE:
            return NOT_READY
    return TRANSIENT


class RewardManager:
    def __init__(self, api: SonicAPI, submitter: TransactionSubmitter, config):
        self.api = api
        self.submitter = submitter
        self.config = config
        self.request_delay = config["delays"]["between_requests"]
        self.transfer_delay = config["delays"]["between_transfers"]
        self.box_retries = config["retries"]["box"]
        self.retry_delay = config["retries"]["delay"]
        self.min_transactions = config["daily_claim"]["min_transactions"]
        self.max_stage = config["daily_claim"]["max_stage"]
        self.stage_retries = config["daily_claim"]["stage_retries"]

    def daily_login(self, token: str, keypair: Keypair) -> Optional[dict]:
        try:
            encoded_tx = self.api.build_check_in_tx(token)
            tx = sign_server_transaction(encoded_tx, keypair)
            signature = self.submitter.submit(tx)
            response = self.api.check_in(token, signature)
            success_log(f"Daily login completed for {short_address(keypair.pubkey())}")
            return response
        except Exception as e:
            if classify_error(e) == ALREADY_DONE:
                info_log(f"Daily login skipped: {describe_error(e)}")
            else:
                error_log(f"Error in daily login: {describe_error(e)}")
            return None

    def daily_claim(self, token: str) -> Dict[int, str]:
        results = {}
        total_transactions = self.api.fetch_daily(token)
        info_log(f"Your total transactions: {total_transactions}")

        if total_transactions is None or total_transactions <= self.min_transactions:
            error_log("Error in daily claim: Not enough transactions to claim rewards.")
            return results

        stage = 1
        failures = 0
        while stage <= self.max_stage:
            try:
                data = self.api.claim_stage(token, stage)
                success_log(
                    f"Daily claim for stage {stage} has been successful! "
                    f"Stage: {stage} | Status: {Fore.GREEN}{(data or {}).get('claimed')}{Fore.RESET}"
                )
                results[stage] = CLAIMED
                stage += 1
                failures = 0
            except Exception as e:
                kind = classify_error(e)
                if kind == NOT_READY:
                    error_log(f"Error claiming for stage {stage}: {describe_error(e)}")
                    results[stage] = SKIPPED
                    stage += 1
                    failures = 0
                elif kind == ALREADY_DONE:
                    info_log(f"Already claimed for stage {stage}, proceeding to the next stage...")
                    results[stage] = SKIPPED
                    stage += 1
                    failures = 0
                else:
                    failures += 1
                    error_log(
                        f"Error claiming stage {stage} "
                        f"(attempt {failures}/{self.stage_retries}): {describe_error(e)}"
                    )
                    if failures >= self.stage_retries:
                        results[stage] = FAILED
                        stage += 1
                        failures = 0
            finally:
                sleep(self.request_delay)

        success_log("All stages processed or max stage reached.")
        return results

    def open_mystery_box(self, token: str, keypair: Keypair) -> dict:
        retries_left = self.box_retries
        while True:
            try:
                encoded_tx = self.api.build_mystery_box_tx(token)
                tx = sign_server_transaction(encoded_tx, keypair)
                signature = self.submitter.submit(tx)
                return self.api.open_mystery_box(token, signature)
            except Exception as e:
                if retries_left <= 0:
                    error_log(f"Error opening mystery box: {describe_error(e)}")
                    raise
                warning_log(f"Retrying opening mystery box... ({retries_left} retries left)")
                retries_left -= 1
                sleep(self.retry_delay)

    def open_multiple_boxes(self, token: str, keypair: Keypair, total: int) -> int:
        opened = 0
        for _ in range(total):
            try:
                opened_box = self.open_mystery_box(token, keypair)
            except Exception:
                error_log(f"Stopped opening boxes after {opened} of {total}")
                break

            data = opened_box.get("data") or {}
            if data.get("success"):
                opened += 1
                success_log(
                    f"Box opened successfully! Status: {opened_box.get('status')} "
                    f"| Amount: {data.get('amount')}"
                )
            else:
                info_log("All boxes have been opened.")
                break
        return opened

    def send_to_random_addresses(self, keypair: Keypair, count: int, amount_sol: float) -> int:
        sent = 0
        for index, address in enumerate(generate_random_addresses(count), 1):
            try:
                signature = self.submitter.transfer_sol(keypair, address, amount_sol)
                sent += 1
                success_log(
                    f"[{index}/{count}] Sent {amount_sol} SOL to {short_address(address)}: {signature}"
                )
            except Exception as e:
                error_log(f"[{index}/{count}] Transfer to {short_address(address)} failed: {str(e)}")
            sleep(self.transfer_delay)
        return sent
