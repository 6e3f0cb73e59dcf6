from time import sleep
from typing import List, Optional, Tuple
import requests
from colorama import Fore
from solders.keypair import Keypair
from .api import SonicAPI, describe_error
from .networks import Network, create_connection, resolve_network
from .rewards import RewardManager
from .transactions import LAMPORTS_PER_SOL, TransactionSubmitter
from .utils import (
    ask,
    ask_yes_no,
    countdown_timer,
    ensure_directories,
    error_log,
    info_log,
    load_config,
    print_farewell,
    print_header,
    read_user_agents,
    set_debug_mode,
    success_log,
    warning_log,
)
from .wallet import load_keypair, read_private_keys, short_address

LOW_BALANCE_MESSAGE = (
    "There might be errors if you don't have sufficient balance or the RPC is down. "
    "Please ensure your balance is sufficient and your connection is stable"
)


class AccountSession:
    def __init__(self, account_number: int, keypair: Keypair, api: SonicAPI, rewards: RewardManager):
        self.account_number = account_number
        self.keypair = keypair
        self.api = api
        self.rewards = rewards
        self.address = str(keypair.pubkey())

    @property
    def token(self):
        return self.api.token_manager.token

    def ensure_token(self):
        return self.api.token_manager.ensure_token(self.keypair)


class OdysseyProcessor:
    def __init__(self, config, network: Network, connection):
        self.config = config
        self.network = network
        self.connection = connection
        self.user_agents_cycle = read_user_agents()
        self.submitter = TransactionSubmitter(
            connection,
            retries=config["retries"]["transaction"],
            retry_delay=config["retries"]["delay"],
        )
        self.account_delay = config["delays"]["between_accounts"]
        self.sessions = {}

    def _get_session(self, account_number: int, keypair: Keypair) -> AccountSession:
        account = self.sessions.get(account_number)
        if account is None:
            api = SonicAPI(self.config, self.network, requests.Session(), next(self.user_agents_cycle))
            account = AccountSession(
                account_number, keypair, api, RewardManager(api, self.submitter, self.config)
            )
            self.sessions[account_number] = account
        return account

    def login_account(self, account_number: int, keypair: Keypair) -> Tuple[Optional[AccountSession], Optional[dict]]:
        account = self._get_session(account_number, keypair)
        info_log(f"Processing account {account_number}: {short_address(account.address)}")

        token = account.ensure_token()
        if not token:
            error_log(f"Account {account_number}: login failed, skipping")
            return None, None

        profile = account.api.get_profile(token)
        if profile is None:
            error_log(f"Account {account_number}: could not fetch profile, skipping")
            return None, None

        return account, profile

    def print_profile(self, address: str, profile: dict):
        balance = profile.get("wallet_balance", 0) / LAMPORTS_PER_SOL
        print(Fore.GREEN + f"Hello {address}! Here are your details:")
        print(Fore.GREEN + f"Solana Balance: {balance} SOL")
        print(Fore.GREEN + f"Ring Balance: {profile.get('ring')}")
        print(Fore.GREEN + f"Available Box(es): {profile.get('ring_monitor')}")
        print("")

    def has_balance(self, profile: dict) -> bool:
        if (profile.get("wallet_balance") or 0) > 0:
            return True
        warning_log(LOW_BALANCE_MESSAGE)
        return False

    def ask_box_count(self, available: int) -> int:
        while True:
            answer = ask(f"How many boxes do you want to open? (Maximum is: {available}): ")
            try:
                total = int(answer)
            except ValueError:
                error_log("Please enter a valid number")
                continue
            if total < 0:
                error_log("Please enter a valid number")
            elif total > available:
                error_log("You cannot open more boxes than available")
            else:
                return total

    def ask_transfer_count(self) -> int:
        default_count = self.config["transfers"]["count"]
        answer = ask(f"How many transfers do you want to send? (default {default_count}): ")
        if not answer:
            return default_count
        try:
            return max(int(answer), 0)
        except ValueError:
            error_log(f"Please enter a valid number, using {default_count}")
            return default_count

    def run_manual(self, account_number: int, keypair: Keypair):
        account, profile = self.login_account(account_number, keypair)
        if account is None:
            return

        if not self.has_balance(profile):
            return

        self.print_profile(account.address, profile)
        method = ask(
            "Select input method (1 for claim box, 2 for open box, 3 for daily login, "
            "4 for sending SOL to random addresses): "
        )
        print("")

        if method == "1":
            info_log("Claiming daily rewards...")
            account.rewards.daily_claim(account.token)
            success_log("Daily claim completed!")
        elif method == "2":
            total = self.ask_box_count(profile.get("ring_monitor") or 0)
            info_log("Opening boxes...")
            opened = account.rewards.open_multiple_boxes(account.token, keypair, total)
            success_log(f"Box opening completed! Opened {opened} box(es)")
        elif method == "3":
            info_log("Performing daily login...")
            account.rewards.daily_login(account.token, keypair)
            success_log("Daily login completed!")
        elif method == "4":
            count = self.ask_transfer_count()
            amount = self.config["transfers"]["amount_sol"]
            info_log(f"Sending {amount} SOL to {count} random addresses...")
            sent = account.rewards.send_to_random_addresses(keypair, count, amount)
            success_log(f"Transfers completed! {sent}/{count} sent")
        else:
            error_log("Invalid input method selected")

    def run_auto_cycle(self, account_number: int, keypair: Keypair) -> bool:
        account, profile = self.login_account(account_number, keypair)
        if account is None or not self.has_balance(profile):
            return False

        self.print_profile(account.address, profile)
        account.rewards.daily_login(account.token, keypair)
        account.rewards.daily_claim(account.token)

        refreshed = account.api.get_profile(account.token) or {}
        available_boxes = refreshed.get("ring_monitor") or 0
        info_log(f"Account {account_number}: {available_boxes} box(es) available")
        account.rewards.open_multiple_boxes(account.token, keypair, available_boxes)

        success_log(f"Account {account_number}: Auto flow completed!")
        return True

    def _process_keys(self, keypairs: List[Tuple[int, Keypair]], handler):
        for index, (account_number, keypair) in enumerate(keypairs):
            try:
                handler(account_number, keypair)
            except Exception as e:
                error_log(f"Error processing private key: {describe_error(e)}")
            print("")
            if index < len(keypairs) - 1:
                sleep(self.account_delay)

    def run_auto_flow(self, keypairs: List[Tuple[int, Keypair]]):
        interval_hours = self.config["auto_flow"]["interval_hours"]
        max_cycles = self.config["auto_flow"]["max_cycles"]
        cycle_number = 0

        while True:
            cycle_number += 1
            info_log(f"Starting auto flow cycle {cycle_number}...")
            self._process_keys(keypairs, self.run_auto_cycle)

            if max_cycles and cycle_number >= max_cycles:
                info_log(f"Reached configured limit of {max_cycles} cycle(s)")
                return

            warning_log(f"Waiting {interval_hours} hours before next run...")
            countdown_timer(int(interval_hours * 60 * 60))

    def run(self, private_keys: List[str], auto: bool):
        keypairs = []
        for account_number, credential in enumerate(private_keys, 1):
            try:
                keypairs.append((account_number, load_keypair(credential)))
            except ValueError as e:
                error_log(f"Account {account_number}: {str(e)}")

        if not keypairs:
            error_log("No valid private keys to process")
            return

        info_log(f"Loaded {len(keypairs)} account(s) on {self.network.name}")
        if auto:
            self.run_auto_flow(keypairs)
        else:
            self._process_keys(keypairs, self.run_manual)
        success_log("All private keys processed.")


def run_cli(config_path=None):
    try:
        ensure_directories()
        config = load_config(config_path) if config_path else load_config()
        set_debug_mode(config["app"].get("debug", False))
        print_header()

        network = resolve_network(config)
        connection = create_connection(network)
        private_keys = read_private_keys(config["app"]["keys_file"])

        auto = config["auto_flow"].get("enabled")
        if auto is None:
            auto = ask_yes_no("Do you want to use auto flow?")
            print("")

        OdysseyProcessor(config, network, connection).run(private_keys, auto)
    except KeyboardInterrupt:
        warning_log("Interrupted by user")
    except Exception as e:
        error_log(f"Error in bot operation: {describe_error(e)}")
    finally:
        print_farewell()
