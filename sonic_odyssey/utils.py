import copy
import json
import os
from datetime import datetime
from colorama import Fore, Style, init
from itertools import cycle
from time import sleep

init(autoreset=True)

DEBUG_MODE = False
LOG_FILE = "logs/app.log"
CONFIG_PATH = "data/config.json"

DEFAULT_CONFIG = {
    "app": {
        "keys_file": "data/privateKeys.json",
        "debug": False,
    },
    "network": {
        "type": None,
    },
    "api": {
        "base_url": "https://odyssey-api-beta.sonic.game",
        "timeout": 15,
    },
    "retries": {
        "transaction": 3,
        "box": 3,
        "delay": 1,
    },
    "daily_claim": {
        "min_transactions": 10,
        "max_stage": 3,
        "stage_retries": 3,
    },
    "delays": {
        "between_requests": 1,
        "between_accounts": 2,
        "between_transfers": 1,
    },
    "auto_flow": {
        "enabled": None,
        "interval_hours": 12,
        "max_cycles": 0,
    },
    "transfers": {
        "count": 100,
        "amount_sol": 0.001,
    },
}


def get_current_time():
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')

def write_to_log_file(log_message: str):
    with open(LOG_FILE, "a", encoding="utf-8") as log_file:
        log_file.write(log_message + "\n")

def error_log(message: str):
    current_time = get_current_time()
    log_message = f">> ERROR | {current_time} | {message}"
    print(Fore.RED + log_message)
    write_to_log_file(log_message)

def debug_log(message: str):
    if DEBUG_MODE:
        current_time = get_current_time()
        log_message = f">> DEBUG | {current_time} | {message}"
        print(Fore.LIGHTBLACK_EX + log_message)
        write_to_log_file(log_message)

def success_log(message: str):
    current_time = get_current_time()
    log_message = f">> SUCCESS | {current_time} | {message}"
    print(Fore.GREEN + log_message)
    write_to_log_file(log_message)

def info_log(message: str):
    current_time = get_current_time()
    log_message = f">> INFO | {current_time} | {message}"
    print(Fore.LIGHTBLACK_EX + log_message)
    write_to_log_file(log_message)

def warning_log(message: str):
    current_time = get_current_time()
    log_message = f">> WARNING | {current_time} | {message}"
    print(Fore.YELLOW + log_message)
    write_to_log_file(log_message)

def rate_limit_log(message: str):
    current_time = get_current_time()
    log_message = f">> RATE LIMIT | {current_time} | {message}"
    print(Fore.YELLOW + log_message)
    write_to_log_file(log_message)

def set_debug_mode(enabled: bool):
    global DEBUG_MODE
    DEBUG_MODE = bool(enabled)

def ensure_directories():
    directories = ['data', 'logs']
    for directory in directories:
        os.makedirs(directory, exist_ok=True)

def merge_config(defaults: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged

def load_config(config_path=CONFIG_PATH):
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return merge_config(DEFAULT_CONFIG, json.load(f))
    except FileNotFoundError:
        raise FileNotFoundError(f"Config file not found at {config_path}")

def print_header():
    border = "=" * 44
    print(f"\n{Fore.CYAN}{border}")
    print(f"{Fore.CYAN}| {Fore.YELLOW}Sonic Odyssey rewards bot{' ' * 15}{Fore.CYAN} |")
    print(f"{Fore.CYAN}{border}{Style.RESET_ALL}\n")

def print_farewell():
    print(Fore.MAGENTA + "Thanks for using the Sonic Odyssey rewards bot!")

def ask(prompt: str) -> str:
    return input(f"{Fore.BLUE}{prompt}{Style.RESET_ALL}").strip()

def ask_yes_no(prompt: str) -> bool:
    return ask(f"{prompt} (y/n): ").lower() == "y"

def countdown_timer(seconds):
    for i in range(seconds, 0, -1):
        hours, remainder = divmod(i, 3600)
        minutes, secs = divmod(remainder, 60)
        print(f"\r{Fore.YELLOW}Next run in: {hours:02d}:{minutes:02d}:{secs:02d}", end="")
        sleep(1)
    print(f"\r{Fore.GREEN}Starting now!" + " " * 20)

def read_user_agents():
    return cycle(get_user_agents())


def get_platform(user_agent):
    low_ua = user_agent.lower()
    if "win" in low_ua:
        return '"Windows"'
    elif "mac" in low_ua:
        return '"macOS"'
    elif "linux" in low_ua:
        return '"Linux"'
    else:
        return '"Windows"'


def get_chrome_version(user_agent) -> str:
    return user_agent.split("Chrome/")[1].split(".")[0]


def get_sec_ch_ua(user_agent) -> str:
    chrome_version = get_chrome_version(user_agent)
    return f'"Not_A Brand";v="8", "Chromium";v="{chrome_version}", "Google Chrome";v="{chrome_version}"'


def get_headers(user_agent, token=None):
    headers = {
        "Accept": "*/*",
        "Accept-Language": "en-US,en;q=0.9",
        "Content-Type": "application/json",
        "Origin": "https://odyssey.sonic.game",
        "Referer": "https://odyssey.sonic.game/",
        "User-Agent": user_agent,
        "Sec-Ch-Ua": get_sec_ch_ua(user_agent),
        "Sec-Ch-Ua-Mobile": "?0",
        "Sec-Ch-Ua-Platform": get_platform(user_agent),
        "Sec-Fetch-Dest": "empty",
        "Sec-Fetch-Mode": "cors",
        "Sec-Fetch-Site": "same-site",
    }
    if token:
        headers["Authorization"] = token
    return headers


def get_user_agents():
    return [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/133.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36 Edg/134.0.0.0",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/132.0.0.0 Safari/537.36",
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36",
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/133.0.0.0 Safari/537.36",
    ]
