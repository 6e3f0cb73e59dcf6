from datetime import datetime, timedelta
from typing import Optional
import jwt
import pytz
import requests
from solders.keypair import Keypair
from .networks import Network, api_url
from .utils import (
    error_log,
    info_log,
    debug_log,
    rate_limit_log,
    get_headers,
)
from .wallet import encoded_public_key, sign_message, short_address


class SonicAPIError(Exception):
    def __init__(self, status_code: int, code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message

    @classmethod
    def from_response(cls, response):
        code = None
        message = response.text
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            code = body.get("code")
            message = body.get("message") or message
        return cls(response.status_code, code, message or f"HTTP {response.status_code}")


API_FAILURES = (
    SonicAPIError,
    requests.exceptions.RequestException,
    KeyError,
    TypeError,
    ValueError,
    AttributeError,
)


def describe_error(error: Exception) -> str:
    if isinstance(error, SonicAPIError):
        return error.message
    return str(error)


class TokenManager:
    def __init__(self, api_instance):
        self.api = api_instance
        self.token = None

    def validate_token(self, token: Optional[str]) -> bool:
        if not token:
            return False
        try:
            decoded = jwt.decode(token, options={"verify_signature": False})
            exp_timestamp = decoded.get("exp")
            if not exp_timestamp:
                return False

            expiration = datetime.fromtimestamp(exp_timestamp, pytz.UTC)
            current_time = datetime.now(pytz.UTC)

            return current_time < (expiration - timedelta(minutes=5))
        except (jwt.InvalidTokenError, TypeError, ValueError, OverflowError, OSError):
            return False

    def ensure_token(self, keypair: Keypair) -> Optional[str]:
        if self.validate_token(self.token):
            return self.token
        if self.token:
            info_log(f"Token for {short_address(keypair.pubkey())} expired, logging in again")
        self.token = self.api.login(keypair)
        return self.token


class SonicAPI:
    def __init__(self, config, network: Network, session: requests.Session, user_agent: str):
        self.config = config
        self.network = network
        self.session = session
        self.user_agent = user_agent
        self.base_url = config["api"]["base_url"]
        self.timeout = config["api"].get("timeout", 15)
        self.token_manager = TokenManager(self)

        debug_log(f"SonicAPI initialized with base_url: {self.base_url}, network: {network.name}")

    def _request(self, method: str, path: str, token: Optional[str] = None, **kwargs):
        url = api_url(self.base_url, self.network, path)
        response = self.session.request(
            method,
            url,
            headers=get_headers(self.user_agent, token),
            timeout=self.timeout,
            **kwargs,
        )

        if response.status_code == 429:
            rate_limit_log(f"Rate limit hit on {method} {path}")

        if not response.ok:
            raise SonicAPIError.from_response(response)

        return response.json()

    def get_challenge(self, wallet: str) -> str:
        data = self._request("GET", "/auth/sonic/challenge", params={"wallet": wallet})
        return data["data"]

    def authorize(self, address: str, address_encoded: str, signature: str) -> str:
        data = self._request(
            "POST",
            "/auth/sonic/authorize",
            json={
                "address": address,
                "address_encoded": address_encoded,
                "signature": signature,
            },
        )
        return data["data"]["token"]

    def login(self, keypair: Keypair) -> Optional[str]:
        address = str(keypair.pubkey())
        try:
            challenge = self.get_challenge(address)
            token = self.authorize(
                address,
                encoded_public_key(keypair),
                sign_message(keypair, challenge),
            )
            self.token_manager.token = token
            return token
        except API_FAILURES as e:
            error_log(f"Error fetching token for {short_address(address)}: {describe_error(e)}")
            return None

    def get_profile(self, token: str) -> Optional[dict]:
        try:
            profile = self._request("GET", "/user/rewards/info", token=token)["data"]
            if not isinstance(profile, dict):
                raise TypeError(f"unexpected profile payload: {profile!r}")
            return profile
        except API_FAILURES as e:
            error_log(f"Error fetching profile: {describe_error(e)}")
            return None

    def fetch_daily(self, token: str) -> Optional[int]:
        try:
            data = self._request("GET", "/user/transactions/state/daily", token=token)
            return data["data"]["total_transactions"]
        except API_FAILURES as e:
            error_log(f"Error in daily fetching: {describe_error(e)}")
            return None

    def claim_stage(self, token: str, stage: int) -> dict:
        data = self._request(
            "POST", "/user/transactions/rewards/claim", token=token, json={"stage": stage}
        )
        return data["data"]

    def build_check_in_tx(self, token: str) -> str:
        return self._request("GET", "/user/check-in/transaction", token=token)["data"]["hash"]

    def check_in(self, token: str, signature: str) -> dict:
        return self._request("POST", "/user/check-in", token=token, json={"hash": signature})

    def build_mystery_box_tx(self, token: str) -> str:
        data = self._request("GET", "/user/rewards/mystery-box/build-tx", token=token)
        return data["data"]["hash"]

    def open_mystery_box(self, token: str, signature: str) -> dict:
        return self._request(
            "POST", "/user/rewards/mystery-box/open", token=token, json={"hash": signature}
        )
