from sonic_odyssey import networks


def test_get_network_by_type():
    assert networks.get_network(1) is networks.DEVNET
    assert networks.get_network("2") is networks.TESTNET_V0
    assert networks.get_network(3) is networks.TESTNET_V1


def test_get_network_falls_back_to_testnet_v1():
    assert networks.get_network(None) is networks.TESTNET_V1
    assert networks.get_network(7) is networks.TESTNET_V1
    assert networks.get_network("abc") is networks.TESTNET_V1


def test_api_url_prefixes():
    base = "https://odyssey-api-beta.sonic.game/"
    assert networks.api_url(base, networks.DEVNET, "/user/check-in") == (
        "https://odyssey-api-beta.sonic.game/user/check-in"
    )
    assert networks.api_url(base, networks.TESTNET_V0, "/user/check-in") == (
        "https://odyssey-api-beta.sonic.game/testnet/user/check-in"
    )
    assert networks.api_url(base, networks.TESTNET_V1, "/user/check-in") == (
        "https://odyssey-api-beta.sonic.game/testnet-v1/user/check-in"
    )


def test_choose_network_interactively(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _: "1")
    assert networks.choose_network_interactively() is networks.DEVNET

    monkeypatch.setattr("builtins.input", lambda _: "")
    assert networks.choose_network_interactively() is networks.TESTNET_V1

    monkeypatch.setattr("builtins.input", lambda _: "9")
    assert networks.choose_network_interactively() is networks.TESTNET_V1


def test_resolve_network_uses_config(config, monkeypatch):
    def fail(_):
        raise AssertionError("should not prompt")

    monkeypatch.setattr("builtins.input", fail)
    config["network"]["type"] = 2
    assert networks.resolve_network(config) is networks.TESTNET_V0
