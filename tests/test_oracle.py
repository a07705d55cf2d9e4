import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from ledgersig.constants import LSF_DISABLE_MASTER
from ledgersig.crypto import PrivateKey, Seed
from ledgersig.exceptions import APIError, OracleUnavailableError, ProviderError
from ledgersig.message import sign_message, verify_message_signature
from ledgersig.providers import ConnectionState, JsonRpcOracle

MASTER = Seed.from_json("masterpassphrase").get_key()
ACCOUNT = MASTER.address()
REGULAR = PrivateKey("77" * 32)
STRANGER = PrivateKey("88" * 32)


def make_app(accounts, requests):
    async def handler(request):
        body = await request.json()
        requests.append(body)
        method = body["method"]
        params = body["params"][0]
        
        if method == "ping":
            return web.json_response({"result": {"status": "success"}})
            
        if method == "account_info":
            if params["account"] == "rBroken":
                return web.json_response(
                    {"result": {"error": "invalidParams", "status": "error"}}
                )
            data = accounts.get(params["account"])
            if data is None:
                return web.json_response({"result": {
                    "account": params["account"],
                    "error": "actNotFound",
                    "error_message": "Account not found.",
                    "status": "error",
                }})
            return web.json_response({"result": {"account_data": data, "status": "success"}})
            
        return web.json_response({"result": {"error": "unknownCmd", "status": "error"}})
        
    app = web.Application()
    app.router.add_post("/", handler)
    return app


def run_with_oracle(accounts, action):
    requests = []
    
    async def main():
        server = TestServer(make_app(accounts, requests))
        await server.start_server()
        try:
            oracle = JsonRpcOracle(endpoint=str(server.make_url("/")))
            async with oracle:
                assert oracle.state is ConnectionState.ONLINE
                return await action(oracle)
        finally:
            await server.close()
            
    return asyncio.run(main()), requests


def check(key, account):
    async def action(oracle):
        return await oracle.is_key_active(key.public_key().hex(), account)
    return action


def test_master_key_active():
    accounts = {ACCOUNT: {"Account": ACCOUNT, "Flags": 0}}
    result, requests = run_with_oracle(accounts, check(MASTER, ACCOUNT))
    assert result is True
    assert requests[0]["method"] == "ping"
    assert requests[1] == {
        "method": "account_info",
        "params": [{"account": ACCOUNT, "ledger_index": "validated"}],
    }


def test_disabled_master_key_and_regular_key():
    accounts = {ACCOUNT: {
        "Account": ACCOUNT,
        "Flags": LSF_DISABLE_MASTER,
        "RegularKey": REGULAR.address(),
    }}
    assert run_with_oracle(accounts, check(MASTER, ACCOUNT))[0] is False
    assert run_with_oracle(accounts, check(REGULAR, ACCOUNT))[0] is True
    assert run_with_oracle(accounts, check(STRANGER, ACCOUNT))[0] is False


def test_unfunded_account_accepts_only_master_key():
    assert run_with_oracle({}, check(MASTER, ACCOUNT))[0] is True
    assert run_with_oracle({}, check(STRANGER, ACCOUNT))[0] is False


def test_server_errors_propagate():
    with pytest.raises(APIError) as excinfo:
        run_with_oracle({}, check(MASTER, "rBroken"))
    assert excinfo.value.code == "invalidParams"


def test_malformed_flags_raise_provider_error():
    accounts = {ACCOUNT: {"Account": ACCOUNT, "Flags": "bad"}}
    with pytest.raises(ProviderError):
        run_with_oracle(accounts, check(MASTER, ACCOUNT))


def test_verify_against_server():
    accounts = {ACCOUNT: {"Account": ACCOUNT, "Flags": 0}}
    signature = sign_message("hello", "masterpassphrase")
    
    async def action(oracle):
        return await verify_message_signature(
            {"message": "hello", "account": ACCOUNT, "signature": signature}, oracle
        )
        
    (error, is_valid), _ = run_with_oracle(accounts, action)
    assert error is None
    assert is_valid is True


def test_request_requires_connection():
    oracle = JsonRpcOracle(endpoint="http://127.0.0.1:1")
    assert oracle.state is ConnectionState.OFFLINE
    assert not oracle.is_connected
    with pytest.raises(OracleUnavailableError):
        asyncio.run(oracle.request("ping"))
