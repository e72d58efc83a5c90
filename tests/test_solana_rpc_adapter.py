import unittest
from unittest import mock

import requests

from linker.adapters.chain.solana_rpc_adapter import SolanaRpcAdapter
from linker.core.errors import DataSourceError, RateLimitError
from linker.core.models import RpcConfig


def _resp(payload=None, status=200, headers=None):
    r = mock.Mock()
    r.status_code = status
    r.headers = headers or {}
    r.json.return_value = payload
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status}")
    else:
        r.raise_for_status.return_value = None
    return r


def _sig_page(*sigs):
    return {"jsonrpc": "2.0", "id": 1, "result": [
        {"signature": s, "slot": 100, "blockTime": 1700000000, "err": None} for s in sigs
    ]}


@mock.patch("linker.adapters.chain.solana_rpc_adapter.backoff_sleep")
class SolanaRpcAdapterTests(unittest.TestCase):
    def _make(self, responses, **cfg):
        session = mock.Mock()
        session.post.side_effect = responses
        defaults = dict(endpoint="http://rpc.test", requests_per_sec=10_000, max_retries=3)
        defaults.update(cfg)
        return SolanaRpcAdapter(RpcConfig(**defaults), session=session), session

    def test_signatures_paginate_with_before(self, _sleep) -> None:
        adapter, session = self._make(
            [_resp(_sig_page("a", "b")), _resp(_sig_page("c", "d")), _resp(_sig_page("e"))],
            page_size=2,
        )

        sigs = [s.signature for s in adapter.iter_signatures("Addr", 10)]

        self.assertEqual(sigs, ["a", "b", "c", "d", "e"])
        bodies = [c.kwargs["json"] for c in session.post.call_args_list]
        self.assertEqual(bodies[0]["method"], "getSignaturesForAddress")
        self.assertNotIn("before", bodies[0]["params"][1])
        self.assertEqual(bodies[1]["params"][1]["before"], "b")
        self.assertEqual(bodies[2]["params"][1]["before"], "d")

    def test_signatures_dedupe_across_pages(self, _sleep) -> None:
        adapter, _ = self._make(
            [_resp(_sig_page("a", "b")), _resp(_sig_page("b", "c")), _resp(_sig_page())],
            page_size=2,
        )

        sigs = [s.signature for s in adapter.iter_signatures("Addr", 10)]

        self.assertEqual(sigs, ["a", "b", "c"])

    def test_signatures_stop_at_limit(self, _sleep) -> None:
        adapter, session = self._make([_resp(_sig_page("a", "b", "c"))], page_size=1000)

        sigs = [s.signature for s in adapter.iter_signatures("Addr", 3)]

        self.assertEqual(sigs, ["a", "b", "c"])
        self.assertEqual(session.post.call_count, 1)
        self.assertEqual(session.post.call_args.kwargs["json"]["params"][1]["limit"], 3)

    def test_transaction_participants_include_loaded_addresses(self, _sleep) -> None:
        payload = {"result": {
            "slot": 42,
            "blockTime": 1700000000,
            "transaction": {"message": {"accountKeys": ["Payer", "Dest", "Payer"]}},
            "meta": {"loadedAddresses": {"writable": ["Lw"], "readonly": ["Lr"]}},
        }}
        adapter, session = self._make([_resp(payload)])

        record = adapter.get_transaction("sig1")

        self.assertEqual(record.participants, ("Payer", "Dest", "Lw", "Lr"))
        self.assertEqual(record.slot, 42)
        self.assertEqual(record.fee_payer, "Payer")
        params = session.post.call_args.kwargs["json"]["params"]
        self.assertEqual(params[0], "sig1")
        self.assertEqual(params[1]["maxSupportedTransactionVersion"], 0)

    def test_parsed_account_keys_and_cache(self, _sleep) -> None:
        payload = {"result": {"transaction": {"message": {"accountKeys": [
            {"pubkey": "P", "signer": True}, {"pubkey": "Q", "signer": False},
        ]}}}}
        adapter, session = self._make([_resp(payload)])

        first = adapter.get_transaction("sig1")
        second = adapter.get_transaction("sig1")

        self.assertEqual(first.participants, ("P", "Q"))
        self.assertIs(first, second)
        self.assertEqual(session.post.call_count, 1)

    def test_missing_transaction_is_none(self, _sleep) -> None:
        adapter, _ = self._make([_resp({"result": None})])

        self.assertIsNone(adapter.get_transaction("gone"))

    def test_rate_limit_is_retried(self, sleep) -> None:
        adapter, session = self._make([
            _resp(None, status=429, headers={"Retry-After": "2"}),
            _resp({"error": {"code": -32005, "message": "Node is behind"}}),
            _resp({"result": None}),
        ])

        self.assertIsNone(adapter.get_transaction("sig"))
        self.assertEqual(session.post.call_count, 3)
        self.assertEqual(sleep.call_args_list[0], mock.call(0, retry_after=2.0))

    def test_network_errors_exhaust_retries(self, _sleep) -> None:
        adapter, session = self._make([requests.ConnectionError("down")] * 3)

        with self.assertRaises(DataSourceError):
            adapter.get_transaction("sig")
        self.assertEqual(session.post.call_count, 3)

    def test_rpc_error_is_not_retried(self, _sleep) -> None:
        adapter, session = self._make([_resp({"error": {"code": -32602, "message": "Invalid param"}})])

        with self.assertRaises(DataSourceError):
            list(adapter.iter_signatures("bad", 10))
        self.assertEqual(session.post.call_count, 1)


    def test_string_error_body_is_a_data_source_error(self, _sleep) -> None:
        adapter, session = self._make([_resp({"error": "upstream unavailable"})])

        with self.assertRaises(DataSourceError) as ctx:
            adapter.get_transaction("sig")
        self.assertIn("upstream unavailable", str(ctx.exception))
        self.assertEqual(session.post.call_count, 1)

    def test_throttled_until_out_of_retries(self, _sleep) -> None:
        adapter, session = self._make([_resp(None, status=429)] * 3)

        with self.assertRaises(RateLimitError):
            adapter.get_transaction("sig")
        self.assertEqual(session.post.call_count, 3)


if __name__ == "__main__":
    unittest.main()
