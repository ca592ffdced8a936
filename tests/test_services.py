# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Unit Tests for node client and transports
#    © 2026 October - 1200 Web Development <http://1200wd.com/>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import json
import subprocess
import unittest
from decimal import Decimal
from unittest import mock

import requests

from regtestmultisig.services.bitcoind import *
from regtestmultisig.services.bitcoincli import cli_argument


class FakeTransport(BaseTransport):
    """
    Transport which returns prepared outputs or raises prepared errors, and records all commands
    """

    def __init__(self, responses=None):
        super(FakeTransport, self).__init__(network='regtest')
        self.responses = responses or {}
        self.calls = []

    def execute(self, method, params=None, wallet=None):
        self.calls.append((method, params, wallet))
        response = self.responses.get(method, '')
        if isinstance(response, list):
            response = response.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def completed(returncode=0, stdout='', stderr=''):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestBitcoindClientCall(unittest.TestCase):

    def test_call_json_result(self):
        transport = FakeTransport({'getblockchaininfo': '{\n  "chain": "regtest",\n  "blocks": 0\n}\n'})
        client = BitcoindClient(transport)
        self.assertEqual({'chain': 'regtest', 'blocks': 0}, client.call('getblockchaininfo'))

    def test_call_json_scalar_result(self):
        client = BitcoindClient(FakeTransport({'getblockcount': '101\n'}))
        self.assertEqual(101, client.call('getblockcount'))

    def test_call_text_result(self):
        client = BitcoindClient(FakeTransport({'getnewaddress': 'bcrt1qexampleaddress\n'}))
        self.assertEqual('bcrt1qexampleaddress', client.call('getnewaddress'))

    def test_call_text_result_not_json_decoded(self):
        txid = '1' * 64
        client = BitcoindClient(FakeTransport({'sendtoaddress': txid + '\n'}))
        self.assertEqual(txid, client.call('sendtoaddress', ['bcrt1qexampleaddress', 10]))

    def test_call_empty_json_result(self):
        client = BitcoindClient(FakeTransport({'settxfee': ''}))
        self.assertIsNone(client.call('settxfee', [0.0001]))

    def test_call_unknown_method_defaults_to_json(self):
        client = BitcoindClient(FakeTransport({'getmempoolinfo': '{"size": 0}'}))
        self.assertEqual({'size': 0}, client.call('getmempoolinfo'))
        self.assertEqual(RESULT_JSON, RPC_RESULT_TYPES.get('getmempoolinfo', RESULT_JSON))

    def test_call_result_type_override(self):
        client = BitcoindClient(FakeTransport({'getmempoolinfo': '{"size": 0}'}))
        self.assertEqual('{"size": 0}', client.call('getmempoolinfo', result_type='text'))
        self.assertRaisesRegex(ClientError, "Unknown result type 'xml'", client.call, 'getmempoolinfo',
                               result_type='xml')

    def test_call_invalid_json(self):
        client = BitcoindClient(FakeTransport({'getblockchaininfo': 'error: not json'}))
        try:
            client.call('getblockchaininfo')
        except RpcError as e:
            self.assertEqual('getblockchaininfo', e.method)
            self.assertIn("Could not decode result as json", e.stderr)
        else:
            self.fail("RpcError not raised")

    def test_call_wallet_routing(self):
        transport = FakeTransport({'getnewaddress': 'bcrt1qexampleaddress'})
        client = BitcoindClient(transport, wallet_name='test_wallet')
        client.call('getblockchaininfo')
        client.call('getnewaddress')
        client.call('createwallet', ['other', False, False])
        self.assertEqual([('getblockchaininfo', [], None),
                          ('getnewaddress', [], 'test_wallet'),
                          ('createwallet', ['other', False, False], None)], transport.calls)

    def test_call_transport_error(self):
        client = BitcoindClient(FakeTransport({'getbalance': RpcError('getbalance', 'No wallet is loaded')}))
        self.assertRaisesRegex(RpcError, "RPC command 'getbalance' failed: No wallet is loaded", client.call,
                               'getbalance')

    def test_result_types_table(self):
        for method in ['getnewaddress', 'sendtoaddress', 'getbestblockhash', 'getblockhash']:
            self.assertEqual(RESULT_TEXT, RPC_RESULT_TYPES[method])
        for method in ['getblockchaininfo', 'createwallet', 'loadwallet', 'generatetoaddress', 'getbalance']:
            self.assertEqual(RESULT_JSON, RPC_RESULT_TYPES[method])


class TestBitcoindClientWaitReady(unittest.TestCase):

    def test_wait_ready_first_attempt(self):
        sleeps = []
        client = BitcoindClient(FakeTransport({'getblockchaininfo': '{"chain": "regtest", "blocks": 5}'}),
                                sleep=sleeps.append)
        self.assertEqual({'chain': 'regtest', 'blocks': 5}, client.wait_ready(3, 0.5))
        self.assertEqual([], sleeps)

    def test_wait_ready_retries(self):
        sleeps = []
        error = RpcError('getblockchaininfo', 'Could not connect to the server 127.0.0.1:18443')
        transport = FakeTransport({'getblockchaininfo': [error, error, '{"chain": "regtest"}']})
        client = BitcoindClient(transport, sleep=sleeps.append)
        self.assertEqual({'chain': 'regtest'}, client.wait_ready(5, 0.25))
        self.assertEqual([0.25, 0.25], sleeps)
        self.assertEqual(3, len(transport.calls))

    def test_wait_ready_unavailable(self):
        sleeps = []
        error = RpcError('getblockchaininfo', 'Could not connect to the server 127.0.0.1:18443')
        transport = FakeTransport({'getblockchaininfo': [error] * 4})
        client = BitcoindClient(transport, sleep=sleeps.append)
        self.assertRaisesRegex(NodeUnavailable, "Could not connect to bitcoind after 4 attempts", client.wait_ready,
                               4, 1)
        self.assertEqual(4, len(transport.calls))
        self.assertEqual([1, 1, 1], sleeps)

    def test_wait_ready_invalid_attempts(self):
        client = BitcoindClient(FakeTransport(), sleep=lambda s: None)
        self.assertRaises(ValueError, client.wait_ready, 0, 1)


class TestBitcoindClientWallet(unittest.TestCase):

    def test_create_wallet(self):
        transport = FakeTransport({'createwallet': '{"name": "w1", "warning": ""}'})
        client = BitcoindClient(transport)
        handle = client.create_or_load_wallet('w1')
        self.assertEqual('w1', handle.name)
        self.assertTrue(handle.created)
        self.assertEqual('w1', client.wallet_name)
        self.assertEqual([('createwallet', ['w1', False, False], None)], transport.calls)

    def test_load_existing_wallet(self):
        exists = RpcError('createwallet', 'error code: -4\nerror message:\nWallet file verification failed. '
                                          'Failed to create database path \'/data/regtest/wallets/w1\'. Database '
                                          'already exists.')
        transport = FakeTransport({'createwallet': exists, 'loadwallet': '{"name": "w1", "warning": ""}'})
        client = BitcoindClient(transport)
        handle = client.create_or_load_wallet('w1')
        self.assertFalse(handle.created)
        self.assertEqual(['createwallet', 'loadwallet'], [c[0] for c in transport.calls])
        self.assertEqual('w1', client.wallet_name)

    def test_wallet_already_loaded(self):
        exists = RpcError('createwallet', 'error message:\nWallet "w1" already exists.')
        loaded = RpcError('loadwallet', 'error code: -35\nerror message:\nWallet "w1" is already loaded.')
        transport = FakeTransport({'createwallet': exists, 'loadwallet': loaded})
        client = BitcoindClient(transport)
        handle = client.create_or_load_wallet('w1')
        self.assertEqual(WalletHandle('w1'), handle)
        self.assertFalse(handle.created)
        self.assertEqual('w1', client.wallet_name)

    def test_wallet_provisioning_idempotent(self):
        exists = RpcError('createwallet', 'Database already exists.')
        loaded = RpcError('loadwallet', 'Wallet "w1" is already loaded.')
        transport = FakeTransport({'createwallet': ['{"name": "w1"}', exists, exists],
                                   'loadwallet': ['{"name": "w1"}', loaded]})
        client = BitcoindClient(transport)
        handles = [client.create_or_load_wallet('w1') for _ in range(3)]
        self.assertEqual([True, False, False], [h.created for h in handles])
        self.assertEqual(1, len(set(handles)))

    def test_create_wallet_other_error(self):
        error = RpcError('createwallet', 'Could not connect to the server')
        client = BitcoindClient(FakeTransport({'createwallet': error}))
        try:
            client.create_or_load_wallet('w1')
        except WalletProvisionError as e:
            self.assertIs(error, e.__cause__)
            self.assertIn("Failed to create wallet w1", str(e))
        else:
            self.fail("WalletProvisionError not raised")
        self.assertIsNone(client.wallet_name)

    def test_load_wallet_other_error(self):
        exists = RpcError('createwallet', 'Database already exists.')
        corrupt = RpcError('loadwallet', 'Wallet file verification failed: corrupt')
        client = BitcoindClient(FakeTransport({'createwallet': exists, 'loadwallet': corrupt}))
        self.assertRaisesRegex(WalletProvisionError, "Failed to load wallet w1", client.create_or_load_wallet, 'w1')


class TestBitcoinCliTransport(unittest.TestCase):

    def setUp(self):
        self.transport = BitcoinCliTransport(cli_path='/usr/bin/bitcoin-cli', network='regtest', rpcuser='user',
                                             rpcpassword='pass')

    def test_cli_command(self):
        cmd = self.transport.command('sendtoaddress', ['bcrt1qexampleaddress', Decimal('1.5')], wallet='w1')
        self.assertEqual(['/usr/bin/bitcoin-cli', '-regtest', '-rpcconnect=127.0.0.1', '-rpcport=18443',
                          '-rpcuser=user', '-rpcpassword=pass', '-rpcwallet=w1', 'sendtoaddress',
                          'bcrt1qexampleaddress', '1.5'], cmd)

    def test_cli_command_json_parameters(self):
        cmd = self.transport.command('createwallet', ['w1', False, False])
        self.assertEqual(['createwallet', 'w1', 'false', 'false'], cmd[-4:])
        self.assertNotIn('-rpcwallet=', ' '.join(cmd))

    def test_cli_argument(self):
        self.assertEqual('101', cli_argument(101))
        self.assertEqual('["a", 1]', cli_argument(['a', 1]))
        self.assertEqual('{"k": true}', cli_argument({'k': True}))
        self.assertEqual('0.1', cli_argument(Decimal('0.1')))

    def test_cli_execute(self):
        with mock.patch('regtestmultisig.services.bitcoincli.subprocess.run',
                        return_value=completed(stdout='{\n  "chain": "regtest"\n}\n')) as run:
            self.assertEqual('{\n  "chain": "regtest"\n}\n', self.transport.execute('getblockchaininfo'))
        args, kwargs = run.call_args
        self.assertEqual('getblockchaininfo', args[0][-1])
        self.assertEqual(subprocess.PIPE, kwargs['stdout'])
        self.assertEqual(subprocess.PIPE, kwargs['stderr'])

    def test_cli_execute_error(self):
        with mock.patch('regtestmultisig.services.bitcoincli.subprocess.run',
                        return_value=completed(1, stderr='error: Could not connect to the server 127.0.0.1:18443\n')):
            try:
                self.transport.execute('getblockchaininfo')
            except RpcError as e:
                self.assertEqual('getblockchaininfo', e.method)
                self.assertEqual('error: Could not connect to the server 127.0.0.1:18443', e.stderr)
            else:
                self.fail("RpcError not raised")

    def test_cli_program_not_found(self):
        with mock.patch('regtestmultisig.services.bitcoincli.subprocess.run',
                        side_effect=FileNotFoundError("No such file or directory")):
            self.assertRaisesRegex(RpcError, "Could not execute /usr/bin/bitcoin-cli", self.transport.execute,
                                   'getblockchaininfo')

    def test_cli_timeout(self):
        with mock.patch('regtestmultisig.services.bitcoincli.subprocess.run',
                        side_effect=subprocess.TimeoutExpired('bitcoin-cli', 30)):
            self.assertRaises(RpcError, self.transport.execute, 'getblockchaininfo')

    def test_cli_port_from_network(self):
        self.assertEqual(18332, BitcoinCliTransport(network='testnet').port)
        self.assertEqual(18500, BitcoinCliTransport(network='regtest', port=18500).port)


class TestJsonRpcTransport(unittest.TestCase):

    def setUp(self):
        self.transport = JsonRpcTransport(network='regtest', host='localhost', rpcuser='user', rpcpassword='pass')

    @staticmethod
    def response(data, status_code=200):
        resp = mock.Mock()
        resp.status_code = status_code
        resp.text = data if isinstance(data, str) else json.dumps(data)
        return resp

    def test_jsonrpc_urls(self):
        self.assertEqual('http://localhost:18443/', self.transport.url())
        self.assertEqual('http://localhost:18443/wallet/my%20wallet', self.transport.url('my wallet'))

    def test_jsonrpc_execute_string_result(self):
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        return_value=self.response({'result': 'bcrt1qexampleaddress', 'error': None, 'id': 1})) \
                as post:
            self.assertEqual('bcrt1qexampleaddress', self.transport.execute('getnewaddress', wallet='w1'))
        args, kwargs = post.call_args
        self.assertEqual('http://localhost:18443/wallet/w1', args[0])
        self.assertEqual(('user', 'pass'), kwargs['auth'])
        payload = json.loads(kwargs['data'])
        self.assertEqual('getnewaddress', payload['method'])
        self.assertEqual([], payload['params'])

    def test_jsonrpc_execute_json_result(self):
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        return_value=self.response({'result': {'chain': 'regtest'}, 'error': None, 'id': 1})):
            output = self.transport.execute('getblockchaininfo')
        self.assertEqual({'chain': 'regtest'}, json.loads(output))

    def test_jsonrpc_execute_null_result(self):
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        return_value=self.response({'result': None, 'error': None, 'id': 1})):
            self.assertEqual('', self.transport.execute('settxfee', [0.0001]))

    def test_jsonrpc_decimal_params(self):
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        return_value=self.response({'result': 'ab' * 32, 'error': None, 'id': 1})) as post:
            self.transport.execute('sendtoaddress', ['bcrt1qexampleaddress', Decimal('1.5')])
        self.assertEqual(['bcrt1qexampleaddress', 1.5], json.loads(post.call_args[1]['data'])['params'])

    def test_jsonrpc_rpc_error(self):
        error = {'code': -4, 'message': 'Wallet "w1" already exists.'}
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        return_value=self.response({'result': None, 'error': error, 'id': 1}, 500)):
            self.assertRaisesRegex(RpcError, 'already exists', self.transport.execute, 'createwallet', ['w1'])

    def test_jsonrpc_unauthorized(self):
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post', return_value=self.response('', 401)):
            self.assertRaisesRegex(RpcError, "Authorization failed", self.transport.execute, 'getblockchaininfo')

    def test_jsonrpc_connection_error(self):
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        side_effect=requests.exceptions.ConnectionError("Connection refused")):
            self.assertRaisesRegex(RpcError, "Could not connect to http://localhost:18443", self.transport.execute,
                                   'getblockchaininfo')

    def test_jsonrpc_invalid_response(self):
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        return_value=self.response('<html>Bad gateway</html>', 502)):
            self.assertRaisesRegex(RpcError, r"Invalid response \[502\]", self.transport.execute, 'getblockchaininfo')

    def test_jsonrpc_through_client(self):
        client = BitcoindClient(self.transport, wallet_name='w1')
        with mock.patch('regtestmultisig.services.jsonrpc.requests.post',
                        return_value=self.response({'result': 101, 'error': None, 'id': 1})):
            self.assertEqual(101, client.call('getblockcount'))


class TestBitcoindClientSettings(unittest.TestCase):

    def test_from_settings_cli(self):
        client = BitcoindClient.from_settings(transport='cli', cli_path='/opt/bitcoin-cli', port=18500)
        self.assertIsInstance(client.transport, BitcoinCliTransport)
        self.assertEqual('/opt/bitcoin-cli', client.transport.cli_path)
        self.assertEqual(18500, client.transport.port)

    def test_from_settings_http(self):
        client = BitcoindClient.from_settings(transport='http', network='regtest', host='node')
        self.assertIsInstance(client.transport, JsonRpcTransport)
        self.assertEqual('http://node:18443', client.transport.base_url)

    def test_from_settings_unknown_transport(self):
        self.assertRaisesRegex(ClientError, "Unknown transport 'zmq'", BitcoindClient.from_settings,
                               transport='zmq')


if __name__ == '__main__':
    unittest.main()
