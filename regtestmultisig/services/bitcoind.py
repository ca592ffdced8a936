# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Client for bitcoind deamon
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
import time
from regtestmultisig.services.baseclient import *
from regtestmultisig.services.bitcoincli import BitcoinCliTransport
from regtestmultisig.services.jsonrpc import JsonRpcTransport


PROVIDERNAME = 'bitcoind'

_logger = logging.getLogger(__name__)

RESULT_JSON = 'json'
RESULT_TEXT = 'text'

# Expected result type per RPC method. Text results are returned as plain string, json results are decoded.
# Methods not listed here are decoded as json unless a result type is specified when calling.
RPC_RESULT_TYPES = {
    'getblockchaininfo': RESULT_JSON,
    'getblockcount': RESULT_JSON,
    'getbestblockhash': RESULT_TEXT,
    'getblockhash': RESULT_TEXT,
    'createwallet': RESULT_JSON,
    'loadwallet': RESULT_JSON,
    'unloadwallet': RESULT_JSON,
    'listwallets': RESULT_JSON,
    'getwalletinfo': RESULT_JSON,
    'getnewaddress': RESULT_TEXT,
    'getaddressinfo': RESULT_JSON,
    'generatetoaddress': RESULT_JSON,
    'sendtoaddress': RESULT_TEXT,
    'gettransaction': RESULT_JSON,
    'getrawtransaction': RESULT_TEXT,
    'getbalance': RESULT_JSON,
    'getbalances': RESULT_JSON,
    'listunspent': RESULT_JSON,
    'settxfee': RESULT_JSON,
}

# Commands which are sent to the node and not to a specific wallet
NODE_METHODS = ['getblockchaininfo', 'getblockcount', 'getbestblockhash', 'getblockhash', 'createwallet',
                'loadwallet', 'unloadwallet', 'listwallets', 'getrawtransaction']

TRANSPORTS = {
    'cli': BitcoinCliTransport,
    'http': JsonRpcTransport,
}

WALLET_EXISTS_MESSAGES = ['already exists']
WALLET_LOADED_MESSAGES = ['already loaded']


class WalletHandle(object):
    """
    Reference to a wallet on the node
    """

    def __init__(self, name, created=False):
        self.name = name
        self.created = created

    def __repr__(self):
        return "<WalletHandle(%s, %s)>" % (self.name, 'created' if self.created else 'loaded')

    def __eq__(self, other):
        return isinstance(other, WalletHandle) and self.name == other.name

    def __hash__(self):
        return hash(self.name)


class BitcoindClient(object):
    """
    Class to interact with bitcoind, the Bitcoin deamon. All commands are executed synchronously with the
    transport provided.
    """

    @staticmethod
    def from_settings(network=DEFAULT_NETWORK, host=DEFAULT_RPC_HOST, port=None, rpcuser=DEFAULT_RPC_USER,
                      rpcpassword=DEFAULT_RPC_PASSWORD, transport=DEFAULT_TRANSPORT, cli_path=BITCOIN_CLI_PATH,
                      timeout=TIMEOUT_REQUESTS):
        """
        Create client and transport from connection settings

        :param network: Network name, default is regtest
        :type network: str
        :param host: Hostname or IP address of node
        :type host: str
        :param port: RPC port, leave empty to use default port of network
        :type port: int
        :param rpcuser: RPC username
        :type rpcuser: str
        :param rpcpassword: RPC password
        :type rpcpassword: str
        :param transport: Transport to use: 'cli' to run bitcoin-cli or 'http' to use JSON-RPC
        :type transport: str
        :param cli_path: Path to bitcoin-cli program, only used by the cli transport
        :type cli_path: str
        :param timeout: Timeout in seconds for a single command
        :type timeout: int

        :return BitcoindClient:
        """
        if transport not in TRANSPORTS:
            raise ClientError("Unknown transport '%s', use one of %s" % (transport, list(TRANSPORTS.keys())))
        kwargs = dict(network=network, host=host, port=port, rpcuser=rpcuser, rpcpassword=rpcpassword,
                      timeout=timeout)
        if transport == 'cli':
            kwargs['cli_path'] = cli_path
        return BitcoindClient(TRANSPORTS[transport](**kwargs))

    def __init__(self, transport, wallet_name=None, sleep=time.sleep):
        """
        Open connection to bitcoin node

        :param transport: Transport object which executes the commands
        :type transport: BaseTransport
        :param wallet_name: Name of wallet to use for wallet commands. Set by create_or_load_wallet
        :type wallet_name: str
        :param sleep: Function used to wait between connection attempts
        :type sleep: function
        """
        self.transport = transport
        self.wallet_name = wallet_name
        self.provider = PROVIDERNAME
        self._sleep = sleep

    def __repr__(self):
        return "<BitcoindClient(%s, wallet=%s)>" % (self.transport, self.wallet_name)

    def call(self, method, params=None, result_type=None):
        """
        Execute a single RPC command and decode the result according to the result type of this method

        :param method: RPC method name
        :type method: str
        :param params: List of parameters
        :type params: list
        :param result_type: Override result type: 'json' or 'text'. Default is type of method in RPC_RESULT_TYPES
        :type result_type: str

        :return str, int, float, dict, list, None:
        """
        if result_type is None:
            result_type = RPC_RESULT_TYPES.get(method, RESULT_JSON)
        if result_type not in [RESULT_JSON, RESULT_TEXT]:
            raise ClientError("Unknown result type '%s' for method %s" % (result_type, method))
        wallet = None if method in NODE_METHODS else self.wallet_name
        output = self.transport.execute(method, params or [], wallet=wallet)
        return self._decode(method, output, result_type)

    @staticmethod
    def _decode(method, output, result_type):
        output = output.strip()
        if result_type == RESULT_TEXT:
            return output
        if not output:
            return None
        try:
            return json.loads(output)
        except ValueError as e:
            raise RpcError(method, "Could not decode result as json: %s" % e)

    def wait_ready(self, max_attempts=NODE_MAX_ATTEMPTS, poll_interval=NODE_POLL_INTERVAL):
        """
        Wait until node accepts commands. Polls node with getblockchaininfo and waits poll_interval seconds
        between attempts.

        :param max_attempts: Maximum number of attempts before raising NodeUnavailable
        :type max_attempts: int
        :param poll_interval: Seconds between attempts
        :type poll_interval: float

        :return dict: Blockchain info of node
        """
        if max_attempts < 1:
            raise ValueError("Number of attempts must be 1 or more")
        last_error = None
        for attempt in range(1, max_attempts + 1):
            try:
                info = self.call('getblockchaininfo')
            except RpcError as e:
                last_error = e
                _logger.info("Waiting for bitcoind to start, attempt %d of %d" % (attempt, max_attempts))
                if attempt < max_attempts:
                    self._sleep(poll_interval)
            else:
                _logger.info("Connected to bitcoind, chain %s at height %s" %
                             (info.get('chain') if info else '', info.get('blocks') if info else ''))
                return info
        raise NodeUnavailable("Could not connect to bitcoind after %d attempts: %s" %
                              (max_attempts, last_error.stderr if last_error else ''))

    def create_or_load_wallet(self, name):
        """
        Create wallet with private keys enabled on the node, or load it if it already exists. If the wallet is
        already loaded it is used as is, so this method can be called on every run.

        :param name: Wallet name
        :type name: str

        :return WalletHandle:
        """
        created = False
        try:
            self.call('createwallet', [name, False, False])
            created = True
            _logger.info("Created wallet: %s" % name)
        except RpcError as e:
            if not any(m in e.stderr.lower() for m in WALLET_EXISTS_MESSAGES):
                raise WalletProvisionError("Failed to create wallet %s: %s" % (name, e.stderr)) from e
            _logger.info("Wallet %s exists, loading..." % name)
            try:
                self.call('loadwallet', [name])
                _logger.info("Loaded wallet: %s" % name)
            except RpcError as le:
                if not any(m in le.stderr.lower() for m in WALLET_LOADED_MESSAGES):
                    raise WalletProvisionError("Failed to load wallet %s: %s" % (name, le.stderr)) from le
                _logger.info("Wallet %s is already loaded" % name)
        self.wallet_name = name
        return WalletHandle(name, created)
