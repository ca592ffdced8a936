# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    Base client and transport for node connections
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

from regtestmultisig.main import *
from regtestmultisig.networks import Network

_logger = logging.getLogger(__name__)


class ClientError(Exception):
    def __init__(self, msg=''):
        self.msg = msg
        _logger.info(msg)

    def __str__(self):
        return self.msg


class RpcError(ClientError):
    """
    A single node command failed. The method name and the error output of the node are available as attributes
    """

    def __init__(self, method, stderr=''):
        self.method = method
        self.stderr = stderr.strip() if isinstance(stderr, str) else str(stderr)
        super(RpcError, self).__init__("RPC command '%s' failed: %s" % (method, self.stderr))


class NodeUnavailable(ClientError):
    pass


class WalletProvisionError(ClientError):
    pass


class BaseTransport(object):
    """
    Executes commands on a node and returns the output as text, formatted the same way as bitcoin-cli prints
    results: strings as plain text and all other values as JSON. Raises RpcError if a command fails.
    """

    def __init__(self, network=DEFAULT_NETWORK, host=DEFAULT_RPC_HOST, port=None, rpcuser=DEFAULT_RPC_USER,
                 rpcpassword=DEFAULT_RPC_PASSWORD, timeout=TIMEOUT_REQUESTS):
        self.network = Network(network)
        self.host = host
        self.port = port or DEFAULT_RPC_PORT or self.network.rpc_port
        self.rpcuser = rpcuser
        self.rpcpassword = rpcpassword
        self.timeout = timeout

    def __repr__(self):
        return "<%s(%s:%s, network=%s)>" % (self.__class__.__name__, self.host, self.port, self.network.name)

    def execute(self, method, params=None, wallet=None):
        """
        Execute a node command

        :param method: RPC method name, i.e. getblockchaininfo
        :type method: str
        :param params: List of parameters
        :type params: list
        :param wallet: Name of wallet to use for wallet commands. Leave empty for node commands
        :type wallet: str

        :return str: Command output
        """
        raise NotImplementedError
