# -*- coding: utf-8 -*-
#
#    RegtestMultisig - Multisignature Regtest Bootstrap Tool
#    NETWORK class reader and parser
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

from regtestmultisig.config.networks import NETWORK_DEFINITIONS
from regtestmultisig.encoding import *


_logger = logging.getLogger(__name__)


class NetworkError(Exception):
    """
    Network Exception class
    """
    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


def network_defined(network):
    """
    Is network defined?

    >>> network_defined('regtest')
    True
    >>> network_defined('litecoin')
    False

    :param network: Network name
    :type network: str

    :return bool:
    """
    return network in NETWORK_DEFINITIONS


def network_by_hdkey_prefix(prefix):
    """
    Return all networks which use this extended key version prefix

    >>> network_by_hdkey_prefix(bytes.fromhex('0488b21e'))
    ['bitcoin']

    :param prefix: 4 byte version prefix of extended key
    :type prefix: bytes

    :return list: Of network name strings
    """
    prefix = prefix.hex().upper()
    return [nw for nw, nv in NETWORK_DEFINITIONS.items()
            if prefix in [nv['prefix_hdkey_private'], nv['prefix_hdkey_public']]]


class Network(object):
    """
    Network class with network definitions used for key serialization, addresses and node connections.
    """

    def __init__(self, network_name=DEFAULT_NETWORK):
        if isinstance(network_name, Network):
            network_name = network_name.name
        if not network_defined(network_name):
            raise NetworkError("Network %s not found in network definitions" % network_name)
        self.name = network_name
        definition = NETWORK_DEFINITIONS[network_name]
        self.description = definition['description']
        self.currency_code = definition['currency_code']
        self.prefix_hdkey_private = bytes.fromhex(definition['prefix_hdkey_private'])
        self.prefix_hdkey_public = bytes.fromhex(definition['prefix_hdkey_public'])
        self.prefix_bech32 = definition['prefix_bech32']
        self.bip44_cointype = definition['bip44_cointype']
        self.rpc_port = definition['rpc_port']
        self.cli_flag = definition['cli_flag']

    def __repr__(self):
        return "<Network: %s>" % self.name

    def __eq__(self, other):
        if isinstance(other, str):
            return self.name == other
        return isinstance(other, Network) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def wif_prefix(self, is_private=False):
        """
        Get extended key version prefix for this network

        >>> Network('regtest').wif_prefix()  # tpub
        b'\\x045\\x87\\xcf'

        :param is_private: Private or public key, default is False
        :type is_private: bool

        :return bytes:
        """
        return self.prefix_hdkey_private if is_private else self.prefix_hdkey_public
